"""Shared async subprocess execution for CLI-backed providers."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Coroutine, TypeVar

from repogen.domain.errors import ProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Drive a coroutine to completion from synchronous code.

    When the caller is already inside a running event loop (e.g. an async
    request handler), the coroutine runs on its own loop in a worker thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


@dataclass
class ProcessOutput:
    returncode: int
    stdout: str
    stderr: str


def run_process(
    argv: list[str],
    *,
    stdin: str | None = None,
    cwd: str | None = None,
    timeout: float | None = None,
) -> ProcessOutput:
    """Run a command to completion and capture its output.

    Uses run_sync() to wrap the async subprocess API in a sync interface.

    Raises:
        ProviderTimeoutError: If the process outlives `timeout` (it is killed)
        ProviderError: If the executable cannot be started
    """
    return run_sync(_run_process(argv, stdin=stdin, cwd=cwd, timeout=timeout))


async def _run_process(
    argv: list[str],
    *,
    stdin: str | None,
    cwd: str | None,
    timeout: float | None,
) -> ProcessOutput:
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except FileNotFoundError:
        raise ProviderError(f"Command not found: {argv[0]}")
    except OSError as e:
        raise ProviderError(f"Failed to start {argv[0]}: {e}") from e

    try:
        stdout_data, stderr_data = await asyncio.wait_for(
            process.communicate(stdin.encode("utf-8") if stdin is not None else None),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise ProviderTimeoutError(
            f"{argv[0]} timed out after {timeout}s. Consider increasing the timeout.",
            timeout=timeout,
        )

    stderr_str = stderr_data.decode("utf-8", errors="replace") if stderr_data else ""
    if stderr_str:
        logger.debug(f"{argv[0]} stderr: {stderr_str}")

    return ProcessOutput(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout_data.decode("utf-8", errors="replace") if stdout_data else "",
        stderr=stderr_str,
    )
