"""Domain-level exceptions for the repository generator."""


class ManifestError(Exception):
    """Raised when a manifest is unusable as input (fatal before any work begins)."""

    pass


class DuplicatePathError(ManifestError):
    """Raised when two FileSpecs in one manifest share the same path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Duplicate file path in manifest: '{path}'")


class InvalidPathError(ManifestError):
    """Raised when a manifest path is not a safe path relative to the project root."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid file path '{path}': {reason}")


class CircularDependencyError(ManifestError):
    """Raised when the dependency relation between manifest files has a cycle.

    Attributes:
        path: The path at which the cycle closed (revisited while still being visited)
        cycle: The dependency chain from `path` back to itself
    """

    def __init__(self, path: str, cycle: list[str] | None = None) -> None:
        self.path = path
        self.cycle = list(cycle or [])
        message = f"Circular dependency detected involving: {path}"
        if self.cycle:
            message += f" ({' -> '.join(self.cycle)})"
        super().__init__(message)


class ProviderError(Exception):
    """Raised when a provider fails (process exit, network, auth, timeout, etc.)."""

    pass


class ProviderTimeoutError(ProviderError):
    """Raised when a provider does not answer within the caller-supplied timeout."""

    def __init__(self, message: str, *, timeout: float | None = None) -> None:
        self.timeout = timeout
        super().__init__(message)


class SinkError(Exception):
    """Raised when a filesystem operation under the output root fails."""

    def __init__(self, message: str, *, path: str | None = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class ContextError(Exception):
    """Raised when a generation context entry would be rewritten."""

    pass
