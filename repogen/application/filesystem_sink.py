"""Filesystem sink: every write of a run goes through here.

All paths are relative to the output root and are rejected if they resolve
outside it. Any OS-level failure is raised as SinkError so the orchestrator
can classify it as a filesystem error for the current step.
"""

import logging
import shutil
from pathlib import Path

from repogen.domain.errors import SinkError
from repogen.domain.validation.path_validator import PathValidationError, PathValidator

logger = logging.getLogger(__name__)


class FilesystemSink:
    """Thin wrapper over directory and file operations scoped beneath `root`."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def resolve(self, rel_path: str) -> Path:
        """Map a relative path to an absolute path under the root.

        Raises:
            SinkError: If the path is unsafe or escapes the root
        """
        try:
            normalized = PathValidator.validate_relative_file_path(rel_path)
            return PathValidator.validate_within_root(self.root / normalized, self.root)
        except PathValidationError as e:
            raise SinkError(f"Refusing path outside output root: {rel_path}", path=rel_path, cause=e) from e

    def ensure_dir(self, rel_dir: str | None = None) -> Path:
        """Create a directory (recursively) under the root; None means the root itself."""
        target = self.root if not rel_dir else self.resolve(rel_dir)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError("Failed to create directory", path=str(target), cause=e) from e
        return target

    def ensure_parent(self, rel_path: str) -> Path:
        """Create the parent directory of a file path under the root."""
        target = self.resolve(rel_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError("Failed to create directory", path=str(target.parent), cause=e) from e
        return target.parent

    def remove_all(self) -> bool:
        """Remove the root directory tree if present.

        Returns:
            True if something was removed
        """
        if not self.root.exists() and not self.root.is_symlink():
            return False
        try:
            if self.root.is_dir() and not self.root.is_symlink():
                shutil.rmtree(self.root)
            else:
                self.root.unlink()
        except OSError as e:
            raise SinkError("Failed to remove output root", path=str(self.root), cause=e) from e
        return True

    def reset(self) -> bool:
        """Destructively recreate the root as an empty directory.

        Returns:
            True if a previous tree was removed
        """
        removed = self.remove_all()
        if removed:
            logger.warning(f"Output root {self.root} already existed and was removed")
        self.ensure_dir()
        return removed

    def write_file(self, rel_path: str, content: str) -> Path:
        """Write UTF-8 text without newline translation, creating parent directories as needed."""
        target = self.resolve(rel_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            raise SinkError("Failed to write file", path=rel_path, cause=e) from e
        return target

    def read_file(self, rel_path: str) -> str:
        """Read UTF-8 text written under the root, line endings untouched."""
        target = self.resolve(rel_path)
        try:
            with target.open("r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SinkError("Failed to read file", path=rel_path, cause=e) from e

    def remove_file(self, rel_path: str) -> bool:
        """Delete one file under the root.

        Returns:
            True if the file existed
        """
        target = self.resolve(rel_path)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise SinkError("Failed to remove file", path=rel_path, cause=e) from e
        return True
