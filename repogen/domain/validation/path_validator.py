"""
Path validation utilities for the repository generator.

Provides shared security validation for:
- Manifest file paths (relative, no traversal)
- Output root containment
- Project name slugs used as output directory names

Used by the manifest model and the filesystem sink so that nothing is ever
written outside the designated output root.
"""

import re
from pathlib import Path, PurePosixPath


class PathValidationError(Exception):
    """Raised when path validation fails."""
    pass


class PathValidator:
    """Validates and sanitizes file paths and names."""

    # Windows drive prefix such as "C:" or "c:/"
    DRIVE_PATTERN = re.compile(r'^[a-zA-Z]:')

    # Characters dropped when slugging a project name
    SLUG_STRIP_PATTERN = re.compile(r'[^a-z0-9-]')
    WHITESPACE_PATTERN = re.compile(r'\s+')

    @classmethod
    def validate_relative_file_path(cls, path: str) -> str:
        """
        Validate a manifest file path relative to the project root.

        Args:
            path: Raw path string (e.g., "src/app/main.ts")

        Returns:
            The path in normalized POSIX form (redundant "./" segments removed)

        Raises:
            PathValidationError: If the path is empty, absolute, or escapes the root

        Examples:
            >>> PathValidator.validate_relative_file_path("src/index.ts")
            'src/index.ts'
            >>> PathValidator.validate_relative_file_path("../etc/passwd")
            PathValidationError: Parent directory references not allowed
        """
        if not path or not path.strip():
            raise PathValidationError("Path cannot be empty")

        if '\\' in path:
            raise PathValidationError(f"Invalid path: '{path}'. Backslashes not allowed.")

        if path.startswith('/') or cls.DRIVE_PATTERN.match(path):
            raise PathValidationError(f"Invalid path: '{path}'. Absolute paths not allowed.")

        parts = [p for p in PurePosixPath(path).parts if p != '.']
        if '..' in parts:
            raise PathValidationError(
                f"Invalid path: '{path}'. Parent directory references not allowed."
            )

        if not parts or path.endswith('/'):
            raise PathValidationError(f"Invalid path: '{path}'. Must name a file.")

        return PurePosixPath(*parts).as_posix()

    @classmethod
    def validate_within_root(cls, file_path: Path, root: Path) -> Path:
        """
        Validate that file_path is within root directory (no path traversal).

        Args:
            file_path: File path to validate
            root: Root directory that must contain file_path

        Returns:
            Validated, resolved file path

        Raises:
            PathValidationError: If file_path escapes root directory
        """
        try:
            file_resolved = file_path.resolve()
            root_resolved = root.resolve()

            file_resolved.relative_to(root_resolved)

            return file_resolved

        except ValueError:
            raise PathValidationError(
                f"Path traversal detected: {file_path} is not within {root}"
            )

    @classmethod
    def slugify_project_name(cls, name: str) -> str:
        """
        Convert a project name into a directory-safe slug.

        Lowercases, replaces whitespace runs with '-', and drops every
        character outside [a-z0-9-].

        Raises:
            PathValidationError: If the resulting slug is empty

        Examples:
            >>> PathValidator.slugify_project_name("My Shop API!")
            'my-shop-api'
        """
        slug = cls.WHITESPACE_PATTERN.sub('-', name.lower())
        slug = cls.SLUG_STRIP_PATTERN.sub('', slug)
        if not slug:
            raise PathValidationError(
                f"Project name '{name}' is invalid or results in an empty slug."
            )
        return slug
