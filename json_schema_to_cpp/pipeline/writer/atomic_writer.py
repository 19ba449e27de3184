"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import re
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path

from ..errors import CodeWriteError

# Comments and string or character literals are removed before counting braces
_NON_CODE = re.compile(r'/\*.*?\*/|//[^\n]*|"(?:\\.|[^"\\\n])*"|\'(?:\\.|[^\'\\\n])*\'', re.DOTALL)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.

    Appends go to files shared by several classes and are serialized with a
    lock, so concurrent callers never interleave their content.
    """

    def __init__(self, validate_cpp: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_cpp: Optional validation function for C++ code
        """
        self._validate_cpp = validate_cpp or self._default_validate_cpp
        self._append_lock = threading.Lock()

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            CodeWriteError: If validation fails
            OSError: If file operations fail
        """
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            if validate:
                self._validate_cpp(content)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def append(self, path: Path, content: str, validate: bool = True) -> None:
        """Append content to a file shared by several classes.

        Args:
            path: Target file path
            content: Content to append
            validate: Whether to validate the appended content first

        Raises:
            CodeWriteError: If validation fails
            OSError: If file operations fail
        """
        if validate:
            self._validate_cpp(content)

        with self._append_lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8", newline="\n") as f:
                f.write(content)

    def validate(self, content: str) -> None:
        """Validate content without writing it.

        Raises:
            CodeWriteError: If validation fails
        """
        self._validate_cpp(content)

    def truncate(self, path: Path) -> None:
        """Empty a shared file before a generation run appends to it."""
        with self._append_lock:
            self.write(path, "", validate=False)

    def _default_validate_cpp(self, content: str) -> None:
        """Default C++ validation.

        Args:
            content: C++ code to validate

        Raises:
            CodeWriteError: If validation fails
        """
        if not content.strip():
            raise CodeWriteError("Generated C++ code is empty")

        # Check for balanced braces (simple heuristic)
        code = _NON_CODE.sub(" ", content)
        open_braces = code.count("{")
        close_braces = code.count("}")
        if open_braces != close_braces:
            raise CodeWriteError(f"Generated C++ code has unbalanced braces: {open_braces} open, {close_braces} close")
