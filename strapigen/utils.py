# File: strapigen/utils.py
"""
StrapiGen - Utility Functions & Helpers
========================================
Name transformation, file I/O and timing helpers used throughout the
generation pipeline.

- The name transforms are pure and cached with ``@lru_cache`` since the
  same table name is transformed once per artifact.
- ``write_file`` writes to a temporary sibling first and then renames it,
  so a crash never leaves a half-written file behind.
"""

from __future__ import annotations

import functools
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import List, Optional

from strapigen.models import ModuleInfo

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.utils")


# ---------------------------------------------------------------------------
# Name transformation
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def to_display_name(identifier: str) -> str:
    """
    Convert an underscore-delimited identifier to kebab-case.

    Examples:
        >>> to_display_name("order_items")
        'order-items'
        >>> to_display_name("Tbl_User")
        'tbl-user'
        >>> to_display_name("already-kebab")
        'already-kebab'
    """
    return identifier.replace("_", "-").lower()


def upper_first(text: str) -> str:
    """Upper-case only the first character: ``'order-item'`` → ``'Order-item'``."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


@functools.lru_cache(maxsize=None)
def strip_table_prefix(table_name: str, prefix: str) -> str:
    """
    Remove *prefix* from the start of *table_name*.

    Separators left dangling by the prefix (``tbl`` on ``tbl_user``) are
    dropped too.  If nothing would remain the table name is returned as is.
    """
    if not prefix or not table_name.startswith(prefix):
        return table_name
    rest: str = table_name[len(prefix):].lstrip("_-")
    return rest or table_name


def module_info(table_name: str, prefix: str, api_root: Path) -> ModuleInfo:
    """
    Derive the module name and base directory of a table.

    Examples:
        >>> module_info("tbl_product", "tbl_", Path("src/api")).singular_name
        'product'
    """
    singular_name: str = to_display_name(strip_table_prefix(table_name, prefix))
    return ModuleInfo(
        singular_name=singular_name,
        base_path=Path(api_root) / singular_name,
    )


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def _current_umask() -> int:
    mask: int = os.umask(0)
    os.umask(mask)
    return mask


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path*, creating parent directories.

    When *atomic* is True the data goes to a temporary file in the same
    directory which is then renamed over *path*.

    Returns the number of bytes written.  ``OSError`` propagates.
    """
    ensure_directory(path.parent)

    encoded: bytes = content.encode("utf-8")

    if atomic:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            # mkstemp creates 0600; give the file the mode open() would.
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, str(path))
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Context-manager timer for pipeline steps.

    Usage:
        with Timer("read schema") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "Timer",
    "ensure_directory",
    "module_info",
    "strip_table_prefix",
    "to_display_name",
    "upper_first",
    "write_file",
]

logger.debug("strapigen.utils loaded.")
