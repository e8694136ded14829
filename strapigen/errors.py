# File: strapigen/errors.py
"""
StrapiGen - Error Taxonomy
===========================
Every failure that can end a generation run.  All of them are fatal: the
run stops, nothing is retried and already-written files are left on disk.
"""

from __future__ import annotations

from typing import List


class StrapiGenError(Exception):
    """Base class for all StrapiGen errors."""


class ConfigurationError(StrapiGenError):
    """Settings could not be loaded or are invalid."""


class SchemaConnectionError(StrapiGenError, ConnectionError):
    """The source database is unreachable or rejected the credentials."""


class SchemaQueryError(StrapiGenError):
    """The metadata-catalog query failed (bad schema name, privileges...)."""


class FilesystemError(StrapiGenError):
    """A directory could not be created or a file could not be written."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path: str = path


__all__: List[str] = [
    "StrapiGenError",
    "ConfigurationError",
    "SchemaConnectionError",
    "SchemaQueryError",
    "FilesystemError",
]
