# File: strapigen/typemap.py
"""
StrapiGen - Type Mapper
========================
Maps a MySQL ``INFORMATION_SCHEMA.COLUMNS.DATA_TYPE`` value onto a Strapi
attribute type.  Unknown types fall back to ``"string"``; the function is
total and never raises.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import List, Mapping

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.typemap")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TARGET_TYPE: str = "string"

TYPE_MAPPING: Mapping[str, str] = MappingProxyType({
    "int": "integer",
    "bigint": "biginteger",
    "varchar": "string",
    "text": "text",
    "datetime": "datetime",
    "date": "date",
    "tinyint": "boolean",
    "decimal": "float",
    "double": "float",
    "float": "float",
})


def map_type(source_type: str, mapping: Mapping[str, str] = TYPE_MAPPING) -> str:
    """
    Return the Strapi attribute type for a catalog type name.

    Examples:
        >>> map_type("varchar")
        'string'
        >>> map_type("tinyint")
        'boolean'
        >>> map_type("geometry")
        'string'
    """
    return mapping.get(source_type, DEFAULT_TARGET_TYPE)


def is_mapped(source_type: str, mapping: Mapping[str, str] = TYPE_MAPPING) -> bool:
    """True when *source_type* has an explicit entry (no fallback needed)."""
    return source_type in mapping


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "DEFAULT_TARGET_TYPE",
    "TYPE_MAPPING",
    "is_mapped",
    "map_type",
]

logger.debug("strapigen.typemap loaded.")
