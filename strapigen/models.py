# File: strapigen/models.py
"""
StrapiGen - Core Data Models
=============================
Pydantic V2 models for everything that flows through the pipeline:

    Catalog rows → ColumnDescriptor → ContentTypeDescriptor → schema.json

``SchemaMap`` is a plain insertion-ordered ``dict``; the order in which the
catalog returned each table is the order in which modules are generated.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.models")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class StubKind(str, Enum):
    """The three source stubs generated next to every content type."""

    CONTROLLER = "controller"
    SERVICE = "service"
    ROUTE = "route"

    @property
    def factory_label(self) -> str:
        """Suffix of the Strapi core factory, e.g. ``createCoreRouter``."""
        return _FACTORY_LABELS[self.value]

    @property
    def folder(self) -> str:
        """Plural folder name under the module base path."""
        return f"{self.value}s"

    @property
    def comment_label(self) -> str:
        return _FACTORY_LABELS[self.value].lower()

    @property
    def factory_name(self) -> str:
        return f"createCore{self.factory_label}"


_FACTORY_LABELS: Dict[str, str] = {
    "controller": "Controller",
    "service": "Service",
    "route": "Router",
}

# Fixed emission order for the stubs of one table
STUB_ORDER: tuple = (StubKind.CONTROLLER, StubKind.SERVICE, StubKind.ROUTE)


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    frozen=True,
    extra="forbid",
)

_DESCRIPTOR_CONFIG: ConfigDict = ConfigDict(
    populate_by_name=True,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Schema Reader output
# ---------------------------------------------------------------------------


class ColumnDescriptor(BaseModel):
    """One database column as reported by the metadata catalog."""

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1, description="Column name.")
    source_type: str = Field(..., description="Catalog DATA_TYPE, e.g. 'varchar'.")
    required: bool = Field(default=False, description="True when IS_NULLABLE is 'NO'.")

    def __repr__(self) -> str:
        flag: str = " required" if self.required else ""
        return f"<ColumnDescriptor {self.name}: {self.source_type}{flag}>"


# Table name → columns, in catalog order.
SchemaMap = Dict[str, List[ColumnDescriptor]]


class ModuleInfo(BaseModel):
    """Where a table's Strapi module lives.  Recomputed on demand."""

    model_config = _FROZEN_CONFIG

    singular_name: str
    base_path: Path


# ---------------------------------------------------------------------------
# Content-type descriptor (schema.json)
# ---------------------------------------------------------------------------


class AttributeSpec(BaseModel):
    """A single entry of ``attributes``; ``required`` is omitted unless true."""

    model_config = _DESCRIPTOR_CONFIG

    type: str
    required: Optional[bool] = None


class ContentTypeInfo(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    singular_name: str = Field(..., alias="singularName")
    plural_name: str = Field(..., alias="pluralName")
    display_name: str = Field(..., alias="displayName")
    description: str = ""


class ContentTypeOptions(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    draft_and_publish: bool = Field(default=True, alias="draftAndPublish")


class ContentTypeDescriptor(BaseModel):
    """
    The Strapi ``schema.json`` for one collection.

    Field order follows the layout of the files Strapi writes itself.
    """

    model_config = _DESCRIPTOR_CONFIG

    kind: Literal["collectionType"] = "collectionType"
    collection_name: str = Field(..., alias="collectionName")
    info: ContentTypeInfo
    plugin_options: Dict[str, object] = Field(
        default_factory=dict, alias="pluginOptions"
    )
    options: ContentTypeOptions = Field(default_factory=ContentTypeOptions)
    attributes: Dict[str, AttributeSpec] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        """Plain dict with Strapi's camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent_size: int = 2) -> str:
        """Pretty-printed JSON with a trailing newline."""
        return self.model_dump_json(
            by_alias=True, exclude_none=True, indent=indent_size
        ) + "\n"

    def __repr__(self) -> str:
        return (
            f"<ContentTypeDescriptor {self.collection_name} "
            f"({len(self.attributes)} attributes)>"
        )


# ---------------------------------------------------------------------------
# Emission records
# ---------------------------------------------------------------------------


class EmittedFile(BaseModel):
    """Record of one artifact produced for a table."""

    model_config = _FROZEN_CONFIG

    table_name: str
    artifact: str = Field(..., description="'content-type' or a StubKind value.")
    path: Path
    size_bytes: int = 0


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "AttributeSpec",
    "ColumnDescriptor",
    "ContentTypeDescriptor",
    "ContentTypeInfo",
    "ContentTypeOptions",
    "EmittedFile",
    "ModuleInfo",
    "STUB_ORDER",
    "SchemaMap",
    "StubKind",
]

logger.debug("strapigen.models loaded.")
