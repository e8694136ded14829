# File: strapigen/templates.py
"""
StrapiGen - Template Engine
============================
Turns a table's column list into Strapi artifacts, without touching the
filesystem:

    1. ``build_content_type``   → ``ContentTypeDescriptor`` (schema.json)
    2. ``render_stub``          → controller / service / route source

Controllers, services and routes differ only in the core factory they call
(``createCoreController``, ``createCoreService``, ``createCoreRouter``) so
one template per output language covers all three; ``StubKind`` supplies
the per-kind values.

The type mapping and the exclusion set are injectable so tests can swap
them out.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, Dict, FrozenSet, List, Mapping, Sequence

from strapigen.config import GeneratorSettings
from strapigen.models import (
    AttributeSpec,
    ColumnDescriptor,
    ContentTypeDescriptor,
    ContentTypeInfo,
    ContentTypeOptions,
    ModuleInfo,
    StubKind,
)
from strapigen.typemap import TYPE_MAPPING, map_type
from strapigen.utils import module_info, upper_first

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Identity and audit columns Strapi manages itself
EXCLUDED_FIELDS: FrozenSet[str] = frozenset({
    "id",
    "created_at",
    "updated_at",
    "published_at",
    "locale",
    "created_by_id",
    "updated_by_id",
    "document_id",
})

CONTENT_TYPE_FILENAME: str = "schema.json"

_STUB_TEMPLATES: Dict[str, str] = {
    "ts": (
        "/**\n"
        " * {singular} {label}\n"
        " */\n"
        "\n"
        "import {{ factories }} from '@strapi/strapi'\n"
        "\n"
        "export default factories.{factory}('api::{singular}.{singular}');\n"
    ),
    "js": (
        "'use strict';\n"
        "\n"
        "/**\n"
        " * {singular} {label}\n"
        " */\n"
        "\n"
        "const {{ {factory} }} = require('@strapi/strapi').factories;\n"
        "\n"
        "module.exports = {factory}('api::{singular}.{singular}');\n"
    ),
}


class TemplateGenerator:
    """
    Stateless renderer for Strapi modules.

    Every method is a pure function of its arguments and the settings
    given at construction.
    """

    def __init__(
        self,
        settings: GeneratorSettings,
        *,
        table_prefix: str = "",
        type_mapping: Mapping[str, str] = TYPE_MAPPING,
        excluded_fields: AbstractSet[str] = EXCLUDED_FIELDS,
    ) -> None:
        if settings.stub_extension not in _STUB_TEMPLATES:
            raise ValueError(f"Unsupported stub extension: {settings.stub_extension!r}")
        self._settings: GeneratorSettings = settings
        self._table_prefix: str = table_prefix
        self._type_mapping: Mapping[str, str] = type_mapping
        self._excluded_fields: AbstractSet[str] = excluded_fields
        logger.debug(
            "TemplateGenerator initialised (api_root=%s, ext=%s, prefix=%r).",
            settings.api_root,
            settings.stub_extension,
            table_prefix,
        )

    @property
    def excluded_fields(self) -> AbstractSet[str]:
        return self._excluded_fields

    @property
    def type_mapping(self) -> Mapping[str, str]:
        return self._type_mapping

    # ===================================================================
    # Paths
    # ===================================================================

    def module_info(self, table_name: str) -> ModuleInfo:
        return module_info(table_name, self._table_prefix, self._settings.api_root)

    def content_type_path(self, table_name: str) -> Path:
        """``<base>/content-types/<singular>/schema.json``"""
        info: ModuleInfo = self.module_info(table_name)
        return (
            info.base_path
            / "content-types"
            / info.singular_name
            / CONTENT_TYPE_FILENAME
        )

    def stub_path(self, table_name: str, kind: StubKind) -> Path:
        """``<base>/<kind>s/<singular>.<ext>``"""
        info: ModuleInfo = self.module_info(table_name)
        filename: str = f"{info.singular_name}.{self._settings.stub_extension}"
        return info.base_path / StubKind(kind).folder / filename

    # ===================================================================
    # 1. Content type
    # ===================================================================

    def filter_columns(
        self, columns: Sequence[ColumnDescriptor]
    ) -> List[ColumnDescriptor]:
        """Drop the identity/audit columns Strapi adds on its own."""
        return [col for col in columns if col.name not in self._excluded_fields]

    def build_content_type(
        self,
        table_name: str,
        columns: Sequence[ColumnDescriptor],
    ) -> ContentTypeDescriptor:
        """
        Build the content-type descriptor for one table.

        ``collectionName`` is the raw table name; the info names use the
        prefix-stripped module name.
        """
        singular: str = self.module_info(table_name).singular_name

        attributes: Dict[str, AttributeSpec] = {}
        for col in self.filter_columns(columns):
            attributes[col.name] = AttributeSpec(
                type=map_type(col.source_type, self._type_mapping),
                required=True if col.required else None,
            )

        descriptor = ContentTypeDescriptor(
            collection_name=table_name,
            info=ContentTypeInfo(
                singular_name=singular,
                plural_name=f"{singular}s",
                display_name=upper_first(singular),
                description="",
            ),
            options=ContentTypeOptions(
                draft_and_publish=self._settings.draft_and_publish,
            ),
            attributes=attributes,
        )
        logger.debug(
            "Built content type for '%s': %d of %d columns kept.",
            table_name,
            len(attributes),
            len(columns),
        )
        return descriptor

    def render_content_type(
        self,
        table_name: str,
        columns: Sequence[ColumnDescriptor],
    ) -> str:
        return self.build_content_type(table_name, columns).to_json()

    # ===================================================================
    # 2. Controller / service / route stubs
    # ===================================================================

    def render_stub(self, table_name: str, kind: StubKind) -> str:
        """Render the source stub of *kind* for one table."""
        kind = StubKind(kind)
        singular: str = self.module_info(table_name).singular_name
        return _STUB_TEMPLATES[self._settings.stub_extension].format(
            singular=singular,
            label=kind.comment_label,
            factory=kind.factory_name,
        )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "CONTENT_TYPE_FILENAME",
    "EXCLUDED_FIELDS",
    "TemplateGenerator",
]

logger.debug("strapigen.templates loaded.")
