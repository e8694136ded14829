# File: strapigen/validators.py
"""
StrapiGen - Schema Checks
==========================
Pre-generation checks over a ``SchemaMap``.  They never block a run: every
finding is a warning that the generator logs and carries in its report.

Checks:
    - ``validate_not_empty``       no table matched the prefix
    - ``validate_module_names``    two tables collapse onto the same module
    - ``validate_attributes``      a table has nothing left after exclusion
    - ``validate_column_types``    a column type falls back to ``string``
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

from strapigen.models import SchemaMap
from strapigen.templates import TemplateGenerator
from strapigen.typemap import DEFAULT_TARGET_TYPE, is_mapped

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.validators")


@dataclass(slots=True)
class ValidationResult:
    """Accumulated warnings from one or more checks."""

    warnings: List[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def add(self, message: str) -> None:
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.warnings.extend(other.warnings)
        return self


def validate_not_empty(schema: SchemaMap, table_prefix: str) -> ValidationResult:
    result = ValidationResult()
    if not schema:
        if table_prefix:
            result.add(f"No tables match prefix {table_prefix!r}; nothing to generate.")
        else:
            result.add("The schema has no tables; nothing to generate.")
    return result


def validate_module_names(
    schema: SchemaMap, templates: TemplateGenerator
) -> ValidationResult:
    """
    Warn when several tables map to one module name.

    The later table's files silently replace the earlier one's.
    """
    result = ValidationResult()
    owners: Dict[str, List[str]] = defaultdict(list)
    for table_name in schema:
        owners[templates.module_info(table_name).singular_name].append(table_name)

    for singular, tables in owners.items():
        if len(tables) > 1:
            result.add(
                f"Tables {', '.join(repr(t) for t in tables)} all map to module "
                f"'{singular}'; only the last one's files will remain."
            )
    return result


def validate_attributes(
    schema: SchemaMap, templates: TemplateGenerator
) -> ValidationResult:
    result = ValidationResult()
    for table_name, columns in schema.items():
        if not templates.filter_columns(columns):
            result.add(
                f"Table '{table_name}' has no columns left after excluding "
                f"identity/audit fields; its content type will have no attributes."
            )
    return result


def validate_column_types(
    schema: SchemaMap, templates: TemplateGenerator
) -> ValidationResult:
    result = ValidationResult()
    for table_name, columns in schema.items():
        for col in templates.filter_columns(columns):
            if not is_mapped(col.source_type, templates.type_mapping):
                result.add(
                    f"Column '{table_name}.{col.name}' has unmapped type "
                    f"'{col.source_type}'; using '{DEFAULT_TARGET_TYPE}'."
                )
    return result


def validate_schema_map(
    schema: SchemaMap,
    templates: TemplateGenerator,
    table_prefix: str = "",
) -> ValidationResult:
    """Run every check and return the merged warnings."""
    result = ValidationResult()
    result.merge(validate_not_empty(schema, table_prefix))
    result.merge(validate_module_names(schema, templates))
    result.merge(validate_attributes(schema, templates))
    result.merge(validate_column_types(schema, templates))

    for warning in result.warnings:
        logger.warning("  ⚠ %s", warning)
    return result


__all__: List[str] = [
    "ValidationResult",
    "validate_attributes",
    "validate_column_types",
    "validate_module_names",
    "validate_not_empty",
    "validate_schema_map",
]

logger.debug("strapigen.validators loaded.")
