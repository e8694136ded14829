# File: strapigen/__init__.py
"""
StrapiGen — Strapi Module Generator
====================================

Reads a MySQL schema from ``INFORMATION_SCHEMA`` and writes a Strapi module
per table: a content-type ``schema.json`` plus controller, service and route
stubs.

Architecture overview::

    ┌──────────────┐     ┌─────────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ StrapiGenerator │────▶│  ModuleEmitter   │
    │   (cli.py)   │     │ (generator.py)  │     │  (exporters.py)  │
    └──────────────┘     └────────┬────────┘     └────────┬─────────┘
                                  │                       │
                         ┌────────┴───────┐      ┌────────┴─────────┐
                         ▼                ▼      ▼                  ▼
                  ┌────────────┐  ┌────────────┐ ┌────────────┐ ┌─────────┐
                  │SchemaReader│  │ validators │ │ templates  │ │ typemap │
                  │(reader.py) │  │   (.py)    │ │   (.py)    │ │  (.py)  │
                  └────────────┘  └────────────┘ └────────────┘ └─────────┘

Usage::

    # As a library
    from strapigen import DatabaseSettings, GeneratorSettings, StrapiGenerator
    report = StrapiGenerator(DatabaseSettings(), GeneratorSettings()).generate_all()

    # From the command line
    SOURCE_DB_NAME=shop SOURCE_DB_TABLE_PREFIX=tbl_ strapigen -v
"""

from __future__ import annotations

__version__: str = "0.1.0"
__license__: str = "MIT"

from strapigen.config import DatabaseSettings, GeneratorSettings, load_database_settings
from strapigen.errors import (
    ConfigurationError,
    FilesystemError,
    SchemaConnectionError,
    SchemaQueryError,
    StrapiGenError,
)
from strapigen.exporters import ModuleEmitter
from strapigen.generator import GenerationReport, StrapiGenerator, generate_all
from strapigen.models import (
    ColumnDescriptor,
    ContentTypeDescriptor,
    EmittedFile,
    ModuleInfo,
    SchemaMap,
    StubKind,
)
from strapigen.reader import SchemaReader, read_schema
from strapigen.templates import EXCLUDED_FIELDS, TemplateGenerator
from strapigen.typemap import TYPE_MAPPING, map_type
from strapigen.utils import module_info, to_display_name

__all__: list[str] = [
    "__version__",
    "__license__",
    # Orchestration
    "StrapiGenerator",
    "GenerationReport",
    "generate_all",
    # Configuration
    "DatabaseSettings",
    "GeneratorSettings",
    "load_database_settings",
    # Models
    "ColumnDescriptor",
    "ContentTypeDescriptor",
    "EmittedFile",
    "ModuleInfo",
    "SchemaMap",
    "StubKind",
    # Components
    "ModuleEmitter",
    "SchemaReader",
    "TemplateGenerator",
    "read_schema",
    "map_type",
    "module_info",
    "to_display_name",
    "EXCLUDED_FIELDS",
    "TYPE_MAPPING",
    # Errors
    "StrapiGenError",
    "ConfigurationError",
    "SchemaConnectionError",
    "SchemaQueryError",
    "FilesystemError",
]
