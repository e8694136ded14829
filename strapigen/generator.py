# File: strapigen/generator.py
"""
StrapiGen - Generation Pipeline (Orchestrator)
===============================================

    Read schema → Check schema → Emit modules

``StrapiGenerator.generate_all()`` reads the catalog once, logs the schema
checks, then emits every table in catalog order: content type, controller,
service, route.  Each table is finished before the next one starts.

Error handling strategy:
    - Every failure is fatal.  ``SchemaConnectionError``, ``SchemaQueryError``
      and ``FilesystemError`` are re-raised unchanged; reporting them is the
      caller's job (the CLI prints one message).
    - Nothing is rolled back: files written before a failure stay on disk.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from strapigen.config import DatabaseSettings, GeneratorSettings
from strapigen.errors import StrapiGenError
from strapigen.exporters import ModuleEmitter, ProgressCallback
from strapigen.models import EmittedFile, SchemaMap
from strapigen.reader import SchemaReader
from strapigen.utils import Timer
from strapigen.validators import ValidationResult, validate_schema_map

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.generator")


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class GenerationReport:
    """What a completed run produced."""

    database: str = ""
    table_prefix: str = ""
    dry_run: bool = False
    tables: List[str] = field(default_factory=list)
    files: List[EmittedFile] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    read_seconds: float = 0.0
    total_elapsed_seconds: float = 0.0

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_bytes(self) -> int:
        return sum(f.size_bytes for f in self.files)

    def summary(self) -> str:
        """Return a human-readable summary string."""
        mode: str = " (dry run)" if self.dry_run else ""
        lines: List[str] = [
            f"{'=' * 60}",
            f"  StrapiGen — Generation Report{mode}",
            f"{'=' * 60}",
            f"  Database:         {self.database}",
            f"  Table prefix:     {self.table_prefix!r}",
            f"  Tables processed: {len(self.tables)}",
            f"  Files generated:  {self.total_files}",
            f"  Total bytes:      {self.total_bytes:,}",
            f"  Schema read:      {self.read_seconds:.3f}s",
            f"  Total time:       {self.total_elapsed_seconds:.3f}s",
        ]
        if self.warnings:
            lines.append(f"{'─' * 60}")
            lines.append(f"  Warnings ({len(self.warnings)}):")
            for warn in self.warnings:
                lines.append(f"    ⚠ {warn}")
        lines.append(f"{'=' * 60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# StrapiGenerator — orchestrator
# ---------------------------------------------------------------------------


class StrapiGenerator:
    """
    Generates Strapi modules for every table of a database schema.

    Usage::

        generator = StrapiGenerator(DatabaseSettings(), GeneratorSettings())
        report = generator.generate_all()
        print(report.summary())

    *reader* and *emitter* default to ones built from the settings; pass
    your own to point the pipeline at another engine or writer.
    """

    def __init__(
        self,
        db_settings: DatabaseSettings,
        generator_settings: GeneratorSettings,
        *,
        reader: Optional[SchemaReader] = None,
        emitter: Optional[ModuleEmitter] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self._db_settings: DatabaseSettings = db_settings
        self._settings: GeneratorSettings = generator_settings
        self._progress: Optional[ProgressCallback] = progress
        self._reader: SchemaReader = reader if reader is not None else SchemaReader(db_settings)
        self._emitter: ModuleEmitter = (
            emitter
            if emitter is not None
            else ModuleEmitter(
                generator_settings,
                table_prefix=db_settings.table_prefix,
                progress=progress,
            )
        )

    def read_schema(self) -> SchemaMap:
        return self._reader.read_schema()

    def generate_all(self) -> GenerationReport:
        """
        Run the whole pipeline.

        Raises:
            SchemaConnectionError, SchemaQueryError, FilesystemError
        """
        start: float = time.perf_counter()
        report = GenerationReport(
            database=self._db_settings.name,
            table_prefix=self._db_settings.table_prefix,
            dry_run=self._settings.dry_run,
        )

        try:
            with Timer("read_schema") as t_read:
                schema: SchemaMap = self.read_schema()
            report.read_seconds = t_read.elapsed

            checks: ValidationResult = validate_schema_map(
                schema, self._emitter.templates, self._db_settings.table_prefix
            )
            report.warnings.extend(checks.warnings)

            for table_name, columns in schema.items():
                logger.info(
                    "Generating module for '%s' (%d columns).",
                    table_name,
                    len(columns),
                )
                report.files.extend(self._emitter.emit(table_name, columns))
                report.tables.append(table_name)
        except StrapiGenError as exc:
            logger.debug(
                "Generation aborted after %d table(s): %s",
                len(report.tables),
                exc,
            )
            raise

        if self._progress is not None:
            self._progress("Modules generated successfully.")

        report.total_elapsed_seconds = time.perf_counter() - start
        logger.info(
            "Generated %d file(s) for %d table(s) in %.3fs.",
            report.total_files,
            len(report.tables),
            report.total_elapsed_seconds,
        )
        return report


def generate_all(
    db_settings: DatabaseSettings,
    generator_settings: GeneratorSettings,
    progress: Optional[ProgressCallback] = None,
) -> GenerationReport:
    """Shortcut for ``StrapiGenerator(...).generate_all()``."""
    return StrapiGenerator(
        db_settings, generator_settings, progress=progress
    ).generate_all()


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "GenerationReport",
    "StrapiGenerator",
    "generate_all",
]

logger.debug("strapigen.generator loaded.")
