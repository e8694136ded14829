# File: strapigen/exporters.py
"""
StrapiGen - Module Emitter (File-System Writer)
================================================

Writes the artifacts rendered by ``TemplateGenerator`` to their fixed
locations under ``<output_root>/src/api/<singular>/``:

    content-types/<singular>/schema.json
    controllers/<singular>.<ext>
    services/<singular>.<ext>
    routes/<singular>.<ext>

Each file is written atomically, but a run as a whole is not: when a write
fails the ``FilesystemError`` propagates and the files already written (for
this table or earlier ones) stay where they are.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from strapigen.config import GeneratorSettings
from strapigen.errors import FilesystemError
from strapigen.models import STUB_ORDER, ColumnDescriptor, EmittedFile, StubKind
from strapigen.templates import TemplateGenerator
from strapigen.utils import write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.exporters")

ProgressCallback = Callable[[str], None]

CONTENT_TYPE_ARTIFACT: str = "content-type"

_PROGRESS_LABELS = {
    CONTENT_TYPE_ARTIFACT: "Content type",
    StubKind.CONTROLLER.value: "Controller",
    StubKind.SERVICE.value: "Service",
    StubKind.ROUTE.value: "Route",
}


class ModuleEmitter:
    """
    Writes one Strapi module per table.

    Usage::

        emitter = ModuleEmitter(settings, table_prefix="tbl_", progress=print)
        emitter.emit("tbl_user", columns)

    *progress* receives one human-readable line per artifact, after the
    artifact is on disk.

    Thread-safety: NOT thread-safe.  Use one emitter per output directory.
    """

    def __init__(
        self,
        settings: GeneratorSettings,
        *,
        table_prefix: str = "",
        template_generator: Optional[TemplateGenerator] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self._settings: GeneratorSettings = settings
        self._templates: TemplateGenerator = (
            template_generator
            if template_generator is not None
            else TemplateGenerator(settings, table_prefix=table_prefix)
        )
        self._progress: Optional[ProgressCallback] = progress

    @property
    def templates(self) -> TemplateGenerator:
        return self._templates

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def emit_content_type(
        self,
        table_name: str,
        columns: Sequence[ColumnDescriptor],
    ) -> EmittedFile:
        """Write ``content-types/<singular>/schema.json`` for one table."""
        content: str = self._templates.render_content_type(table_name, columns)
        path: Path = self._templates.content_type_path(table_name)
        return self._write(table_name, CONTENT_TYPE_ARTIFACT, path, content)

    def emit_stub(self, table_name: str, kind: StubKind) -> EmittedFile:
        """Write the controller, service or route stub for one table."""
        kind = StubKind(kind)
        content: str = self._templates.render_stub(table_name, kind)
        path: Path = self._templates.stub_path(table_name, kind)
        return self._write(table_name, kind.value, path, content)

    def emit(
        self,
        table_name: str,
        columns: Sequence[ColumnDescriptor],
    ) -> List[EmittedFile]:
        """Content type first, then controller, service and route."""
        emitted: List[EmittedFile] = [self.emit_content_type(table_name, columns)]
        for kind in STUB_ORDER:
            emitted.append(self.emit_stub(table_name, kind))
        return emitted

    # -----------------------------------------------------------------
    # Internal
    # -----------------------------------------------------------------

    def _write(
        self,
        table_name: str,
        artifact: str,
        path: Path,
        content: str,
    ) -> EmittedFile:
        if self._settings.dry_run:
            size: int = len(content.encode("utf-8"))
            logger.info("[dry-run] Would write %s (%d bytes).", path, size)
            self._report(table_name, artifact, dry_run=True)
            return EmittedFile(
                table_name=table_name, artifact=artifact, path=path, size_bytes=size
            )

        try:
            size = write_file(path, content)
        except OSError as exc:
            logger.debug("Failed writing %s: %s", path, exc)
            raise FilesystemError(
                f"Cannot write {artifact} for '{table_name}' to {path}: {exc}",
                path=str(path),
            ) from exc

        logger.debug("Wrote %s for '%s' to %s.", artifact, table_name, path)
        self._report(table_name, artifact)
        return EmittedFile(
            table_name=table_name, artifact=artifact, path=path, size_bytes=size
        )

    def _report(self, table_name: str, artifact: str, dry_run: bool = False) -> None:
        if self._progress is None:
            return
        verb: str = "would be created" if dry_run else "created"
        self._progress(f'{_PROGRESS_LABELS[artifact]} for "{table_name}" {verb}.')


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "CONTENT_TYPE_ARTIFACT",
    "ModuleEmitter",
    "ProgressCallback",
]

logger.debug("strapigen.exporters loaded.")
