# File: strapigen/reader.py
"""
StrapiGen - Schema Reader
==========================
Reads column metadata from ``INFORMATION_SCHEMA.COLUMNS`` and groups it by
table into a ``SchemaMap``.

Exactly one connection is opened per call.  An engine built here uses
``NullPool`` and is disposed before returning, whether the query succeeded
or not.

Failure modes:
    - ``SchemaConnectionError``: host unreachable, credentials rejected.
    - ``SchemaQueryError``: the catalog query itself failed.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from strapigen.config import DatabaseSettings
from strapigen.errors import SchemaConnectionError, SchemaQueryError
from strapigen.models import ColumnDescriptor, SchemaMap
from strapigen.utils import Timer

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.reader")

# ---------------------------------------------------------------------------
# Catalog query
# ---------------------------------------------------------------------------

CATALOG_QUERY: str = (
    "SELECT TABLE_NAME, COLUMN_NAME, DATA_TYPE, IS_NULLABLE "
    "FROM INFORMATION_SCHEMA.COLUMNS "
    "WHERE TABLE_SCHEMA = :schema"
)

CatalogRow = Tuple[Any, Any, Any, Any]


def _as_text(value: Any) -> str:
    # Some MySQL drivers return INFORMATION_SCHEMA text columns as bytes.
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SchemaQueryError(
                f"Catalog returned undecodable value {bytes(value)!r}: {exc}"
            ) from exc
    return str(value)


def group_catalog_rows(rows: Iterable[CatalogRow], table_prefix: str = "") -> SchemaMap:
    """
    Group ``(table, column, data_type, is_nullable)`` rows by table.

    Tables keep the order in which they first appear; columns keep their
    row order.  Tables not starting with *table_prefix* are dropped, an
    empty prefix keeps everything.
    """
    schema: SchemaMap = {}
    for table_name, column_name, data_type, is_nullable in rows:
        table: str = _as_text(table_name)
        if not table.startswith(table_prefix):
            continue
        schema.setdefault(table, []).append(
            ColumnDescriptor(
                name=_as_text(column_name),
                source_type=_as_text(data_type),
                required=_as_text(is_nullable) == "NO",
            )
        )
    return schema


class SchemaReader:
    """
    Introspects one database schema.

    Usage::

        reader = SchemaReader(DatabaseSettings())
        schema = reader.read_schema()

    An *engine* may be injected (tests, or a caller that already holds
    one); such an engine is not disposed by the reader.
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        *,
        engine: Optional[Engine] = None,
    ) -> None:
        self._settings: DatabaseSettings = settings
        self._engine: Optional[Engine] = engine

    @property
    def settings(self) -> DatabaseSettings:
        return self._settings

    def _create_engine(self) -> Engine:
        try:
            return create_engine(self._settings.url(), poolclass=NullPool)
        except (SQLAlchemyError, ImportError) as exc:
            raise SchemaConnectionError(
                f"Cannot create engine for {self._settings.safe_url()}: {exc}"
            ) from exc

    def read_schema(self) -> SchemaMap:
        """
        Run the catalog query and return the grouped schema.

        Raises:
            SchemaConnectionError: If no connection could be established.
            SchemaQueryError: If the catalog query failed.
        """
        owns_engine: bool = self._engine is None
        engine: Engine = self._engine if self._engine is not None else self._create_engine()

        try:
            with Timer("read_schema") as t:
                rows: Sequence[CatalogRow] = self._fetch_rows(engine)
        finally:
            if owns_engine:
                engine.dispose()

        schema: SchemaMap = group_catalog_rows(rows, self._settings.table_prefix)
        logger.info(
            "Read %d catalog rows from '%s' in %.3fs; %d table(s) match prefix %r.",
            len(rows),
            self._settings.name,
            t.elapsed,
            len(schema),
            self._settings.table_prefix,
        )
        return schema

    def _fetch_rows(self, engine: Engine) -> List[CatalogRow]:
        try:
            conn: Connection = engine.connect()
        except SQLAlchemyError as exc:
            raise SchemaConnectionError(
                f"Cannot connect to {self._settings.safe_url()}: {exc}"
            ) from exc

        with conn:
            try:
                result = conn.execute(
                    text(CATALOG_QUERY), {"schema": self._settings.name}
                )
                return [tuple(row) for row in result]
            except SQLAlchemyError as exc:
                raise SchemaQueryError(
                    f"Catalog query failed for schema '{self._settings.name}': {exc}"
                ) from exc


def read_schema(settings: DatabaseSettings) -> SchemaMap:
    """Shortcut for ``SchemaReader(settings).read_schema()``."""
    return SchemaReader(settings).read_schema()


__all__: List[str] = [
    "CATALOG_QUERY",
    "SchemaReader",
    "group_catalog_rows",
    "read_schema",
]

logger.debug("strapigen.reader loaded.")
