"""
tests/conftest.py
Shared fixtures for the strapigen test suite.

Real file I/O happens inside pytest's tmp_path.  The MySQL metadata catalog
is stood in for by a SQLite database attached as ``INFORMATION_SCHEMA``, so
the reader runs its real query through a real SQLAlchemy engine.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Callable, Iterator, List, Sequence, Tuple

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

from strapigen.config import DatabaseSettings, GeneratorSettings
from strapigen.models import ColumnDescriptor


CatalogRow = Tuple[str, str, str, str, str]

SOURCE_DB_VARS: Tuple[str, ...] = (
    "SOURCE_DB_HOST",
    "SOURCE_DB_USER",
    "SOURCE_DB_PASSWORD",
    "SOURCE_DB_NAME",
    "SOURCE_DB_PORT",
    "SOURCE_DB_TABLE_PREFIX",
    "SOURCE_DB_DRIVER",
)


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path) -> None:
    """No SOURCE_DB_* leaks in from the host and no stray ./.env is read."""
    for name in SOURCE_DB_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_strapigen_logger() -> Iterator[None]:
    """Undo whatever the CLI did to the ``strapigen`` logger."""
    yield
    logging.disable(logging.NOTSET)
    root_logger = logging.getLogger("strapigen")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def output_root(tmp_path: pathlib.Path) -> pathlib.Path:
    root = tmp_path / "cms"
    root.mkdir()
    return root


@pytest.fixture()
def gen_settings(output_root: pathlib.Path) -> GeneratorSettings:
    return GeneratorSettings(output_root=output_root)


@pytest.fixture()
def db_settings() -> DatabaseSettings:
    return DatabaseSettings(_env_file=None, name="shop", table_prefix="tbl_")


# ---------------------------------------------------------------------------
# Column data
# ---------------------------------------------------------------------------


@pytest.fixture()
def user_columns() -> List[ColumnDescriptor]:
    return [
        ColumnDescriptor(name="id", source_type="int", required=True),
        ColumnDescriptor(name="name", source_type="varchar", required=True),
        ColumnDescriptor(name="bio", source_type="text", required=False),
        ColumnDescriptor(name="created_at", source_type="datetime", required=False),
    ]


@pytest.fixture()
def shop_catalog_rows() -> List[CatalogRow]:
    """Catalog rows for schema 'shop' plus noise from another schema."""
    return [
        ("shop", "tbl_user", "id", "int", "NO"),
        ("shop", "tbl_user", "name", "varchar", "NO"),
        ("shop", "tbl_user", "created_at", "datetime", "YES"),
        ("shop", "other_log", "id", "int", "NO"),
        ("shop", "other_log", "message", "text", "YES"),
        ("shop", "tbl_order_item", "id", "bigint", "NO"),
        ("shop", "tbl_order_item", "quantity", "int", "NO"),
        ("shop", "tbl_order_item", "unit_price", "decimal", "YES"),
        ("shop", "tbl_order_item", "is_gift", "tinyint", "YES"),
        ("warehouse", "tbl_stock", "sku", "varchar", "NO"),
    ]


# ---------------------------------------------------------------------------
# SQLite stand-in for INFORMATION_SCHEMA
# ---------------------------------------------------------------------------


def seed_catalog(engine: Engine, rows: Sequence[CatalogRow]) -> None:
    """Insert ``(schema, table, column, data_type, is_nullable)`` rows."""
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO INFORMATION_SCHEMA.COLUMNS "
                "(TABLE_SCHEMA, TABLE_NAME, COLUMN_NAME, DATA_TYPE, IS_NULLABLE) "
                "VALUES (:schema, :table, :column, :data_type, :is_nullable)"
            ),
            [
                {
                    "schema": schema,
                    "table": table,
                    "column": column,
                    "data_type": data_type,
                    "is_nullable": is_nullable,
                }
                for schema, table, column, data_type, is_nullable in rows
            ],
        )


@pytest.fixture()
def catalog_engine(tmp_path: pathlib.Path) -> Iterator[Engine]:
    """SQLite engine whose connections see an ``INFORMATION_SCHEMA.COLUMNS`` table."""
    catalog_path = tmp_path / "information_schema.db"
    engine = create_engine(f"sqlite:///{tmp_path / 'main.db'}", poolclass=NullPool)

    @event.listens_for(engine, "connect")
    def _attach_catalog(dbapi_conn, _connection_record) -> None:
        dbapi_conn.execute(f"ATTACH DATABASE '{catalog_path}' AS INFORMATION_SCHEMA")

    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE INFORMATION_SCHEMA.COLUMNS ("
                "TABLE_SCHEMA TEXT, TABLE_NAME TEXT, COLUMN_NAME TEXT, "
                "DATA_TYPE TEXT, IS_NULLABLE TEXT)"
            )
        )
    yield engine
    engine.dispose()


@pytest.fixture()
def shop_catalog(catalog_engine: Engine, shop_catalog_rows: List[CatalogRow]) -> Engine:
    seed_catalog(catalog_engine, shop_catalog_rows)
    return catalog_engine


@pytest.fixture()
def seed() -> Callable[[Engine, Sequence[CatalogRow]], None]:
    """The ``seed_catalog`` helper, for tests that build their own catalog."""
    return seed_catalog
