"""
tests/test_reader.py
Tests for strapigen.reader (SchemaReader).

The catalog query runs through a real SQLAlchemy engine against a SQLite
database attached as INFORMATION_SCHEMA (see conftest.py).
"""

from __future__ import annotations

import pathlib

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

from strapigen.config import DatabaseSettings
from strapigen.errors import SchemaConnectionError, SchemaQueryError
from strapigen.models import ColumnDescriptor
from strapigen.reader import SchemaReader, group_catalog_rows, read_schema


# ===========================================================================
# Row grouping
# ===========================================================================


class TestGroupCatalogRows:
    def test_groups_by_table_in_first_seen_order(self) -> None:
        rows = [
            ("b", "x", "int", "NO"),
            ("a", "y", "varchar", "YES"),
            ("b", "z", "text", "YES"),
        ]
        schema = group_catalog_rows(rows)
        assert list(schema) == ["b", "a"]
        assert [c.name for c in schema["b"]] == ["x", "z"]

    def test_prefix_filter(self) -> None:
        rows = [
            ("tbl_a", "id", "int", "NO"),
            ("other_b", "id", "int", "NO"),
        ]
        assert list(group_catalog_rows(rows, "tbl_")) == ["tbl_a"]

    def test_empty_prefix_includes_all(self) -> None:
        rows = [("tbl_a", "id", "int", "NO"), ("other_b", "id", "int", "NO")]
        assert list(group_catalog_rows(rows, "")) == ["tbl_a", "other_b"]

    def test_required_flag_from_is_nullable(self) -> None:
        rows = [("t", "a", "int", "NO"), ("t", "b", "int", "YES")]
        schema = group_catalog_rows(rows)
        assert schema["t"] == [
            ColumnDescriptor(name="a", source_type="int", required=True),
            ColumnDescriptor(name="b", source_type="int", required=False),
        ]

    def test_bytes_values_are_decoded(self) -> None:
        rows = [(b"tbl_a", b"title", b"varchar", b"NO")]
        schema = group_catalog_rows(rows, "tbl_")
        assert schema["tbl_a"][0] == ColumnDescriptor(
            name="title", source_type="varchar", required=True
        )

    def test_undecodable_bytes_raise_query_error(self) -> None:
        rows = [(b"tbl_a", b"\xff\xfe", b"varchar", b"NO")]
        with pytest.raises(SchemaQueryError) as exc_info:
            group_catalog_rows(rows)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_no_rows(self) -> None:
        assert group_catalog_rows([], "tbl_") == {}


# ===========================================================================
# SchemaReader against the SQLite catalog
# ===========================================================================


class TestSchemaReader:
    def test_reads_only_configured_schema_and_prefix(
        self, db_settings: DatabaseSettings, shop_catalog: Engine
    ) -> None:
        schema = SchemaReader(db_settings, engine=shop_catalog).read_schema()

        assert list(schema) == ["tbl_user", "tbl_order_item"]
        assert [c.name for c in schema["tbl_user"]] == ["id", "name", "created_at"]
        assert schema["tbl_order_item"][2] == ColumnDescriptor(
            name="unit_price", source_type="decimal", required=False
        )

    def test_prefix_excludes_other_tables(self, catalog_engine: Engine, seed) -> None:
        seed(
            catalog_engine,
            [
                ("db", "tbl_a", "id", "int", "NO"),
                ("db", "other_b", "id", "int", "NO"),
            ],
        )
        settings = DatabaseSettings(_env_file=None, name="db", table_prefix="tbl_")
        schema = SchemaReader(settings, engine=catalog_engine).read_schema()
        assert list(schema) == ["tbl_a"]

    def test_empty_prefix_reads_every_table(self, shop_catalog: Engine) -> None:
        settings = DatabaseSettings(_env_file=None, name="shop", table_prefix="")
        schema = SchemaReader(settings, engine=shop_catalog).read_schema()
        assert list(schema) == ["tbl_user", "other_log", "tbl_order_item"]

    def test_unknown_schema_yields_empty_map(self, shop_catalog: Engine) -> None:
        settings = DatabaseSettings(_env_file=None, name="nope")
        assert SchemaReader(settings, engine=shop_catalog).read_schema() == {}

    def test_injected_engine_is_reusable(
        self, db_settings: DatabaseSettings, shop_catalog: Engine
    ) -> None:
        reader = SchemaReader(db_settings, engine=shop_catalog)
        assert reader.read_schema() == reader.read_schema()

    def test_missing_catalog_is_a_query_error(
        self, db_settings: DatabaseSettings, tmp_path: pathlib.Path
    ) -> None:
        engine = create_engine(f"sqlite:///{tmp_path / 'bare.db'}", poolclass=NullPool)
        with pytest.raises(SchemaQueryError, match="shop"):
            SchemaReader(db_settings, engine=engine).read_schema()

    def test_undecodable_catalog_value_is_a_query_error(
        self, catalog_engine: Engine, seed
    ) -> None:
        seed(catalog_engine, [("db", b"tbl_\xff\xfe", "id", "int", "NO")])
        settings = DatabaseSettings(_env_file=None, name="db")
        with pytest.raises(SchemaQueryError, match="undecodable"):
            SchemaReader(settings, engine=catalog_engine).read_schema()

    def test_unopenable_database_is_a_connection_error(
        self, db_settings: DatabaseSettings, tmp_path: pathlib.Path
    ) -> None:
        url = f"sqlite:///{tmp_path / 'missing-dir' / 'db.sqlite'}"
        engine = create_engine(url, poolclass=NullPool)
        with pytest.raises(SchemaConnectionError):
            SchemaReader(db_settings, engine=engine).read_schema()

    def test_unreachable_mysql_is_a_connection_error(self) -> None:
        settings = DatabaseSettings(_env_file=None, host="127.0.0.1", port=1)
        with pytest.raises(SchemaConnectionError) as exc_info:
            read_schema(settings)
        assert isinstance(exc_info.value, ConnectionError)

    def test_connection_error_hides_password(self) -> None:
        settings = DatabaseSettings(
            _env_file=None, host="127.0.0.1", port=1, password="s3cret-pw"
        )
        with pytest.raises(SchemaConnectionError) as exc_info:
            read_schema(settings)
        assert "s3cret-pw" not in str(exc_info.value)
