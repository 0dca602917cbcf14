"""
PostgreSQL metadata scans for ddlkit.

Implements the MetadataSource scans with information_schema and pg_catalog
queries whose result columns are aliased to the JDBC metadata names the
ModelReader expects.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from .connection import ConnectionPool
from ..model import TypeCode
from ..platform.reader import MetadataSource


logger = logging.getLogger(__name__)


# udt_name -> JDBC type code, as the PostgreSQL JDBC driver reports them
PG_TYPE_CODES: Dict[str, int] = {
    "bool": TypeCode.BIT,
    "bit": TypeCode.BIT,
    "int2": TypeCode.SMALLINT,
    "int4": TypeCode.INTEGER,
    "int8": TypeCode.BIGINT,
    "oid": TypeCode.BIGINT,
    "float4": TypeCode.REAL,
    "float8": TypeCode.DOUBLE,
    "numeric": TypeCode.NUMERIC,
    "money": TypeCode.DOUBLE,
    "bpchar": TypeCode.CHAR,
    "char": TypeCode.CHAR,
    "varchar": TypeCode.VARCHAR,
    "name": TypeCode.VARCHAR,
    "text": TypeCode.LONGVARCHAR,
    "bytea": TypeCode.LONGVARBINARY,
    "date": TypeCode.DATE,
    "time": TypeCode.TIME,
    "timetz": TypeCode.TIME,
    "timestamp": TypeCode.TIMESTAMP,
    "timestamptz": TypeCode.TIMESTAMP,
}

_SIZED_TYPES = ("bpchar", "varchar", "numeric")

_CAST_LITERAL = re.compile(r"^'(.*)'::[\w\s\"\[\]]+$", re.DOTALL)
_NULL_CAST = re.compile(r"^NULL::[\w\s\"\[\]]+$", re.IGNORECASE)


def normalize_default(value: Optional[str]) -> Optional[str]:
    """Strip the type cast PostgreSQL adds to literal defaults."""
    if value is None:
        return None
    if _NULL_CAST.match(value):
        return None
    match = _CAST_LITERAL.match(value)
    if match:
        return match.group(1).replace("''", "'")
    return value


class PostgresMetadataSource(MetadataSource):
    """Metadata scans over an asyncpg connection pool."""

    TABLES_QUERY = """
        SELECT t.table_catalog AS "TABLE_CAT",
               t.table_schema AS "TABLE_SCHEM",
               t.table_name AS "TABLE_NAME",
               CASE t.table_type WHEN 'BASE TABLE' THEN 'TABLE' ELSE t.table_type END AS "TABLE_TYPE",
               obj_description(format('%I.%I', t.table_schema, t.table_name)::regclass, 'pg_class') AS "REMARKS"
        FROM information_schema.tables t
        WHERE t.table_schema LIKE $1
          AND t.table_name LIKE $2
          AND t.table_schema NOT IN ('pg_catalog', 'information_schema')
          AND CASE t.table_type WHEN 'BASE TABLE' THEN 'TABLE' ELSE t.table_type END = ANY($3::text[])
        ORDER BY t.table_schema, t.table_name
    """

    COLUMNS_QUERY = """
        SELECT c.column_default AS "COLUMN_DEF",
               c.column_name AS "COLUMN_NAME",
               c.udt_name AS "TYPE_NAME",
               c.character_maximum_length AS "CHAR_LENGTH",
               c.numeric_precision AS "NUMERIC_PRECISION",
               c.numeric_scale AS "DECIMAL_DIGITS",
               c.numeric_precision_radix AS "NUM_PREC_RADIX",
               c.is_nullable AS "IS_NULLABLE",
               c.is_identity AS "IS_IDENTITY",
               c.ordinal_position AS "ORDINAL_POSITION",
               col_description(format('%I.%I', c.table_schema, c.table_name)::regclass,
                               c.ordinal_position::int) AS "REMARKS"
        FROM information_schema.columns c
        WHERE c.table_schema = $1 AND c.table_name = $2
        ORDER BY c.ordinal_position
    """

    PRIMARY_KEYS_QUERY = """
        SELECT kcu.column_name AS "COLUMN_NAME",
               kcu.ordinal_position AS "KEY_SEQ",
               tc.constraint_name AS "PK_NAME"
        FROM information_schema.table_constraints tc
        JOIN information_schema.key_column_usage kcu
          ON tc.constraint_name = kcu.constraint_name
         AND tc.table_schema = kcu.table_schema
         AND tc.table_name = kcu.table_name
        WHERE tc.constraint_type = 'PRIMARY KEY'
          AND tc.table_schema = $1 AND tc.table_name = $2
        ORDER BY kcu.ordinal_position
    """

    FOREIGN_KEYS_QUERY = """
        SELECT con.conname AS "FK_NAME",
               pt.relname AS "PKTABLE_NAME",
               pa.attname AS "PKCOLUMN_NAME",
               fa.attname AS "FKCOLUMN_NAME",
               k.seq AS "KEY_SEQ"
        FROM pg_constraint con
        JOIN pg_class ft ON ft.oid = con.conrelid
        JOIN pg_namespace n ON n.oid = ft.relnamespace
        JOIN pg_class pt ON pt.oid = con.confrelid
        CROSS JOIN LATERAL unnest(con.conkey, con.confkey) WITH ORDINALITY AS k(fk_attnum, pk_attnum, seq)
        JOIN pg_attribute fa ON fa.attrelid = con.conrelid AND fa.attnum = k.fk_attnum
        JOIN pg_attribute pa ON pa.attrelid = con.confrelid AND pa.attnum = k.pk_attnum
        WHERE con.contype = 'f' AND n.nspname = $1 AND ft.relname = $2
        ORDER BY con.conname, k.seq
    """

    INDEXES_QUERY = """
        SELECT ic.relname AS "INDEX_NAME",
               NOT ix.indisunique AS "NON_UNIQUE",
               k.seq AS "ORDINAL_POSITION",
               a.attname AS "COLUMN_NAME"
        FROM pg_index ix
        JOIN pg_class t ON t.oid = ix.indrelid
        JOIN pg_class ic ON ic.oid = ix.indexrelid
        JOIN pg_namespace n ON n.oid = t.relnamespace
        CROSS JOIN LATERAL unnest(ix.indkey::int2[]) WITH ORDINALITY AS k(attnum, seq)
        JOIN pg_attribute a ON a.attrelid = t.oid AND a.attnum = k.attnum
        WHERE n.nspname = $1 AND t.relname = $2
        ORDER BY ic.relname, k.seq
    """

    def __init__(self, pool: ConnectionPool, default_schema: str = "public"):
        self.pool = pool
        self.default_schema = default_schema

    def _schema(self, schema: Optional[str]) -> str:
        if not schema or "%" in schema:
            return self.default_schema
        return schema

    async def get_catalog(self) -> Optional[str]:
        return await self.pool.fetchval("SELECT current_database()")

    async def get_tables(
        self,
        catalog: Optional[str],
        schema_pattern: str,
        table_pattern: str,
        table_types: Sequence[str],
    ) -> List[Dict[str, Any]]:
        rows = await self.pool.fetch(
            self.TABLES_QUERY, schema_pattern or "%", table_pattern or "%", list(table_types)
        )
        return [dict(row) for row in rows]

    async def get_columns(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[Dict[str, Any]]:
        rows = await self.pool.fetch(self.COLUMNS_QUERY, self._schema(schema), table_name)
        return [self._column_row(dict(row)) for row in rows]

    @staticmethod
    def _column_row(row: Dict[str, Any]) -> Dict[str, Any]:
        type_name = row.get("TYPE_NAME")
        row["DATA_TYPE"] = int(PG_TYPE_CODES.get(type_name, TypeCode.OTHER))

        size = None
        if type_name in ("bpchar", "varchar"):
            size = row.get("CHAR_LENGTH")
        elif type_name == "numeric":
            size = row.get("NUMERIC_PRECISION")
        row["COLUMN_SIZE"] = str(size) if size is not None else None
        if type_name not in _SIZED_TYPES:
            row["DECIMAL_DIGITS"] = None

        default = row.get("COLUMN_DEF")
        auto_increment = row.get("IS_IDENTITY") == "YES" or (
            default is not None and default.startswith("nextval(")
        )
        row["IS_AUTOINCREMENT"] = "YES" if auto_increment else "NO"
        row["COLUMN_DEF"] = None if auto_increment else normalize_default(default)
        return row

    async def get_primary_keys(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[Dict[str, Any]]:
        rows = await self.pool.fetch(self.PRIMARY_KEYS_QUERY, self._schema(schema), table_name)
        return [dict(row) for row in rows]

    async def get_foreign_keys(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[Dict[str, Any]]:
        rows = await self.pool.fetch(self.FOREIGN_KEYS_QUERY, self._schema(schema), table_name)
        return [dict(row) for row in rows]

    async def get_indexes(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[Dict[str, Any]]:
        rows = await self.pool.fetch(self.INDEXES_QUERY, self._schema(schema), table_name)
        return [dict(row) for row in rows]
