"""
Unit tests for the ANSI SQL builder.
"""

import pytest

from ddlkit.alteration import (
    AddColumn,
    ColumnAutoIncrementChange,
    ColumnDefaultValueChange,
    ColumnRequiredChange,
    ColumnSizeChange,
    RemoveColumn,
    RemoveForeignKey,
    RemoveIndex,
    RemovePrimaryKey,
    RemoveTable,
)
from ddlkit.exceptions import ModelError, PlatformError, TargetNotFoundError
from ddlkit.model import Column, Database, ForeignKey, Reference, Table, TypeCode, create_index
from ddlkit.platform import PlatformFactory, PlatformInfo, SqlBuilder

from tests.conftest import make_customer_table, make_order_table


DASHES = "-" * 71

CUSTOMER_DDL = (
    "CREATE TABLE customer\n"
    "(\n"
    "    id INTEGER NOT NULL IDENTITY,\n"
    "    name VARCHAR(100) NOT NULL,\n"
    "    email VARCHAR(254),\n"
    "    PRIMARY KEY (id)\n"
    ");\n"
    "\n"
    "CREATE UNIQUE INDEX customer_email ON customer (email);\n"
    "\n"
)

PURCHASE_DDL = (
    "CREATE TABLE purchase\n"
    "(\n"
    "    id INTEGER NOT NULL,\n"
    "    customer_id INTEGER NOT NULL,\n"
    "    total DECIMAL(10,2) DEFAULT 0,\n"
    "    note VARCHAR(50) DEFAULT 'n/a',\n"
    "    PRIMARY KEY (id)\n"
    ");\n"
    "\n"
)

PURCHASE_FK_DDL = (
    "ALTER TABLE purchase\n"
    "    ADD CONSTRAINT purchase_customer FOREIGN KEY (customer_id) REFERENCES customer (id);\n"
    "\n"
)


def _header(name):
    return f"-- {DASHES}\n-- {name}\n-- {DASHES}\n\n"


@pytest.fixture
def info():
    return PlatformInfo()


@pytest.fixture
def builder(info):
    return SqlBuilder(info)


class TestNames:
    """Test cases for identifier shortening and generated names."""

    def test_short_names_are_kept(self, builder):
        assert builder.shorten_name("customer", 10) == "customer"
        assert builder.shorten_name("customer", -1) == "customer"

    def test_middle_is_replaced_by_underscore(self, builder):
        assert builder.shorten_name("abcdefghij", 6) == "abc_ij"

    def test_no_double_underscore_at_the_cut(self, builder):
        assert builder.shorten_name("ab_cdefghij", 6) == "ab_ij"

    def test_table_names_honour_identifier_limit(self, info, builder):
        info.max_identifier_length = 10
        assert builder.get_table_name(Table("abcdefghijklmno")) == "abcde_lmno"

    def test_constraint_name(self, builder, customer_table):
        assert builder.get_constraint_name("seq", customer_table, "id") == "seq_customer_id"
        assert builder.get_primary_key_name(customer_table) == "customer_PK"

    def test_unnamed_index_name(self, builder, customer_table):
        index = create_index(False, None, ["name", "email"])
        assert builder.get_index_name(customer_table, index) == "customer_IDX_name_email"

    def test_unnamed_foreign_key_name(self, builder):
        table = make_order_table()
        foreign_key = ForeignKey(None, "customer", [Reference("customer_id", "id")])
        assert builder.get_foreign_key_name(table, foreign_key) == "purchase_FK_customer_id_customer"

    def test_delimited_identifiers(self, info, customer_table):
        builder = SqlBuilder(info, use_delimited_identifiers=True)
        assert builder.drop_table(customer_table) == 'DROP TABLE "customer";\n\n'


class TestColumns:
    """Test cases for column definitions."""

    def test_sized_type_uses_default_size(self, info, builder):
        info.add_default_size(TypeCode.VARCHAR, 254)
        assert builder.get_sql_type(Column("c", "VARCHAR")) == "VARCHAR(254)"

    def test_unsized_type_without_default(self, builder):
        assert builder.get_sql_type(Column("c", "VARCHAR")) == "VARCHAR"
        assert builder.get_sql_type(Column("c", "INTEGER", size="10")) == "INTEGER"

    def test_precision_and_scale(self, info, builder):
        assert builder.get_sql_type(Column("c", "DECIMAL", size="10,2")) == "DECIMAL(10,2)"
        info.add_default_size(TypeCode.NUMERIC, "15,15")
        assert builder.get_sql_type(Column("c", "NUMERIC")) == "NUMERIC(15,15)"

    def test_native_type_with_fixed_size(self, info, builder):
        info.add_native_type_mapping(TypeCode.BIGINT, "NUMBER(38)")
        assert builder.get_sql_type(Column("c", "BIGINT", size="20")) == "NUMBER(38)"

    def test_text_default_is_quoted_and_escaped(self, builder):
        column = Column("c", "VARCHAR", size="10", default_value="it's")
        assert builder.get_default_value(column) == "'it''s'"

    def test_numeric_default_is_literal(self, builder):
        assert builder.get_default_value(Column("c", "INTEGER", default_value="42")) == "42"
        assert builder.get_default_value(Column("c", "INTEGER")) is None

    def test_escape_longest_sequence_first(self, info, builder):
        info.add_escaped_char_sequence("\\", "\\\\")
        assert builder.escape_string_value("a'b\\c") == "a''b\\\\c"

    def test_lob_default_dropped_when_unsupported(self, info, builder, customer_table):
        info.default_values_for_lobs_supported = False
        column = Column("c", "LONGVARCHAR", default_value="x")
        assert builder.get_column_definition(customer_table, column) == "c LONGVARCHAR"

    def test_explicit_null(self, info, builder, customer_table):
        info.null_as_default_value_required = True
        column = Column("c", "VARCHAR", size="10")
        assert builder.get_column_definition(customer_table, column) == "c VARCHAR(10) NULL"


class TestTables:
    """Test cases for CREATE and DROP TABLE."""

    def test_create_table(self, builder, customer_table):
        assert builder.create_table(Database(), customer_table) == CUSTOMER_DDL

    def test_create_tables_with_comments(self, builder, shop_database):
        expected = (
            _header("customer") + CUSTOMER_DDL
            + _header("purchase") + PURCHASE_DDL
            + PURCHASE_FK_DDL
        )
        assert builder.create_tables(shop_database) == expected

    def test_create_tables_without_comments(self, info, shop_database):
        builder = SqlBuilder(info, sql_comments=False)
        assert builder.create_tables(shop_database) == CUSTOMER_DDL + PURCHASE_DDL + PURCHASE_FK_DDL

    def test_rendering_is_repeatable(self, builder, shop_database):
        assert builder.create_tables(shop_database) == builder.create_tables(shop_database)

    @pytest.mark.parametrize("name", PlatformFactory.get_supported_platforms())
    def test_rendering_is_deterministic(self, name, shop_database):
        desired = shop_database.copy()
        desired.find_table("customer").add_column(Column("phone", "VARCHAR", size="20"))
        first = PlatformFactory.create_new_platform_instance(name)
        second = PlatformFactory.create_new_platform_instance(name)

        assert first.get_create_tables_sql(shop_database, True) == (
            second.get_create_tables_sql(shop_database.copy(), True)
        )
        assert first.get_drop_tables_sql(shop_database) == second.get_drop_tables_sql(shop_database.copy())
        assert first.get_alter_tables_sql(shop_database, desired) == (
            second.get_alter_tables_sql(shop_database.copy(), desired.copy())
        )

    def test_referenced_tables_are_created_first(self, info):
        database = Database()
        database.add_table(make_order_table())
        database.add_table(make_customer_table())
        sql = SqlBuilder(info, sql_comments=False).create_tables(database)
        assert sql.index("CREATE TABLE customer") < sql.index("CREATE TABLE purchase")

    def test_cyclic_tables_keep_declaration_order(self, info):
        database = Database()
        for name, target in (("a", "b"), ("b", "a")):
            table = Table(name)
            table.add_column(Column("id", "INTEGER", primary_key=True))
            table.add_column(Column("ref", "INTEGER"))
            table.add_foreign_key(ForeignKey(None, target, [Reference("ref", "id")]))
            database.add_table(table)
        sql = SqlBuilder(info, sql_comments=False).create_tables(database)
        assert sql.index("CREATE TABLE a") < sql.index("CREATE TABLE b")
        assert sql.count("ADD CONSTRAINT") == 2

    def test_drop_tables(self, builder, shop_database):
        expected = (
            "ALTER TABLE purchase\n    DROP CONSTRAINT purchase_customer;\n\n"
            + _header("purchase") + "DROP TABLE purchase;\n\n"
            + _header("customer") + "DROP TABLE customer;\n\n"
        )
        assert builder.drop_tables(shop_database) == expected

    def test_drop_tables_first(self, info, shop_database):
        builder = SqlBuilder(info, sql_comments=False)
        sql = builder.create_tables(shop_database, drop_tables_first=True)
        assert sql.startswith("ALTER TABLE purchase\n    DROP CONSTRAINT purchase_customer;")
        assert sql.index("DROP TABLE customer") < sql.index("CREATE TABLE customer")

    def test_embedded_foreign_keys(self, info, shop_database):
        info.foreign_keys_embedded = True
        builder = SqlBuilder(info, sql_comments=False)
        purchase = shop_database.find_table("purchase")
        sql = builder.create_table(shop_database, purchase)
        assert (
            "    PRIMARY KEY (id),\n"
            "    CONSTRAINT purchase_customer FOREIGN KEY (customer_id) REFERENCES customer (id)\n"
        ) in sql
        assert builder.create_external_foreign_keys(shop_database, purchase) == ""

    def test_embedded_indexes(self, info, builder, customer_table):
        info.indexes_embedded = True
        sql = builder.create_table(Database(), customer_table)
        assert "    UNIQUE INDEX customer_email (email)\n" in sql
        assert "CREATE UNIQUE INDEX" not in sql

    def test_separate_primary_key(self, info, builder, customer_table):
        info.primary_key_embedded = False
        sql = builder.create_table(Database(), customer_table)
        assert "PRIMARY KEY (id)\n" not in sql
        assert "ALTER TABLE customer\n    ADD CONSTRAINT customer_PK PRIMARY KEY (id);\n\n" in sql

    def test_index_without_columns_raises(self, builder, customer_table):
        with pytest.raises(ModelError):
            builder.create_index(customer_table, create_index(False, "empty"))

    def test_foreign_key(self, builder, shop_database):
        purchase = shop_database.find_table("purchase")
        sql = builder.create_foreign_key(shop_database, purchase, purchase.get_foreign_key(0))
        assert sql == PURCHASE_FK_DDL


class TestRenderChange:
    """Test cases for rendering single change records."""

    def test_add_column(self, builder, shop_database):
        change = AddColumn("customer", Column("phone", "VARCHAR", size="20"))
        assert builder.render_change(change, shop_database) == (
            "ALTER TABLE customer\n    ADD COLUMN phone VARCHAR(20);\n\n"
        )

    def test_remove_column(self, builder, shop_database):
        assert builder.render_change(RemoveColumn("customer", "email"), shop_database) == (
            "ALTER TABLE customer\n    DROP COLUMN email;\n\n"
        )

    def test_required_change(self, builder, shop_database):
        sql = builder.render_change(ColumnRequiredChange("customer", "email"), shop_database)
        assert sql == "ALTER TABLE customer\n    ALTER COLUMN email SET NOT NULL;\n\n"

    def test_rendering_does_not_touch_the_model(self, builder, shop_database):
        builder.render_change(ColumnRequiredChange("customer", "email"), shop_database)
        assert not shop_database.find_table("customer").find_column("email").required

    def test_size_change(self, builder, shop_database):
        sql = builder.render_change(ColumnSizeChange("customer", "name", "200"), shop_database)
        assert sql == "ALTER TABLE customer\n    ALTER COLUMN name SET DATA TYPE VARCHAR(200);\n\n"

    def test_default_value_removed(self, builder, shop_database):
        sql = builder.render_change(
            ColumnDefaultValueChange("purchase", "note", None), shop_database
        )
        assert sql == "ALTER TABLE purchase\n    ALTER COLUMN note DROP DEFAULT;\n\n"

    def test_auto_increment_removed(self, builder, shop_database):
        sql = builder.render_change(ColumnAutoIncrementChange("customer", "id"), shop_database)
        assert sql == "ALTER TABLE customer\n    ALTER COLUMN id DROP IDENTITY;\n\n"

    def test_remove_primary_key(self, builder, shop_database):
        sql = builder.render_change(RemovePrimaryKey("customer", ["id"]), shop_database)
        assert sql == "ALTER TABLE customer\n    DROP CONSTRAINT customer_PK;\n\n"

    def test_remove_index_uses_model_name(self, builder, shop_database):
        change = RemoveIndex("customer", create_index(True, None, ["email"]))
        assert builder.render_change(change, shop_database) == "DROP INDEX customer_email;\n\n"

    def test_remove_foreign_key_uses_model_name(self, builder, shop_database):
        change = RemoveForeignKey(
            "purchase", ForeignKey(None, "customer", [Reference("customer_id", "id")])
        )
        assert builder.render_change(change, shop_database) == (
            "ALTER TABLE purchase\n    DROP CONSTRAINT purchase_customer;\n\n"
        )

    def test_remove_table(self, builder, shop_database):
        assert builder.render_change(RemoveTable("purchase"), shop_database) == (
            "DROP TABLE purchase;\n\n"
        )

    def test_unknown_table_raises(self, builder, shop_database):
        with pytest.raises(TargetNotFoundError):
            builder.render_change(RemoveTable("missing"), shop_database)

    def test_unknown_column_raises(self, builder, shop_database):
        with pytest.raises(TargetNotFoundError):
            builder.render_change(ColumnRequiredChange("customer", "missing"), shop_database)

    def test_modify_style(self, info, builder, shop_database):
        info.column_modification_style = "modify"
        sql = builder.render_change(ColumnRequiredChange("customer", "email"), shop_database)
        assert sql == "ALTER TABLE customer\n    MODIFY COLUMN email VARCHAR(254) NOT NULL;\n\n"

    def test_modify_in_parens_style(self, info, builder, shop_database):
        info.column_modification_style = "modify_parens"
        sql = builder.render_change(ColumnRequiredChange("customer", "email"), shop_database)
        assert sql == "ALTER TABLE customer\n    MODIFY (email VARCHAR(254) NOT NULL);\n\n"

    def test_unknown_modification_style_raises(self, info, builder, shop_database):
        info.column_modification_style = "rewrite"
        with pytest.raises(PlatformError):
            builder.render_change(ColumnRequiredChange("customer", "email"), shop_database)
