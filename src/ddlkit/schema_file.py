"""
YAML schema definition files.

A schema file describes a Database:

    name: shop
    tables:
      - name: customer
        columns:
          - {name: id, type: INTEGER, primary_key: true, required: true, auto_increment: true}
          - {name: email, type: VARCHAR, size: 100, required: true}
        indexes:
          - {name: customer_email, unique: true, columns: [email]}
        foreign_keys:
          - name: order_customer
            foreign_table: customer
            references:
              - {local: customer_id, foreign: id}

Index columns may also be given as mappings with name and size.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .exceptions import ModelError, SchemaFileError
from .model import Column, Database, ForeignKey, IndexColumn, Reference, Table, create_index


logger = logging.getLogger(__name__)


def _require_mapping(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaFileError(f"Expected a mapping for {what}, got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaFileError(f"Expected a list for {what}, got {type(value).__name__}")
    return value


def _require_name(data: Dict[str, Any], what: str) -> str:
    name = data.get("name")
    if not name or not isinstance(name, str):
        raise SchemaFileError(f"Missing name for {what}")
    return name


def _parse_column(data: Any, table_name: str) -> Column:
    data = _require_mapping(data, f"a column of table '{table_name}'")
    name = _require_name(data, f"a column of table '{table_name}'")
    size = data.get("size")
    return Column(
        name,
        type_name=str(data.get("type", "VARCHAR")),
        size=str(size) if size is not None else None,
        scale=int(data.get("scale", 0)),
        required=bool(data.get("required", False)),
        primary_key=bool(data.get("primary_key", False)),
        auto_increment=bool(data.get("auto_increment", False)),
        default_value=None if data.get("default") is None else str(data["default"]),
        description=data.get("description"),
        java_name=data.get("java_name"),
    )


def _parse_index(data: Any, table_name: str):
    data = _require_mapping(data, f"an index of table '{table_name}'")
    index = create_index(bool(data.get("unique", False)), data.get("name"))
    columns = _require_list(data.get("columns"), f"the columns of an index on '{table_name}'")
    if not columns:
        raise SchemaFileError(f"Index on table '{table_name}' has no columns")
    for position, column in enumerate(columns):
        if isinstance(column, dict):
            size = column.get("size")
            index.add_column(
                IndexColumn(
                    _require_name(column, f"an index column of table '{table_name}'"),
                    position,
                    str(size) if size is not None else None,
                )
            )
        else:
            index.add_column(IndexColumn(str(column), position))
    return index


def _parse_foreign_key(data: Any, table_name: str) -> ForeignKey:
    data = _require_mapping(data, f"a foreign key of table '{table_name}'")
    foreign_table = data.get("foreign_table")
    if not foreign_table:
        raise SchemaFileError(f"Foreign key on table '{table_name}' has no foreign table")
    foreign_key = ForeignKey(data.get("name"), str(foreign_table))
    references = _require_list(
        data.get("references"), f"the references of a foreign key on '{table_name}'"
    )
    if not references:
        raise SchemaFileError(f"Foreign key on table '{table_name}' has no references")
    for sequence, reference in enumerate(references):
        reference = _require_mapping(reference, f"a reference of a foreign key on '{table_name}'")
        if not reference.get("local") or not reference.get("foreign"):
            raise SchemaFileError(
                f"Reference of a foreign key on table '{table_name}' needs local and foreign columns"
            )
        foreign_key.add_reference(
            Reference(str(reference["local"]), str(reference["foreign"]), sequence)
        )
    return foreign_key


def _parse_table(data: Any) -> Table:
    data = _require_mapping(data, "a table")
    name = _require_name(data, "a table")
    table = Table(
        name,
        type=data.get("type", "TABLE"),
        catalog=data.get("catalog"),
        schema=data.get("schema"),
        description=data.get("description"),
    )
    for column in _require_list(data.get("columns"), f"the columns of table '{name}'"):
        table.add_column(_parse_column(column, name))
    for index in _require_list(data.get("indexes"), f"the indexes of table '{name}'"):
        table.add_index(_parse_index(index, name))
    for foreign_key in _require_list(data.get("foreign_keys"), f"the foreign keys of table '{name}'"):
        table.add_foreign_key(_parse_foreign_key(foreign_key, name))
    return table


def schema_from_dict(data: Any) -> Database:
    """Build a Database from an already parsed schema document."""
    data = _require_mapping(data, "the schema document")
    database = Database(data.get("name"), data.get("catalog"), data.get("schema"))
    for table in _require_list(data.get("tables"), "the tables"):
        database.add_table(_parse_table(table))

    for table in database.tables:
        for foreign_key in table.foreign_keys:
            if database.find_table(foreign_key.foreign_table_name) is None:
                raise ModelError(
                    f"Foreign key on table '{table.name}' references unknown table "
                    f"'{foreign_key.foreign_table_name}'",
                    {"table": table.name, "foreign_table": foreign_key.foreign_table_name},
                )
    return database


def parse_schema(text: str) -> Database:
    """Parse a YAML schema document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaFileError(f"Invalid YAML in schema definition: {e}", cause=e)
    if data is None:
        raise SchemaFileError("Schema definition is empty")
    return schema_from_dict(data)


def load_schema(path: Union[str, Path]) -> Database:
    """Load a schema definition file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        raise SchemaFileError(f"Schema file not found: {path}", {"path": str(path)})

    database = parse_schema(text)
    logger.info(f"Loaded schema with {database.table_count} tables from {path}")
    return database


def _dump_column(column: Column) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": column.name, "type": column.type}
    if column.size is not None:
        data["size"] = column.size
    if column.scale:
        data["scale"] = column.scale
    for attribute in ("primary_key", "required", "auto_increment"):
        if getattr(column, attribute):
            data[attribute] = True
    if column.default_value is not None:
        data["default"] = column.default_value
    if column.description:
        data["description"] = column.description
    if column.java_name:
        data["java_name"] = column.java_name
    return data


def dump_schema(database: Database) -> Dict[str, Any]:
    """The schema document describing a Database."""
    tables = []
    for table in database.tables:
        table_data: Dict[str, Any] = {"name": table.name}
        if table.description:
            table_data["description"] = table.description
        table_data["columns"] = [_dump_column(column) for column in table.columns]

        if table.indexes:
            table_data["indexes"] = []
            for index in table.indexes:
                index_data: Dict[str, Any] = {}
                if index.name:
                    index_data["name"] = index.name
                index_data["unique"] = index.is_unique
                index_data["columns"] = [
                    {"name": column.name, "size": column.size} if column.size else column.name
                    for column in index.columns
                ]
                table_data["indexes"].append(index_data)

        if table.foreign_keys:
            table_data["foreign_keys"] = []
            for foreign_key in table.foreign_keys:
                fk_data: Dict[str, Any] = {}
                if foreign_key.name:
                    fk_data["name"] = foreign_key.name
                fk_data["foreign_table"] = foreign_key.foreign_table_name
                fk_data["references"] = [
                    {"local": reference.local_column_name, "foreign": reference.foreign_column_name}
                    for reference in foreign_key.references
                ]
                table_data["foreign_keys"].append(fk_data)
        tables.append(table_data)

    data: Dict[str, Any] = {}
    if database.name:
        data["name"] = database.name
    data["tables"] = tables
    return data


def dump_schema_yaml(database: Database) -> str:
    return yaml.safe_dump(dump_schema(database), default_flow_style=False, sort_keys=False)


def save_schema(database: Database, path: Union[str, Path]) -> None:
    """Write a Database as schema definition file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_schema_yaml(database))
    logger.info(f"Saved schema with {database.table_count} tables to {path}")
