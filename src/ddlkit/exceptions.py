"""
Exception classes for ddlkit.
"""

from typing import Any, Dict, List, Optional


class DdlKitError(Exception):
    """Base exception for all ddlkit errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        result = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            result += f" [{details_str}]"
        if self.cause:
            result += f" (caused by: {self.cause})"
        return result


class ConfigurationError(DdlKitError):
    """Raised when there's an error in configuration."""

    pass


class ModelError(DdlKitError):
    """Raised when a schema model would violate one of its invariants."""

    pass


class UnknownTypeError(ModelError):
    """Raised when a column is given a type name or code that is not known."""

    def __init__(
        self,
        type_name: Optional[str] = None,
        type_code: Optional[int] = None,
        column_name: Optional[str] = None,
    ) -> None:
        if type_name is not None:
            message = f"Unknown JDBC type {type_name}"
        else:
            message = f"Unknown JDBC type code {type_code}"

        details = {}
        if column_name:
            details["column"] = column_name

        super().__init__(message, details)
        self.type_name = type_name
        self.type_code = type_code
        self.column_name = column_name


class SchemaFileError(DdlKitError):
    """Raised when a schema definition file cannot be parsed."""

    pass


class PlatformError(DdlKitError):
    """Raised when a database platform is unknown or unsupported."""

    pass


class DatabaseError(DdlKitError):
    """Raised when there's an error with database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when there's an error establishing or maintaining database connections."""

    pass


class DatabaseConfigurationError(DatabaseError):
    """Raised when there's an error in database configuration."""

    pass


class ReadError(DatabaseError):
    """Raised when the database metadata cannot be read."""

    def __init__(
        self,
        message: str,
        catalog: Optional[str] = None,
        schema: Optional[str] = None,
        table_name: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        details = {}
        if catalog:
            details["catalog"] = catalog
        if schema:
            details["schema"] = schema
        if table_name:
            details["table"] = table_name

        super().__init__(message, details, cause)
        self.catalog = catalog
        self.schema = schema
        self.table_name = table_name


class ExecutionError(DatabaseError):
    """Raised when a DDL statement fails and errors are not to be ignored."""

    def __init__(self, statement: str, cause: Optional[Exception] = None) -> None:
        super().__init__("Error while executing SQL statement", {"sql": statement}, cause)
        self.statement = statement


class AlterationError(DdlKitError):
    """Raised when there's an error computing or applying schema changes."""

    pass


class TargetNotFoundError(AlterationError):
    """Raised when a change cannot find its target in the model it is applied to."""

    def __init__(
        self,
        change_type: str,
        table_name: str,
        target_kind: str = "table",
        target_name: Optional[str] = None,
    ) -> None:
        if target_kind == "table":
            message = f"Cannot apply {change_type}: table '{table_name}' not found"
        else:
            message = (
                f"Cannot apply {change_type}: {target_kind} '{target_name}' "
                f"not found in table '{table_name}'"
            )

        details = {"table": table_name}
        if target_kind != "table":
            details[target_kind] = target_name

        super().__init__(message, details)
        self.change_type = change_type
        self.table_name = table_name
        self.target_kind = target_kind
        self.target_name = target_name


class OrderingError(AlterationError):
    """Raised when foreign keys form a cycle that defeats a topological table order."""

    def __init__(self, cycle: List[str]) -> None:
        super().__init__(
            f"Cyclic foreign key dependency between tables: {', '.join(cycle)}",
            {"tables": len(cycle)},
        )
        self.cycle = list(cycle)
