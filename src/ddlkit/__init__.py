"""
ddlkit: cross-database schema definition and migration toolkit.

ddlkit describes database schemas in a database-agnostic model, renders them
as DDL for a range of database platforms, reads the model of a live
database and computes and applies the changes that migrate one schema to
another.
"""

__version__ = "0.1.0"
__author__ = "ddlkit Contributors"

from .exceptions import DdlKitError, ConfigurationError, DatabaseError, ModelError
from .model import Column, Database, ForeignKey, Index, Reference, Table, TypeCode
from .alteration import ModelComparator, apply_change, apply_changes, compare
from .platform import Platform, PlatformFactory, PlatformInfo

__all__ = [
    "__version__",
    "DdlKitError",
    "ConfigurationError",
    "DatabaseError",
    "ModelError",
    "Column",
    "Database",
    "ForeignKey",
    "Index",
    "Reference",
    "Table",
    "TypeCode",
    "ModelComparator",
    "apply_change",
    "apply_changes",
    "compare",
    "Platform",
    "PlatformFactory",
    "PlatformInfo",
]
