"""
Configuration system for ddlkit using Pydantic.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, ConfigDict, field_validator
from pydantic_settings import BaseSettings

from .database.connection import ConnectionConfig
from .exceptions import ConfigurationError
from .platform.factory import PlatformFactory


class DatabaseConfig(BaseModel):
    """Configuration for a single database."""

    name: str = Field(..., description="Database configuration name")
    url: str = Field(..., description="Connection URL")
    platform: Optional[str] = Field(
        None, description="Platform name; derived from the URL when omitted"
    )
    schema_name: Optional[str] = Field(
        None, alias="schema", description="Schema to read and alter"
    )
    min_size: int = Field(1, description="Minimum connections in pool")
    max_size: int = Field(5, description="Maximum connections in pool")
    command_timeout: float = Field(60.0, description="Command timeout in seconds")

    model_config = ConfigDict(populate_by_name=True)

    def get_platform_name(self) -> str:
        """The configured platform, or the one serving the URL's scheme."""
        if self.platform:
            return self.platform

        name = PlatformFactory.platform_for_url(self.url)
        if name is None:
            raise ConfigurationError(
                f"Cannot determine the platform of database '{self.name}' from its URL",
                {"database": self.name},
            )
        return name

    def to_connection_config(self) -> ConnectionConfig:
        return ConnectionConfig.from_url(
            self.url,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )


class GenerationConfig(BaseModel):
    """SQL generation and execution options."""

    delimited_identifiers: bool = Field(False, description="Quote all identifiers")
    sql_comments: bool = Field(True, description="Write comments into generated SQL")
    drop_tables_first: bool = Field(
        False, description="Drop tables before creating them"
    )
    continue_on_error: bool = Field(
        False, description="Keep executing after a failed statement"
    )
    case_sensitive: bool = Field(False, description="Compare names case sensitively")
    do_drops: bool = Field(
        True, description="Drop tables and columns missing from the desired model"
    )
    modify_columns: bool = Field(True, description="Alter existing columns")


class ReadingConfig(BaseModel):
    """Live model reading options."""

    catalog: Optional[str] = Field(None, description="Catalog to read")
    schema_pattern: str = Field("%", description="Schema pattern to read")
    table_types: List[str] = Field(
        default_factory=lambda: ["TABLE"], description="Table types to read"
    )

    @field_validator("table_types")
    @classmethod
    def validate_table_types(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("At least one table type is required")
        return [table_type.upper() for table_type in v]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Log level"
    )
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    file: Optional[str] = Field(None, description="Log file path")
    max_size: int = Field(10485760, description="Max log file size in bytes")  # 10MB
    backup_count: int = Field(5, description="Number of backup log files")


class DdlKitConfig(BaseSettings):
    """Main ddlkit configuration."""

    debug: bool = Field(False, description="Enable debug mode")
    dry_run: bool = Field(False, description="Log statements instead of executing them")

    databases: List[DatabaseConfig] = Field(
        default_factory=list, description="Database configurations"
    )
    generation: GenerationConfig = Field(
        default_factory=GenerationConfig, description="SQL generation configuration"
    )
    reading: ReadingConfig = Field(
        default_factory=ReadingConfig, description="Model reading configuration"
    )

    # System configuration
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(
        env_file=".env",
        env_prefix="DDLKIT_",
        case_sensitive=False,
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "DdlKitConfig":
        """Load configuration from a YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            # Expand environment variables in the data
            data = cls._expand_env_vars(data)
            return cls(**data)
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    @classmethod
    def _expand_env_vars(cls, data: Any) -> Any:
        """Recursively expand environment variables in configuration data."""
        if isinstance(data, dict):
            return {k: cls._expand_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [cls._expand_env_vars(item) for item in data]
        elif isinstance(data, str):
            return os.path.expandvars(data)
        else:
            return data

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to a YAML file."""
        data: Dict[str, Any] = self.model_dump(by_alias=True, exclude_none=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def get_database(self, name: str) -> DatabaseConfig:
        """Get database configuration by name."""
        for db in self.databases:
            if db.name == name:
                return db
        raise ConfigurationError(f"Database configuration '{name}' not found")

    def validate_config(self) -> None:
        """Validate the entire configuration for consistency."""
        names = set()
        for db in self.databases:
            if db.name in names:
                raise ConfigurationError(f"Duplicate database configuration '{db.name}'")
            names.add(db.name)

            platform_name = db.get_platform_name()
            if not PlatformFactory.is_platform_supported(platform_name):
                raise ConfigurationError(
                    f"Database '{db.name}' uses unsupported platform '{platform_name}'",
                    {"database": db.name},
                )
