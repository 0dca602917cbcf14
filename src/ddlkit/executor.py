"""
Execution of generated DDL scripts.

A script is split into statements and each statement is executed on its
own through the connection pool. Depending on the continue_on_error flag a
failing statement either aborts the run with an ExecutionError or is
recorded and skipped.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .database.connection import ConnectionPool
from .exceptions import ExecutionError


logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Outcome of executing a DDL script."""

    statements: List[str] = field(default_factory=list)
    succeeded: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statements": len(self.statements),
            "succeeded": self.succeeded,
            "failed": self.failed,
            "errors": list(self.errors),
            "execution_time_ms": self.execution_time_ms,
        }


def split_statements(
    sql: str,
    delimiter: str = ";",
    comment_prefix: str = "--",
    quote_char: str = "'",
    backslash_escapes: bool = False,
) -> List[str]:
    """
    Split a script into statements.

    A statement ends at a delimiter that closes a line outside of a quoted
    literal; exactly one trailing delimiter is removed, so trigger bodies
    may keep their own. Comment lines between statements are dropped.
    With backslash_escapes a backslash inside a literal escapes the next
    character, as in MySQL.
    """
    statements: List[str] = []
    current: List[str] = []
    in_quote = False

    for line in sql.splitlines():
        stripped = line.strip()
        if not in_quote and not current and (not stripped or stripped.startswith(comment_prefix)):
            continue

        escaped = False
        for char in line:
            if escaped:
                escaped = False
            elif in_quote and backslash_escapes and char == "\\":
                escaped = True
            elif char == quote_char:
                in_quote = not in_quote

        trimmed = line.rstrip()
        if not in_quote and trimmed.endswith(delimiter):
            current.append(trimmed[: len(trimmed) - len(delimiter)])
            statement = "\n".join(current).strip()
            if statement:
                statements.append(statement)
            current = []
        else:
            current.append(line)

    statement = "\n".join(current).strip()
    if statement:
        statements.append(statement)
    return statements


class SqlExecutor:
    """Executes DDL scripts statement by statement."""

    def __init__(
        self,
        pool: ConnectionPool,
        statement_delimiter: str = ";",
        comment_prefix: str = "--",
        value_quote_char: str = "'",
        backslash_escapes: bool = False,
        dry_run: bool = False,
    ):
        self.pool = pool
        self.statement_delimiter = statement_delimiter
        self.comment_prefix = comment_prefix
        self.value_quote_char = value_quote_char
        self.backslash_escapes = backslash_escapes
        self.dry_run = dry_run

    def split(self, sql: str) -> List[str]:
        return split_statements(
            sql,
            self.statement_delimiter,
            self.comment_prefix,
            self.value_quote_char,
            self.backslash_escapes,
        )

    async def execute(self, sql: str, continue_on_error: bool = False) -> ExecutionResult:
        """Execute a whole script."""
        return await self.execute_statements(self.split(sql), continue_on_error)

    async def execute_statements(
        self, statements: List[str], continue_on_error: bool = False
    ) -> ExecutionResult:
        result = ExecutionResult(statements=list(statements))
        start_time = time.time()

        if self.dry_run:
            for statement in statements:
                logger.info(f"DRY RUN: Would execute: {statement}")
            return result

        for statement in statements:
            try:
                await self.pool.execute(statement)
                result.succeeded += 1
                logger.debug(f"Executed: {statement}")
            except Exception as e:
                result.failed += 1
                result.errors.append(f"{statement}: {e}")
                if not continue_on_error:
                    logger.error(f"Stopping execution due to failure: {e}")
                    raise ExecutionError(statement, cause=e) from e
                logger.warning(f"Ignoring failed statement ({e}): {statement}")

        result.execution_time_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Executed {result.succeeded} of {len(statements)} statements "
            f"({result.failed} failed) in {result.execution_time_ms:.0f}ms"
        )
        return result
