"""Exception hierarchy for schema-sync.

The comparator and SQL generators never raise; these errors are raised at
the I/O boundary (configuration, connections, introspection, execution) so
callers can tell failure classes apart.
"""


class SchemaSyncError(Exception):
    """Base class for all schema-sync errors."""

    pass


class DatabaseConnectionError(SchemaSyncError):
    """Raised when a database connection cannot be established."""

    pass


class DatabaseError(SchemaSyncError):
    """Raised when the database driver reports an error."""

    pass


class ValidationError(SchemaSyncError):
    """Raised when caller-supplied input is invalid."""

    pass


class NotFoundError(SchemaSyncError):
    """Raised when a named profile or object does not exist."""

    pass


class InternalError(SchemaSyncError):
    """Raised for unexpected failures inside schema-sync.

    ``execute_statements`` wraps executor exceptions that are not
    ``SchemaSyncError`` subclasses in this.
    """

    pass


class StatementExecutionError(DatabaseError):
    """Raised when a statement fails during sync execution.

    Execution stops at the first failing statement; ``index`` is its
    0-based position in the submitted batch.

    Example:
        >>> err = StatementExecutionError(2, "DROP TABLE `t`;", "Unknown table 't'")
        >>> err.index
        2
    """

    def __init__(self, index: int, sql: str, message: str) -> None:
        self.index = index
        self.sql = sql
        self.message = message
        super().__init__(
            f"Failed to execute statement {index + 1}: {sql}\nError: {message}"
        )
