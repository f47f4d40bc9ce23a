import sqlite3

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
CONSTRAINT_MESSAGE = (
    "The store rejected the record because it violates a table constraint "
    "(check the account type and cadence values) and try again."
)
PERMISSION_MESSAGE = (
    "Permission denied. Make sure the database file is writable by the current user."
)


class ValidationError(ValueError):
    """User-correctable input problem, raised before any store call."""


class CollaboratorError(Exception):
    """A read, create or delete call against the store failed."""


class CompensationError(CollaboratorError):
    """Undoing a partially completed operation failed as well."""


def describe_store_error(exc: BaseException | None) -> str:
    """Message to show for a store failure, rewriting the cases users can act on."""
    if exc is None:
        return GENERIC_ERROR_MESSAGE
    message = str(exc)
    lowered = message.lower()
    if isinstance(exc, sqlite3.IntegrityError) and "check constraint" in lowered:
        return CONSTRAINT_MESSAGE
    if isinstance(exc, sqlite3.Error) and (
        "readonly database" in lowered or "not authorized" in lowered
    ):
        return PERMISSION_MESSAGE
    return message or GENERIC_ERROR_MESSAGE
