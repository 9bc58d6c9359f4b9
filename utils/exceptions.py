"""Error taxonomy shared by the DAOs, services and UI forms."""


class LedgerError(Exception):
    """Base class for every error the application raises on purpose."""


class ValidationError(LedgerError, ValueError):
    """Missing required field, non-positive amount or limit, malformed input."""


class NotFoundError(LedgerError, LookupError):
    """A referenced category, transaction or budget does not exist."""


class StoreError(LedgerError):
    """The record store failed to carry out an operation."""
