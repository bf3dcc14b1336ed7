"""Error taxonomy for the calorie ledger."""


class LedgerError(Exception):
    """Base class for recoverable ledger errors."""


class ValidationError(LedgerError):
    """Raised when user input is missing or invalid; the model is unchanged."""


class PersistenceError(LedgerError):
    """Raised when the document store load or save fails."""


class AuthError(LedgerError):
    """Raised when the identity provider rejects an auth operation."""
