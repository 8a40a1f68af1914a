class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid (dates, year-months, identities)."""


class AuthenticationError(DomainError):
    """Raised when a credential cannot be turned into an identity."""


class NoActiveSessionError(DomainError):
    """Raised when a ledger operation is attempted without an identity."""


class LedgerIntegrityError(DomainError):
    """Raised when a ledger holds more than one record for a calendar day."""
