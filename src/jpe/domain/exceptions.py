"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConfigurationError(DomainException):
    """Pricing inputs are missing or invalid (rate, policy, metal, GST).

    Fatal to pricing: the caller must show "pricing unavailable" and
    never fall back to a zero price.
    """


class SelectionError(DomainException):
    """The customer picked a variation that cannot be purchased.

    Recoverable: re-prompt the selection.
    """


class ConcurrencyError(DomainException):
    """Checkout could not be committed against a stable gold rate.

    Nothing was persisted, so the whole checkout may be retried.
    """

    retryable = True
