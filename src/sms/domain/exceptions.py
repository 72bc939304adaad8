"""Domain-level exceptions.

Every failure the domain can signal is a subclass of DomainException so
the CLI layer can catch them uniformly and display user-friendly messages.
The subclasses keep the three kinds of rejection distinguishable:
bad input, broken business policy, and wrong lifecycle state.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed, missing or out of bounds.

    ``field`` names the offending attribute when there is one.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class BusinessRuleViolation(DomainException):
    """Input is well-formed but breaks a sales policy."""


class InvalidStateError(DomainException):
    """The operation is not allowed in the aggregate's current state."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""
