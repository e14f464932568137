from typing import List, Optional


class DomainError(Exception):
    """Base class for errors raised by menu and content operations."""


class ValidationError(DomainError):
    """
    Malformed input: wrong type, missing required field, or a sibling
    set that does not match the stored one.

    Content validation attaches every SchemaViolation found so callers can
    report them all at once.
    """

    def __init__(self, message: str, violations: Optional[List] = None):
        super().__init__(message)
        self.violations = list(violations or [])


class CycleError(DomainError):
    """Reparenting would make a menu node its own ancestor."""


class NotFoundError(DomainError):
    """A referenced id does not exist."""
