"""Validation result type shared by every preference validator."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationResult:
    """Immutable outcome of validating one preference value.

    Attributes
    ----------
    valid:
        Whether the value satisfies every constraint.
    error:
        Human-readable description of the violated constraint, or ``None``
        when the value is valid.
    """

    valid: bool
    error: str | None = None

    def __bool__(self) -> bool:
        """Return True if the value is valid."""
        return self.valid

    @classmethod
    def ok(cls) -> ValidationResult:
        return _OK

    @classmethod
    def fail(cls, reason: str) -> ValidationResult:
        return cls(valid=False, error=reason)


_OK = ValidationResult(valid=True)
