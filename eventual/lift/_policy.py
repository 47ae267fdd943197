"""
Futurize policy — what to do when a completion callback breaks its contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Violation(Enum):
    """
    Reaction to a misused completion callback.

    Misuse is a second invocation, or a value and an error delivered together.
    The future itself is never resolved twice.
    """

    IGNORE = auto()  # Drop silently
    WARN = auto()  # Drop and log a warning
    RAISE = auto()  # Raise CallbackContractError to the caller of done()


@dataclass(frozen=True, slots=True)
class Policy:
    """Settings for futurize()/futurize_result()."""
    on_violation: Violation = Violation.WARN


# Shortcuts
IGNORE = Violation.IGNORE
WARN = Violation.WARN
RAISE = Violation.RAISE

STRICT = Policy(on_violation=RAISE)


__all__ = (
    "Violation",
    "Policy",
    "IGNORE",
    "WARN",
    "RAISE",
    "STRICT",
)
