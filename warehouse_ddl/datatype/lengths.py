"""
Length grammars shared by all engines.

Each rule validates an already normalized length string, where ``None``
means no explicit length was given.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvalidLengthError

_DIGITS = re.compile(r"[0-9]+")


def parse_non_negative_int(part: str) -> Optional[int]:
    """Return the integer value of ``part`` or None when it is not a plain non-negative integer."""
    part = part.strip()
    if not _DIGITS.fullmatch(part):
        return None
    return int(part)


def _invalid(type_name: str, length: str, constraint: str) -> InvalidLengthError:
    return InvalidLengthError(
        f"Length '{length}' is not valid for type {type_name}: {constraint}",
        option="length",
        value=length,
    )


@dataclass(frozen=True)
class NoLength:
    """Type takes no length at all."""

    def validate(self, type_name: str, length: Optional[str]) -> None:
        if length is not None:
            raise _invalid(type_name, length, "type does not accept a length")


@dataclass(frozen=True)
class IntegerLength:
    """Single integer within ``[minimum, maximum]`` (character length, fractional seconds)."""

    minimum: int
    maximum: int

    def validate(self, type_name: str, length: Optional[str]) -> None:
        if length is None:
            return
        value = parse_non_negative_int(length)
        if value is None:
            raise _invalid(type_name, length, "expected a single non-negative integer")
        if not self.minimum <= value <= self.maximum:
            raise _invalid(type_name, length, f"must be between {self.minimum} and {self.maximum}")

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(value, self.maximum))


@dataclass(frozen=True)
class NumericLength:
    """``precision`` or ``precision,scale`` with ``1 <= precision <= max_precision`` and ``scale <= precision``."""

    max_precision: int

    def validate(self, type_name: str, length: Optional[str]) -> None:
        if length is None:
            return
        parts = length.split(",")
        if len(parts) > 2:
            raise _invalid(type_name, length, "expected 'precision' or 'precision,scale'")

        precision = parse_non_negative_int(parts[0])
        scale = parse_non_negative_int(parts[1]) if len(parts) == 2 else 0
        if precision is None or scale is None:
            raise _invalid(type_name, length, "precision and scale must be non-negative integers")
        if not 1 <= precision <= self.max_precision:
            raise _invalid(type_name, length, f"precision must be between 1 and {self.max_precision}")
        if scale > precision:
            raise _invalid(type_name, length, "scale cannot exceed precision")
