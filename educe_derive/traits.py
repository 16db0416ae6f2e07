"""The traits that educe can derive."""

from __future__ import annotations

from enum import Enum
from functools import total_ordering

from .errors import EduceError


@total_ordering
class Trait(Enum):
    """A derivable trait, ordered as declared."""

    DEBUG = "Debug"
    PARTIAL_EQ = "PartialEq"
    EQ = "Eq"
    PARTIAL_ORD = "PartialOrd"
    ORD = "Ord"
    HASH = "Hash"
    DEFAULT = "Default"
    CLONE = "Clone"
    COPY = "Copy"
    DEREF = "Deref"
    DEREF_MUT = "DerefMut"

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Trait):
            return NotImplemented
        return self.ordinal < other.ordinal

    @property
    def ordinal(self) -> int:
        """Position of the trait in declaration order."""
        return list(type(self)).index(self)

    @classmethod
    def from_str(cls, s: str) -> Trait:
        """Look a trait up by its name."""
        try:
            return cls(s)
        except ValueError:
            available = ", ".join(t.value for t in cls)
            raise EduceError(
                f"Unsupported trait `{s}`. Available traits are [{available}]"
            ) from None