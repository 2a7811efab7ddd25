"""Comparable version types.

A ``Version`` is an ordered, string-serializable identity of an application
release. Two encodings ship with the library:

- ``SemanticVersion``: ``major.minor.patch``, ordered component by component
- ``BuildNumber``: a monotonically increasing integer

Parsing is the only fallible way to build a version and it returns None rather
than raising. Versions of different kinds cannot be compared with each other.
"""

import re
from abc import abstractmethod
from enum import Enum
from functools import total_ordering
from typing import Any
from typing import Self

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

_DIGITS_PATTERN = re.compile(r"[0-9]+")


class VersionOrdering(str, Enum):
    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"


@total_ordering
class Version(BaseModel):
    model_config = ConfigDict(frozen=True)

    @classmethod
    @abstractmethod
    def parse(cls, text: str) -> Self | None:
        """Parse ``text`` into a version, or return None if it does not match."""
        raise NotImplementedError

    @abstractmethod
    def serialize(self) -> str:
        """Human-facing string form."""
        raise NotImplementedError

    @abstractmethod
    def sort_key(self) -> tuple[int, ...]:
        raise NotImplementedError

    def to_storage_string(self) -> str:
        """String form that always parses back to an equal version."""
        return self.serialize()

    def compare(self, other: "Version") -> VersionOrdering:
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        mine = self.sort_key()
        theirs = other.sort_key()
        if mine < theirs:
            return VersionOrdering.LESS
        if mine > theirs:
            return VersionOrdering.GREATER
        return VersionOrdering.EQUAL

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == VersionOrdering.LESS

    def __str__(self) -> str:
        return self.serialize()


class SemanticVersion(Version):
    """Use this version type if the app uses semantic versioning."""

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion | None":
        components = text.split(".")
        if len(components) != 3:
            return None
        if not all(_DIGITS_PATTERN.fullmatch(c) for c in components):
            return None
        try:
            major, minor, patch = (int(c) for c in components)
        except ValueError:
            # Longer than the interpreter allows for int conversion
            return None
        return cls(major=major, minor=minor, patch=patch)

    def serialize(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def sort_key(self) -> tuple[int, ...]:
        return (self.major, self.minor, self.patch)


class BuildNumber(Version):
    """Use this version type to compare releases by build number.

    ``serialize()`` groups thousands for display (``1,000,000``), which is not
    accepted by ``parse()``. Use ``to_storage_string()`` for anything that has
    to be read back.
    """

    number: int = Field(ge=0)

    @classmethod
    def parse(cls, text: str) -> "BuildNumber | None":
        if not _DIGITS_PATTERN.fullmatch(text):
            return None
        try:
            number = int(text)
        except ValueError:
            return None
        return cls(number=number)

    def serialize(self) -> str:
        return f"{self.number:,}"

    def to_storage_string(self) -> str:
        return str(self.number)

    def sort_key(self) -> tuple[int, ...]:
        return (self.number,)
