"""Errors that can occur while checking for version upgrades.

The set is closed: anything a provider raises that is not one of these is
wrapped as a ``ProviderError`` before it reaches observers of the service.
Errors compare equal when they are the same kind with the same message.
"""


class UpgradeError(Exception):
    """Base exception for version upgrade checks."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpgradeError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ProviderError(UpgradeError):
    """The provider failed to fetch version requirements."""


class InvalidVersionData(UpgradeError):
    """The provider returned data that could not be used."""


class NoDataAvailable(UpgradeError):
    """The provider has nothing to report."""

    def __init__(self, message: str = "No version data available") -> None:
        super().__init__(message)
