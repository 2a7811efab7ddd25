from enum import Enum
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import model_validator

from releasekit.configs.app_configs import VERSION_CHECK_INTERVAL_SECONDS
from releasekit.configs.constants import LATEST_VERSION_FIELD
from releasekit.configs.constants import REQUIRED_VERSION_FIELD
from releasekit.version_upgrade.exceptions import InvalidVersionData
from releasekit.version_upgrade.exceptions import UpgradeError
from releasekit.version_upgrade.versions import Version

VersionT = TypeVar("VersionT", bound=Version)


class _CachedVersionRequirement(BaseModel):
    """Wire shape of a cached requirement pair."""

    model_config = ConfigDict(populate_by_name=True)

    required_version: str = Field(alias=REQUIRED_VERSION_FIELD)
    latest_version: str = Field(alias=LATEST_VERSION_FIELD)


class VersionRequirement(BaseModel, Generic[VersionT]):
    """Version thresholds reported by the remote source.

    required_version: the oldest version that is still allowed to run
    latest_version: the newest released version

    No ordering between the two is enforced.
    """

    model_config = ConfigDict(frozen=True)

    required_version: VersionT
    latest_version: VersionT

    def to_cache_bytes(self) -> bytes:
        cached = _CachedVersionRequirement(
            required_version=self.required_version.to_storage_string(),
            latest_version=self.latest_version.to_storage_string(),
        )
        return cached.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_cache_bytes(
        cls, data: bytes, version_type: type[VersionT]
    ) -> "VersionRequirement[VersionT]":
        try:
            cached = _CachedVersionRequirement.model_validate_json(data)
        except ValidationError as e:
            raise InvalidVersionData(f"Malformed cached requirement: {e}") from e

        try:
            required = version_type.parse(cached.required_version)
            latest = version_type.parse(cached.latest_version)
        except ValueError as e:
            raise InvalidVersionData(f"Unparsable cached version: {e}") from e
        if required is None or latest is None:
            raise InvalidVersionData(
                f"Cached versions are not valid {version_type.__name__} values: "
                f"required={cached.required_version!r}, latest={cached.latest_version!r}"
            )
        return cls(required_version=required, latest_version=latest)


class UpToDate(BaseModel):
    """The app is up to date and no update is needed."""

    model_config = ConfigDict(frozen=True)


class UpdateAvailable(BaseModel):
    """An optional update is available."""

    model_config = ConfigDict(frozen=True)

    latest_version: Version


class UpdateRequired(BaseModel):
    """The running version is below the required version."""

    model_config = ConfigDict(frozen=True)

    required_version: Version


class UpgradeFailed(BaseModel):
    """Checking for updates failed and there was nothing better to report.

    Two failed states are equal when their errors are the same kind with the
    same message, so a repeated identical failure is not a state change.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: UpgradeError


UpgradeState = UpToDate | UpdateAvailable | UpdateRequired | UpgradeFailed


class CheckMode(str, Enum):
    ON_FOREGROUND = "on_foreground"
    INTERVAL = "interval"
    MANUAL = "manual"


class CheckInterval(BaseModel):
    """How frequently automatic checks run."""

    model_config = ConfigDict(frozen=True)

    mode: CheckMode
    seconds: float | None = None

    @model_validator(mode="after")
    def _validate_seconds(self) -> "CheckInterval":
        if self.mode == CheckMode.INTERVAL:
            if self.seconds is None or self.seconds <= 0:
                raise ValueError("Interval checks need a positive number of seconds")
        elif self.seconds is not None:
            raise ValueError(f"{self.mode.value} checks do not take seconds")
        return self

    @classmethod
    def on_foreground(cls) -> "CheckInterval":
        """Check once now and then every time the app comes to the foreground."""
        return cls(mode=CheckMode.ON_FOREGROUND)

    @classmethod
    def interval(cls, seconds: float) -> "CheckInterval":
        return cls(mode=CheckMode.INTERVAL, seconds=seconds)

    @classmethod
    def manual(cls) -> "CheckInterval":
        return cls(mode=CheckMode.MANUAL)

    @classmethod
    def from_config(cls) -> "CheckInterval":
        return cls.interval(VERSION_CHECK_INTERVAL_SECONDS)
