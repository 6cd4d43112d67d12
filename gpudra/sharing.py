"""GPU and MIG device sharing strategies and their configuration."""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from gpudra.quantity import Quantity

__all__ = [
    "SharingError",
    "GpuSharingStrategy",
    "TimeSliceDuration",
    "TimeSlicingConfig",
    "MpsConfig",
    "GpuSharing",
    "MigDeviceSharing",
    "is_time_slicing",
    "is_mps",
    "get_time_slicing_config",
    "get_mps_config",
    "normalize_pinned_memory_limits",
]

_MEBIBYTE = 1024 * 1024
_INT_KEY = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class SharingError(ValueError):
    """Raised when a sharing configuration is requested or used inconsistently."""


class GpuSharingStrategy(str, enum.Enum):
    TIME_SLICING = "TimeSlicing"
    MPS = "MPS"


class TimeSliceDuration(str, enum.Enum):
    DEFAULT = "Default"
    SHORT = "Short"
    MEDIUM = "Medium"
    LONG = "Long"

    def to_int(self) -> int:
        """Return the integer representation of the duration."""
        return _TIME_SLICE_INTS[self]


_TIME_SLICE_INTS = {
    TimeSliceDuration.DEFAULT: 0,
    TimeSliceDuration.SHORT: 1,
    TimeSliceDuration.MEDIUM: 2,
    TimeSliceDuration.LONG: 3,
}


@dataclass
class TimeSlicingConfig:
    time_slice: TimeSliceDuration | None = None


@dataclass
class MpsConfig:
    """Settings for an MPS control daemon.

    The per-device limits map a device index to a limit and override the default.
    """

    default_active_thread_percentage: int | None = None
    default_pinned_device_memory_limit: Quantity | None = None
    default_per_device_pinned_memory_limit: dict[str, Quantity] | None = None


@dataclass
class GpuSharing:
    strategy: GpuSharingStrategy = GpuSharingStrategy.TIME_SLICING
    time_slicing_config: TimeSlicingConfig | None = None
    mps_config: MpsConfig | None = None

    def is_time_slicing(self) -> bool:
        return self.strategy == GpuSharingStrategy.TIME_SLICING

    def is_mps(self) -> bool:
        return self.strategy == GpuSharingStrategy.MPS

    def get_time_slicing_config(self) -> TimeSlicingConfig | None:
        """Return the time-slicing config; raise if another strategy is set."""
        if self.strategy != GpuSharingStrategy.TIME_SLICING:
            raise SharingError(
                f"strategy is not set to '{GpuSharingStrategy.TIME_SLICING.value}'"
            )
        return self.time_slicing_config

    def get_mps_config(self) -> MpsConfig | None:
        """Return the MPS config; raise if MPS is not set or time-slicing config is given."""
        if self.strategy != GpuSharingStrategy.MPS:
            raise SharingError(f"strategy is not set to '{GpuSharingStrategy.MPS.value}'")
        if self.time_slicing_config is not None:
            raise SharingError(
                f"cannot use TimeSlicingConfig with the '{GpuSharingStrategy.MPS.value}' strategy"
            )
        return self.mps_config


@dataclass
class MigDeviceSharing:
    strategy: GpuSharingStrategy = GpuSharingStrategy.TIME_SLICING
    mps_config: MpsConfig | None = None

    def is_time_slicing(self) -> bool:
        """MIG devices never use time-slicing."""
        return False

    def is_mps(self) -> bool:
        return self.strategy == GpuSharingStrategy.MPS

    def get_time_slicing_config(self) -> TimeSlicingConfig | None:
        """Return a time-slicing config only while time-slicing is in use, which for MIG is never."""
        return TimeSlicingConfig(TimeSliceDuration.DEFAULT) if self.is_time_slicing() else None

    def get_mps_config(self) -> MpsConfig | None:
        """Return the MPS config; raise if MPS is not set."""
        if self.strategy != GpuSharingStrategy.MPS:
            raise SharingError(f"strategy is not set to '{GpuSharingStrategy.MPS.value}'")
        return self.mps_config


Sharing = GpuSharing | MigDeviceSharing


def is_time_slicing(sharing: Sharing | None) -> bool:
    """Report time-slicing; an unset sharing defaults to time-slicing."""
    if sharing is None:
        return True
    return sharing.is_time_slicing()


def is_mps(sharing: Sharing | None) -> bool:
    if sharing is None:
        return False
    return sharing.is_mps()


def get_time_slicing_config(sharing: Sharing | None) -> TimeSlicingConfig | None:
    """Return the time-slicing config; an unset sharing yields the default time slice."""
    if sharing is None:
        return TimeSlicingConfig(TimeSliceDuration.DEFAULT)
    return sharing.get_time_slicing_config()


def get_mps_config(sharing: Sharing | None) -> MpsConfig | None:
    if sharing is None:
        raise SharingError("no sharing set to get config from")
    return sharing.get_mps_config()


def _to_mebibytes(quantity: Quantity) -> int:
    value = quantity.value()
    magnitude = abs(value) // _MEBIBYTE
    return magnitude if value >= 0 else -magnitude


def _is_int_key(key: str) -> bool:
    return _INT_KEY.fullmatch(key) is not None and _INT64_MIN <= int(key) <= _INT64_MAX


def normalize_pinned_memory_limits(
    limits: Mapping[str, Quantity] | None,
    uuids: Sequence[str] | None,
    default_limit: Quantity | None,
) -> dict[str, str]:
    """Turn per-device pinned memory limits into ``"<n>M"`` strings keyed by device index.

    The default limit, if given, is applied to every device in uuids first and then
    overridden by the specific limits.
    """
    result: dict[str, str] = {}

    if default_limit is not None:
        value = _to_mebibytes(default_limit)
        if value == 0:
            raise SharingError(f"default value set too low: {default_limit}")
        result.update((str(i), f"{value}M") for i, _ in enumerate(uuids or ()))

    for key, quantity in (limits or {}).items():
        if not _is_int_key(key):
            raise SharingError(f"unable to parse key as an integer: {key}")
        value = _to_mebibytes(quantity)
        if value == 0:
            raise SharingError(f"value set too low: {key}: {quantity}")
        result[key] = f"{value}M"

    return result