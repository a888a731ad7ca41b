"""Static configuration for equip-change common event dispatch.

The configuration is read once at startup and never mutated afterwards.  Four
options are recognised; each may be spelled in snake_case, in camelCase, or
under the parameter name used by the host plugin manager:

* ``default_event_id`` / ``defaultEventId`` / ``commonId`` (default ``1``)
* ``timing_mode`` / ``timingMode`` / ``timing`` (default ``wait``)
* ``invoke_on_unequip`` / ``invokeOnUnequip`` / ``doesInvokeAtNone`` (default ``false``)
* ``default_unequip_event_id`` / ``defaultUnequipEventId`` / ``commonIdAtNone`` (default ``1``)

Malformed values never abort loading: they are reported through logging and
replaced by the option default.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Tuple

from config.config_loader import ConfigLoader
from utils.logger import get_logger

__all__ = [
    "CONFIG_SECTION",
    "DEFAULT_EVENT_ID",
    "DEFAULT_UNEQUIP_EVENT_ID",
    "EquipConfig",
    "OPTION_ALIASES",
    "TimingMode",
    "load_equip_config",
]

logger = get_logger(__name__)

CONFIG_SECTION = "equip_events"
DEFAULT_EVENT_ID = 1
DEFAULT_UNEQUIP_EVENT_ID = 1

OPTION_ALIASES: dict[str, Tuple[str, ...]] = {
    "default_event_id": ("default_event_id", "defaultEventId", "commonId"),
    "timing_mode": ("timing_mode", "timingMode", "timing"),
    "invoke_on_unequip": ("invoke_on_unequip", "invokeOnUnequip", "doesInvokeAtNone"),
    "default_unequip_event_id": (
        "default_unequip_event_id",
        "defaultUnequipEventId",
        "commonIdAtNone",
    ),
}

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})

# distinguishes an absent option from one explicitly set to null
_MISSING = object()


class TimingMode(str, Enum):
    """When a reserved common event is handed to the host for execution."""

    IMMEDIATE = "immediate"
    """Run the reservation right after the equip change (leaves the menu)."""

    WAIT = "wait"
    """Leave the reservation pending until the player closes the menu."""

    @classmethod
    def parse(cls, value: Any) -> "TimingMode":
        """Return the member matching ``value`` (case-insensitive).

        Raises ``ValueError`` for unknown values; callers decide the fallback.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for member in cls:
                if text in (member.value, member.name.lower()):
                    return member
        raise ValueError(f"Unknown timing mode {value!r}")


@dataclass(frozen=True, slots=True)
class EquipConfig:
    """Immutable option set consulted by the rule resolver."""

    default_event_id: int = DEFAULT_EVENT_ID
    timing_mode: TimingMode = TimingMode.WAIT
    invoke_on_unequip: bool = False
    default_unequip_event_id: int = DEFAULT_UNEQUIP_EVENT_ID

    def __post_init__(self) -> None:
        if not isinstance(self.timing_mode, TimingMode):
            object.__setattr__(self, "timing_mode", TimingMode.parse(self.timing_mode))

    @property
    def is_immediate(self) -> bool:
        return self.timing_mode is TimingMode.IMMEDIATE

    def to_dict(self) -> dict[str, Any]:
        """Return a serialisable representation using snake_case keys."""

        return {
            "default_event_id": self.default_event_id,
            "timing_mode": self.timing_mode.value,
            "invoke_on_unequip": self.invoke_on_unequip,
            "default_unequip_event_id": self.default_unequip_event_id,
        }

    def with_timing(self, timing_mode: TimingMode | str) -> "EquipConfig":
        """Return a copy using ``timing_mode``; unknown values keep the current mode."""

        try:
            mode = TimingMode.parse(timing_mode)
        except ValueError:
            logger.warning("Ignoring timing override %r; keeping %s", timing_mode, self.timing_mode.value)
            return self
        return replace(self, timing_mode=mode)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "EquipConfig":
        """Create an :class:`EquipConfig` from a raw mapping.

        When ``payload`` holds an ``equip_events`` mapping, options are read
        from there; otherwise from the top level.
        """

        if payload is not None and not isinstance(payload, Mapping):
            logger.warning("Equip event options must be a mapping, got %s; using defaults", type(payload).__name__)
            payload = None
        return cls.from_loader(ConfigLoader.from_mapping(payload))

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "EquipConfig":
        """Create an :class:`EquipConfig` from the settings held by ``loader``."""

        prefix: Tuple[str, ...] = (CONFIG_SECTION,) if loader.section(CONFIG_SECTION) else ()

        default_event_id = _coerce_event_id(
            _lookup(loader, prefix, "default_event_id"), "default_event_id", DEFAULT_EVENT_ID
        )
        timing_mode = _coerce_timing(_lookup(loader, prefix, "timing_mode"))
        invoke_on_unequip = _coerce_bool(
            _lookup(loader, prefix, "invoke_on_unequip"), "invoke_on_unequip", False
        )
        default_unequip_event_id = _coerce_event_id(
            _lookup(loader, prefix, "default_unequip_event_id"),
            "default_unequip_event_id",
            DEFAULT_UNEQUIP_EVENT_ID,
        )
        return cls(
            default_event_id=default_event_id,
            timing_mode=timing_mode,
            invoke_on_unequip=invoke_on_unequip,
            default_unequip_event_id=default_unequip_event_id,
        )


def load_equip_config(config_file: str | None = "settings.yaml") -> EquipConfig:
    """Read ``config_file`` with :class:`ConfigLoader` and build an :class:`EquipConfig`.

    A missing file yields the defaults.
    """

    config = EquipConfig.from_loader(ConfigLoader(config_file))
    logger.debug("Loaded equip event config from %s: %s", config_file, config.to_dict())
    return config


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def _lookup(loader: ConfigLoader, prefix: Tuple[str, ...], option: str) -> Any:
    for alias in OPTION_ALIASES[option]:
        value = loader.get(*prefix, alias, default=_MISSING)
        if value is not _MISSING:
            return value
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_event_id(value: Any, option: str, default: int) -> int:
    if _is_blank(value):
        return default
    parsed: int | None = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float) and value.is_integer():
        parsed = int(value)
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            parsed = None
    if parsed is None or parsed < 0:
        logger.warning("Invalid %s %r; falling back to %d", option, value, default)
        return default
    return parsed


def _coerce_bool(value: Any, option: str, default: bool) -> bool:
    if _is_blank(value):
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    logger.warning("Invalid %s %r; falling back to %s", option, value, default)
    return default


def _coerce_timing(value: Any) -> TimingMode:
    if _is_blank(value):
        return TimingMode.WAIT
    try:
        return TimingMode.parse(value)
    except ValueError:
        logger.warning("Invalid timing_mode %r; falling back to %s", value, TimingMode.WAIT.value)
        return TimingMode.WAIT
