"""Load, validate, and hot-reload the HormonaFlow tracking configuration.

The config lives in ``tracking_config.yaml`` alongside this module.  At
startup it is loaded once and cached.  Call ``reload_tracking_config()`` to
re-read from disk after an edit; no restart required.

Usage::

    from hormonaflow.cycle.config_loader import get_tracking_config

    config = get_tracking_config()
    config.cycle.default_length            # 28
    config.health_import.period_offsets_days  # [2, 30, 61]
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger("hormonaflow.cycle.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "tracking_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class CycleConfig:
    """Cycle length defaults and the normal range."""

    default_length: int = 28
    min_length: int = 21
    max_length: int = 45


@dataclass
class CheckInConfig:
    """Vocabulary offered on check-in forms."""

    symptom_tags: list[str] = field(default_factory=list)


@dataclass
class HealthImportConfig:
    """Settings for the simulated health-data bridge.

    Attributes:
        delay_seconds:        How long the bridge takes to answer.
        timeout_seconds:      Give up after this long; None waits forever.
        average_cycle_length: Cycle length the bridge reports.
        period_offsets_days:  Reported period starts, in days before now.
    """

    delay_seconds: float = 2.0
    timeout_seconds: float | None = None
    average_cycle_length: int = 29
    period_offsets_days: list[int] = field(default_factory=lambda: [2, 30, 61])


@dataclass
class TrackingConfig:
    """Complete, validated tracking configuration."""

    version: str
    cycle: CycleConfig
    check_in: CheckInConfig
    health_import: HealthImportConfig


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when tracking_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tracking config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _positive_int(value: object, name: str, errors: list[str], default: int) -> int:
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        errors.append(f"{name} must be an integer, got {value!r}")
        return default
    if n <= 0:
        errors.append(f"{name} = {n} must be positive")
    return n


def _validate_and_build(raw: dict) -> TrackingConfig:
    """Validate the raw YAML dict and construct a TrackingConfig.

    Collects every problem before raising, so one bad edit reports all of
    its mistakes at once.

    Raises:
        ConfigValidationError: If any field is missing or invalid.
    """
    errors: list[str] = []

    version = str(raw.get("version", "1.0"))

    # ── Cycle ──
    cy_raw = raw.get("cycle") or {}
    cycle = CycleConfig(
        default_length=_positive_int(
            cy_raw.get("default_length", 28), "cycle.default_length", errors, 28
        ),
        min_length=_positive_int(cy_raw.get("min_length", 21), "cycle.min_length", errors, 21),
        max_length=_positive_int(cy_raw.get("max_length", 45), "cycle.max_length", errors, 45),
    )
    if cycle.min_length > cycle.max_length:
        errors.append(
            f"cycle.min_length ({cycle.min_length}) exceeds cycle.max_length ({cycle.max_length})"
        )

    # ── Check-in vocabulary ──
    ci_raw = raw.get("check_in") or {}
    tags = ci_raw.get("symptom_tags", [])
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        errors.append("check_in.symptom_tags must be a list of strings")
        tags = []
    check_in = CheckInConfig(symptom_tags=list(tags))

    # ── Health import ──
    hi_raw = raw.get("health_import") or {}
    try:
        delay = float(hi_raw.get("delay_seconds", 2.0))
    except (TypeError, ValueError):
        errors.append(f"health_import.delay_seconds must be a number, got {hi_raw.get('delay_seconds')!r}")
        delay = 2.0
    if delay < 0:
        errors.append(f"health_import.delay_seconds = {delay} must not be negative")

    timeout_raw = hi_raw.get("timeout_seconds")
    timeout: float | None = None
    if timeout_raw is not None:
        try:
            timeout = float(timeout_raw)
        except (TypeError, ValueError):
            errors.append(f"health_import.timeout_seconds must be a number or null, got {timeout_raw!r}")
        else:
            if timeout <= 0:
                errors.append(f"health_import.timeout_seconds = {timeout} must be positive")

    offsets_raw = hi_raw.get("period_offsets_days", [2, 30, 61])
    offsets: list[int] = []
    if not isinstance(offsets_raw, list):
        errors.append("health_import.period_offsets_days must be a list of integers")
    else:
        for i, val in enumerate(offsets_raw):
            try:
                offsets.append(int(val))
            except (TypeError, ValueError):
                errors.append(f"health_import.period_offsets_days[{i}] must be an integer, got {val!r}")

    health_import = HealthImportConfig(
        delay_seconds=delay,
        timeout_seconds=timeout,
        average_cycle_length=_positive_int(
            hi_raw.get("average_cycle_length", 29),
            "health_import.average_cycle_length",
            errors,
            29,
        ),
        period_offsets_days=offsets,
    )

    if errors:
        raise ConfigValidationError(
            f"tracking_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return TrackingConfig(
        version=version,
        cycle=cycle,
        check_in=check_in,
        health_import=health_import,
    )


def load_tracking_config(path: Path | None = None) -> TrackingConfig:
    """Load and validate the tracking config from disk.

    Args:
        path: Override path to YAML. Uses the bundled tracking_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded tracking config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: TrackingConfig | None = None
_config_lock = threading.Lock()


def get_tracking_config() -> TrackingConfig:
    """Return the global TrackingConfig singleton, loading it on first call."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_tracking_config()
    return _config


def reload_tracking_config(path: Path | None = None) -> TrackingConfig:
    """Reload the tracking config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_tracking_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded tracking config: %s → %s", old_version, new_config.version)
    return new_config
