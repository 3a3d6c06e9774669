"""Cycle tracking core for HormonaFlow.

This package logs check-ins, keeps the period-start history, and derives the
current cycle phase from it.

Subpackages:
    adapters/ — Health-data sources (simulated Apple HealthKit bridge)

Core modules:
    engine         — Pure cycle-phase inference from period history
    period_history — Descending period-start list and its mutations
    checkin_log    — Append-only check-in log that feeds period history
    health_sync    — Replace local cycle data with an import result
    config_loader  — Load/validate/hot-reload tracking_config.yaml
"""

from hormonaflow.cycle.checkin_log import CheckInLog
from hormonaflow.cycle.config_loader import TrackingConfig, get_tracking_config
from hormonaflow.cycle.engine import PHASE_BANDS, compute_cycle_info
from hormonaflow.cycle.health_sync import HealthSyncError, HealthSyncService

__all__ = [
    "CheckInLog",
    "TrackingConfig",
    "get_tracking_config",
    "PHASE_BANDS",
    "compute_cycle_info",
    "HealthSyncError",
    "HealthSyncService",
]
