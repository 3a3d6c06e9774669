"""HormonaFlow application entry point.

Wires one ``UserState`` to the check-in log, health sync and profile
services.  Run from a shell:

    hormonaflow-status            # print current cycle info as JSON
    hormonaflow-status --sync     # import from the health source first
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass

from hormonaflow.config import Settings, get_settings
from hormonaflow.cycle.adapters import HealthDataSource, get_source
from hormonaflow.cycle.checkin_log import CheckInLog
from hormonaflow.cycle.config_loader import get_tracking_config
from hormonaflow.cycle.engine import classify_cycle_length, compute_cycle_info
from hormonaflow.cycle.health_sync import HealthSyncService
from hormonaflow.cycle.period_history import cycle_lengths_days
from hormonaflow.models.state import CycleInfo, UserState
from hormonaflow.services.profile import ProfileService
from hormonaflow.services.storage import JsonFileStore, KeyValueStore, StateStore

logger = logging.getLogger("hormonaflow")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


@dataclass
class HormonaFlowApp:
    """One user's state plus the services that act on it."""

    state: UserState
    store: StateStore
    log: CheckInLog
    health: HealthSyncService
    profile: ProfileService

    def current_cycle_info(self, now: int | None = None) -> CycleInfo:
        return compute_cycle_info(
            self.state.period_history,
            self.state.preferences.cycle_length,
            now,
        )

    def status(self, now: int | None = None) -> dict:
        """Summary the status command prints."""
        lengths = cycle_lengths_days(self.state.period_history)
        return {
            "name": self.state.name,
            "cycleLength": self.state.preferences.cycle_length,
            "isHealthSynced": self.state.preferences.is_health_synced,
            "checkIns": len(self.log),
            "symptomTags": list(get_tracking_config().check_in.symptom_tags),
            "cycle": self.current_cycle_info(now).to_wire(),
            "observedCycleLengths": [
                {"days": n, "class": classify_cycle_length(n)} for n in lengths
            ],
        }


def create_app(
    settings: Settings | None = None,
    kv: KeyValueStore | None = None,
    source: HealthDataSource | None = None,
) -> HormonaFlowApp:
    """Load state and build the services around it."""
    s = settings or get_settings()
    store = StateStore(kv or JsonFileStore(s.state_file), s)
    state = store.load()
    return HormonaFlowApp(
        state=state,
        store=store,
        log=CheckInLog(state, store=store),
        health=HealthSyncService(state, source or get_source("apple_health")(), store=store),
        profile=ProfileService(state, store=store),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show where you are in your cycle.")
    parser.add_argument(
        "--sync",
        action="store_true",
        help="import period history from the health source before reporting",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)

    app = create_app(settings)
    if args.sync:
        asyncio.run(app.health.sync())

    print(json.dumps(app.status(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
