"""Health-data sources for HormonaFlow.

Each source implements the HealthDataSource ABC and returns a
HealthImportResult.

Available sources:
    SimulatedAppleHealthSource — Apple HealthKit stand-in (fixed recent history)
"""

from hormonaflow.cycle.adapters.apple_health import SimulatedAppleHealthSource
from hormonaflow.cycle.adapters.base import HealthDataSource, HealthImportResult

__all__ = [
    "HealthDataSource",
    "HealthImportResult",
    "SimulatedAppleHealthSource",
]

# Registry: source_id → source class
SOURCE_REGISTRY: dict[str, type[HealthDataSource]] = {
    "apple_health": SimulatedAppleHealthSource,
}


def get_source(source_id: str) -> type[HealthDataSource]:
    """Return the source class for a given slug.

    Raises:
        KeyError: If the source_id is not registered.
    """
    if source_id not in SOURCE_REGISTRY:
        raise KeyError(
            f"No health source registered for '{source_id}'. "
            f"Available: {list(SOURCE_REGISTRY)}"
        )
    return SOURCE_REGISTRY[source_id]
