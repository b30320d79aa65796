"""Dead-mileage surcharge for drop-offs in the unserved ring around the city.

Drop-offs inside the inner ring are served by the return flow of regular
traffic and drop-offs beyond the outer ring are billed as outstation work,
so only the annulus between the two rings carries a surcharge. The
surcharge pays for half of the straight-line distance from the drop-off
back to the depot.
"""

import logging
from typing import NamedTuple

from booking import Coordinate
from geo.distance import distance_between
from geo.zones import INNER_RING_TAG, OUTER_RING_TAG, Zone, find_zone_by_tag
from pricing.config import PricingConfig
from pricing.models import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)

ZONE_UNKNOWN = "Unknown"
ZONE_BEYOND_OUTER = "Beyond Outer Zone"
ZONE_BETWEEN_RINGS = "Between Inner and Outer Ring"


class DeadheadResult(NamedTuple):
    charge: float
    zone_label: str
    is_inner_zone: bool


def calculate_deadhead(
    dropoff: Coordinate,
    per_km_rate: float,
    zones: list[Zone],
    actual_distance_km: float,
    config: PricingConfig,
    diagnostics: Diagnostics,
) -> DeadheadResult:
    if actual_distance_km < config.deadhead_min_movement_km:
        logger.info(
            f"Driver moved {actual_distance_km:.2f} km "
            f"(< {config.deadhead_min_movement_km} km); no dead-mileage charge"
        )
        diagnostics.record(
            DiagnosticKind.STATIONARY_GUARD,
            "deadhead_charges",
            "traveled distance below minimal-movement threshold",
            raw_value=actual_distance_km,
            applied_value=0.0,
        )
        return DeadheadResult(0.0, ZONE_UNKNOWN, False)

    inner = find_zone_by_tag(zones, INNER_RING_TAG)
    outer = find_zone_by_tag(zones, OUTER_RING_TAG)
    if inner is None or outer is None:
        logger.warning(
            f"Ring zones not configured (inner={inner is not None}, "
            f"outer={outer is not None}); dead-mileage charge skipped"
        )
        diagnostics.record(
            DiagnosticKind.ZONE_DATA_MISSING,
            "deadhead_charges",
            "inner or outer ring zone not configured",
            applied_value=0.0,
        )
        return DeadheadResult(0.0, ZONE_UNKNOWN, False)

    if inner.contains(dropoff.latitude, dropoff.longitude):
        return DeadheadResult(0.0, inner.name, True)

    if not outer.contains(dropoff.latitude, dropoff.longitude):
        return DeadheadResult(0.0, ZONE_BEYOND_OUTER, False)

    distance_to_depot = distance_between(dropoff, config.depot)
    charge = (distance_to_depot / 2) * per_km_rate
    logger.debug(
        f"Drop-off between rings: {distance_to_depot:.2f} km to depot, "
        f"dead-mileage charge {charge:.2f}"
    )
    return DeadheadResult(charge, ZONE_BETWEEN_RINGS, False)
