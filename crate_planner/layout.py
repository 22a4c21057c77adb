import logging
from typing import Iterable, Optional

from .checks import classify_capacity, find_overlaps
from .config import Flags
from .models import Crate, LayoutResult, Truck
from .packer import place_floor, resolve_stacks

logger = logging.getLogger(__name__)

def plan_layout(truck: Truck, crates: Iterable[Crate], flags: Optional[Flags] = None) -> LayoutResult:
    """Plan the full load: floor lanes, stacks, overlap and capacity checks.

    Pure function of its inputs; nothing is cached and the crates are not
    modified. Crates that cannot be placed end up in ``overflow_ids``.
    """
    flags = flags or Flags()
    crates = list(crates)

    floor, floor_ov = place_floor(truck, crates)
    stacked, stack_ov = resolve_stacks(truck, crates, floor)
    placed = floor + stacked

    overlaps, overlap_ids = find_overlaps(placed)
    total_w, exceeded = classify_capacity(
        crates, {p.id for p in placed}, truck.max_load, flags.count_overflow_weight
    )
    logger.debug(
        "planned %d crates: placed=%d overflow=%d overlaps=%d weight=%.1fkg",
        len(crates), len(placed), len(floor_ov) + len(stack_ov), len(overlaps), total_w,
    )
    return LayoutResult(
        placed=placed,
        overflow_ids=floor_ov + stack_ov,
        overlaps=overlaps,
        overlap_ids=overlap_ids,
        total_weight=total_w,
        capacity_exceeded=exceeded,
        max_load=truck.max_load,
    )
