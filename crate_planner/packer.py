import logging
import math
from typing import List

from .config import EPS
from .models import Crate, PlacedCrate

logger = logging.getLogger(__name__)

def _is_sane(c: Crate):
    # crates with degenerate sizes or weights never take lane space
    dims = (c.L, c.W, c.H)
    return all(math.isfinite(d) and d > 0 for d in dims) and math.isfinite(c.weight)

def place_floor(truck, crates: List[Crate]):
    """Two-lane greedy placement of floor crates, heaviest first.

    Each lane is a running total of the length already used along the truck.
    A crate goes to whichever lane is shorter (left on a tie) and is rejected
    as overflow when it is too tall, too wide or runs past the rear wall.
    """
    L, W, H = truck.L, truck.W, truck.H
    placed: List[PlacedCrate] = []
    overflow = []
    lane_l = lane_r = 0.0

    floor = [c for c in crates if c.is_floor]
    # sorted() is stable: equal weights keep their input order
    for c in sorted(floor, key=lambda it: -it.weight if math.isfinite(it.weight) else 0.0):
        if not _is_sane(c):
            logger.debug("crate %r: invalid dimensions or weight -> overflow", c.id)
            overflow.append(c.id); continue
        l, w, h = c.L, c.W, c.H
        left = lane_l <= lane_r
        x0 = lane_l if left else lane_r
        if h > H + EPS or x0 + l > L + EPS or w > W + EPS:
            logger.debug("crate %r does not fit (x0=%.3f l=%.3f w=%.3f h=%.3f) -> overflow", c.id, x0, l, w, h)
            overflow.append(c.id); continue
        z = w / 2 if left else W - w / 2
        placed.append(PlacedCrate(c, (x0 + l / 2, h / 2, z), "left" if left else "right"))
        if left: lane_l += l
        else: lane_r += l
    logger.debug("floor lanes: left=%.3fm right=%.3fm placed=%d overflow=%d", lane_l, lane_r, len(placed), len(overflow))
    return placed, overflow

def resolve_stacks(truck, crates: List[Crate], floor_placed: List[PlacedCrate]):
    """Center every stacked crate on top of its (floor) base."""
    bases = {p.id: p for p in floor_placed}
    placed: List[PlacedCrate] = []
    overflow = []
    for c in crates:
        if c.is_floor:
            continue
        base = bases.get(c.stack_target_id)
        if base is None or not _is_sane(c):
            logger.debug("crate %r: base %r not on the floor -> overflow", c.id, c.stack_target_id)
            overflow.append(c.id); continue
        l, w, h = c.L, c.W, c.H
        x, _, z = base.position
        y = base.position[1] + base.H / 2 + h / 2
        if y + h / 2 > truck.H + EPS:
            logger.debug("crate %r on %r exceeds truck height -> overflow", c.id, base.id)
            overflow.append(c.id); continue
        # a top crate wider or longer than its base must still clear the walls
        if x - l / 2 < -EPS or x + l / 2 > truck.L + EPS or z - w / 2 < -EPS or z + w / 2 > truck.W + EPS:
            logger.debug("crate %r on %r overhangs the truck walls -> overflow", c.id, base.id)
            overflow.append(c.id); continue
        placed.append(PlacedCrate(c, (x, y, z), "stack"))
    return placed, overflow
