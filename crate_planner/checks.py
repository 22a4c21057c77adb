import logging
import math
from typing import List

import numpy as np

from .config import EPS
from .models import PlacedCrate

logger = logging.getLogger(__name__)

def find_overlaps(placed: List[PlacedCrate]):
    """Return (label pairs, id pairs) of placed crates whose boxes intersect.

    Boxes only overlap when they intersect on all three axes; merely touching
    faces do not count. A crate and the crate it is stacked on are skipped.
    """
    n = len(placed)
    if n < 2:
        return [], []
    centers = np.array([p.position for p in placed], dtype=float)       # (n,3) x,y,z
    halves = np.array([(p.L, p.H, p.W) for p in placed], dtype=float) / 2.0
    gap = np.abs(centers[:, None, :] - centers[None, :, :])              # (n,n,3)
    reach = halves[:, None, :] + halves[None, :, :]
    hit = np.all(gap < reach - EPS, axis=2)

    ids = [p.id for p in placed]
    targets = [p.crate.stack_target_id for p in placed]
    labels, id_pairs = [], []
    for i, j in zip(*np.nonzero(np.triu(hit, k=1))):
        i, j = int(i), int(j)
        if ids[i] == targets[j] or ids[j] == targets[i]:
            continue
        labels.append((placed[i].label, placed[j].label))
        id_pairs.append((ids[i], ids[j]))
    if labels:
        logger.debug("%d overlapping pair(s): %s", len(labels), labels)
    return labels, id_pairs

def classify_capacity(crates, placed_ids, max_load, count_overflow_weight=True):
    """Total declared weight and whether it meets or exceeds max_load."""
    counted = crates if count_overflow_weight else [c for c in crates if c.id in placed_ids]
    total = sum(c.weight for c in counted if math.isfinite(c.weight))
    exceeded = max_load is not None and total >= max_load
    return total, exceeded
