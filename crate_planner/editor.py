"""
In-memory crate book: the editing state that sits in front of the planner.

Mutations take a deep snapshot first so they can be undone, and the last
plan is cached until the next mutation.
"""
import copy
import logging
import random
from dataclasses import replace
from typing import Iterable, List, Optional

from .config import DEFAULT_CRATE_DIM, DEFAULT_CRATE_WEIGHT, HISTORY_LIMIT, Flags
from .layout import plan_layout
from .models import Crate, LayoutResult, Truck
from .units import normalize_unit

logger = logging.getLogger(__name__)

UNIT_FIELDS = ("unit", "length_unit", "width_unit", "height_unit")


def random_color(rnd=random):
    return "#%06x" % rnd.randrange(0x1000000)


class CrateBook:
    def __init__(self, truck: Truck, crates: Iterable[Crate] = (), flags: Optional[Flags] = None):
        self.truck = truck
        self.crates: List[Crate] = list(crates)
        self.flags = flags or Flags()
        self._history = []
        self._revision = 0
        self._cached = None  # (revision, LayoutResult)

    # ---- ids ----
    def next_id(self):
        ints = [c.id for c in self.crates if isinstance(c.id, int)]
        return max(ints) + 1 if ints else 1

    def get(self, crate_id) -> Crate:
        """Copy of the stored crate; change it through update()."""
        return replace(self.crates[self._index(crate_id)])

    # ---- mutations ----
    def add(self, **fields) -> Crate:
        crate = self._new_crate(**fields)
        self._snapshot()
        self.crates.append(crate)
        logger.debug("added crate %r (%s)", crate.id, crate.label)
        return replace(crate)

    def add_crates(self, crates: Iterable[Crate]) -> List[Crate]:
        """Append imported crates under fresh ids, keeping stacks between them.

        Ids are handed out by position, so repeated incoming ids still get
        distinct new ids. A stack target that names a repeated id goes to the
        first crate carrying it.
        """
        crates = list(crates)
        start = self.next_id()
        remap = {}
        for offset, c in enumerate(crates):
            remap.setdefault(c.id, start + offset)
        added = []
        for offset, c in enumerate(crates):
            target = remap.get(c.stack_target_id, c.stack_target_id)
            new = replace(c, id=start + offset, stack_target_id=target)
            if new.color is None:
                new.color = random_color()
            added.append(new)
        self._snapshot()
        self.crates.extend(added)
        logger.debug("imported %d crate(s)", len(added))
        return [replace(c) for c in added]

    def update(self, crate_id, **changes) -> Crate:
        idx = self._index(crate_id)
        _check_units(changes)
        if "unit" in changes:
            unit = normalize_unit(changes.pop("unit"))
            changes.update(length_unit=unit, width_unit=unit, height_unit=unit)
        updated = replace(self.crates[idx], **changes)
        self._snapshot()
        self.crates[idx] = updated
        return replace(updated)

    def delete(self, crate_id):
        """Remove a crate and every crate stacked on it."""
        self._index(crate_id)
        self._snapshot()
        before = len(self.crates)
        self.crates = [c for c in self.crates if c.id != crate_id and c.stack_target_id != crate_id]
        logger.debug("deleted crate %r (%d removed)", crate_id, before - len(self.crates))

    def set_truck(self, **changes) -> Truck:
        if "unit" in changes:
            changes["unit"] = normalize_unit(changes["unit"])
        truck = replace(self.truck, **changes)
        self._snapshot()
        self.truck = truck
        return truck

    # ---- history ----
    @property
    def can_undo(self):
        return bool(self._history)

    def undo(self):
        if not self._history:
            return False
        self.truck, self.crates = self._history.pop()
        self._revision += 1
        return True

    # ---- planning ----
    def plan(self) -> LayoutResult:
        if self._cached is None or self._cached[0] != self._revision:
            self._cached = (self._revision, plan_layout(self.truck, self.crates, self.flags))
        return self._cached[1]

    def _snapshot(self):
        self._history.append(copy.deepcopy((self.truck, self.crates)))
        if len(self._history) > HISTORY_LIMIT:
            del self._history[0]
        self._revision += 1

    def _index(self, crate_id):
        for i, c in enumerate(self.crates):
            if c.id == crate_id:
                return i
        raise KeyError(crate_id)

    def _new_crate(self, **fields):
        n = len(self.crates) + 1
        unit = normalize_unit(fields.pop("unit", "m"))
        _check_units(fields)
        defaults = dict(
            id=self.next_id(),
            label=f"Crate {n}",
            length=DEFAULT_CRATE_DIM, width=DEFAULT_CRATE_DIM, height=DEFAULT_CRATE_DIM,
            weight=DEFAULT_CRATE_WEIGHT,
            length_unit=unit, width_unit=unit, height_unit=unit,
            color=random_color(),
        )
        defaults.update(fields)
        return Crate(**defaults)


def _check_units(fields):
    for key in UNIT_FIELDS:
        if key in fields:
            normalized = normalize_unit(fields[key])
            if key != "unit":
                fields[key] = normalized
