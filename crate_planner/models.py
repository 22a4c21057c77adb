from dataclasses import dataclass, field
from typing import Hashable, List, Optional, Tuple

from .units import normalize_unit, to_meters

@dataclass
class Truck:
    length: float; width: float; height: float
    unit: str = "m"
    max_load: Optional[float] = None  # kg

    def __post_init__(self):
        self.unit = normalize_unit(self.unit)

    @property
    def L(self): return to_meters(self.length, self.unit)
    @property
    def W(self): return to_meters(self.width, self.unit)
    @property
    def H(self): return to_meters(self.height, self.unit)

@dataclass
class Crate:
    id: Hashable
    label: str
    length: float; width: float; height: float
    weight: float
    length_unit: str = "m"; width_unit: str = "m"; height_unit: str = "m"
    stackable: bool = False
    stack_target_id: Optional[Hashable] = None  # id of the crate this one rests on
    color: Optional[str] = None
    opacity: float = 1.0

    def __post_init__(self):
        self.length_unit = normalize_unit(self.length_unit)
        self.width_unit = normalize_unit(self.width_unit)
        self.height_unit = normalize_unit(self.height_unit)

    @property
    def L(self): return to_meters(self.length, self.length_unit)
    @property
    def W(self): return to_meters(self.width, self.width_unit)
    @property
    def H(self): return to_meters(self.height, self.height_unit)
    @property
    def is_floor(self): return self.stack_target_id is None

@dataclass
class PlacedCrate:
    crate: Crate
    position: Tuple[float, float, float]  # centroid (x along length, y up, z across)
    lane: str = "left"

    @property
    def id(self): return self.crate.id
    @property
    def label(self): return self.crate.label
    @property
    def L(self): return self.crate.L
    @property
    def W(self): return self.crate.W
    @property
    def H(self): return self.crate.H

    def bounds(self):
        x, y, z = self.position
        return ((x - self.L/2, x + self.L/2), (y - self.H/2, y + self.H/2), (z - self.W/2, z + self.W/2))

@dataclass
class LayoutResult:
    placed: List[PlacedCrate] = field(default_factory=list)
    overflow_ids: List[Hashable] = field(default_factory=list)
    overlaps: List[Tuple[str, str]] = field(default_factory=list)
    overlap_ids: List[Tuple[Hashable, Hashable]] = field(default_factory=list)
    total_weight: float = 0.0
    capacity_exceeded: bool = False
    max_load: Optional[float] = None

    def to_report(self):
        return {
            "placed_items": len(self.placed),
            "overflow_ids": list(self.overflow_ids),
            "overlaps": [list(p) for p in self.overlaps],
            "total_weight_kg": round(self.total_weight, 3),
            "max_load_kg": self.max_load,
            "capacity_exceeded": self.capacity_exceeded,
        }
