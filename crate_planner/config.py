from dataclasses import dataclass

@dataclass
class TruckSpec:
    name: str = "Standard box truck"
    L: float = 10.0   # meters
    W: float = 2.5    # meters (two lanes of 1.25 m)
    H: float = 2.6    # meters
    max_load: float = 1000.0  # kg

    def to_truck(self):
        from .models import Truck
        return Truck(length=self.L, width=self.W, height=self.H, unit="m", max_load=self.max_load)

TRUCK_PRESETS = {
    "standard": TruckSpec(),
    "tata_lpt_712": TruckSpec(name="Tata LPT 712", L=5.218, W=1.962, H=1.812, max_load=3800.0),
    "eicher_20ft": TruckSpec(name="20 ft Eicher Box", L=6.32, W=2.15, H=2.25, max_load=8500.0),
}

@dataclass
class Flags:
    # False -> only crates that were actually placed count toward total weight
    count_overflow_weight: bool = True

EPS: float = 1e-9

# editor defaults for a freshly added crate
DEFAULT_CRATE_DIM: float = 1.0
DEFAULT_CRATE_WEIGHT: float = 50.0
HISTORY_LIMIT: int = 100

UNIT_ALIASES = {
    "m": "m", "meter": "m", "meters": "m", "metre": "m", "metres": "m",
    "cm": "cm", "centimeter": "cm", "centimeters": "cm", "centimetre": "cm", "centimetres": "cm",
}

LAYOUT_CSV = "packed_layout.csv"
REPORT_JSON = "report.json"
PLOT_PNG = "plot3d.png"

STYLE_PALETTE = (
    (0.1, 0.3, 0.9),    # blue
    (0.1, 0.7, 0.2),    # green
    (0.95, 0.85, 0.15), # yellow
    (0.95, 0.55, 0.15), # orange
    (0.9, 0.1, 0.1),    # red
    (0.55, 0.25, 0.75), # purple
)
