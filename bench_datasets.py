"""
Run from the project root:
    python3 bench_datasets.py

This script:
- Scans CSV files in the repository root.
- For each CSV it loads crates using crate_planner.importer.load_crates.
- Plans the load for every truck in TRUCK_PRESETS.
- Keeps and writes the best result (layout + report + plot) per dataset into `bench_results/`.

"Best" is the preset that places the most crate volume; ties go to fewer overlaps.
"""
import os, glob

from crate_planner.config import TRUCK_PRESETS, Flags
from crate_planner.importer import load_crates
from crate_planner.layout import plan_layout
from crate_planner.utils import save_layout_csv, save_report_json, draw3d

ROOT = os.path.dirname(os.path.abspath(__file__))
CSV_FILES = [p for p in glob.glob(os.path.join(ROOT, "*.csv"))]
# ignore output files we might have generated
IGNORE_SUFFIXES = ("_debug_packed", "_packed_layout")
IGNORE_PREFIXES = {"packed_layout", "report"}

os.makedirs("bench_results", exist_ok=True)

for csv_path in CSV_FILES:
    name = os.path.basename(csv_path).rsplit(".", 1)[0]
    if name.endswith(IGNORE_SUFFIXES) or any(name.startswith(pref) for pref in IGNORE_PREFIXES):
        print(f"Skipping generated file: {csv_path}")
        continue
    print(f"\n=== Dataset: {name} ({csv_path}) ===")
    try:
        crates = load_crates(csv_path).crates
    except ValueError as e:
        print(f"Skipping {csv_path}: failed to load as crates sheet ({e})")
        continue
    print(f"Loaded {len(crates)} crates from {name}")
    if not crates:
        continue

    best = {"key": None, "preset": None}
    for preset_name, spec in TRUCK_PRESETS.items():
        truck = spec.to_truck()
        result = plan_layout(truck, crates, Flags())
        vol_used = sum(p.L * p.W * p.H for p in result.placed)
        vol_util = 100.0 * vol_used / (truck.L * truck.W * truck.H)
        key = (vol_used, -len(result.overlaps))
        print(f"{preset_name:>14}: placed={len(result.placed)} overflow={len(result.overflow_ids)} "
              f"overlaps={len(result.overlaps)} vol={vol_util:.2f}% capacity_exceeded={result.capacity_exceeded}")

        if best["key"] is None or key > best["key"]:
            best = {"key": key, "preset": preset_name}
            out_prefix = os.path.join("bench_results", f"{name}_best")
            save_layout_csv(result.placed, out_prefix + "_packed_layout.csv")
            report = result.to_report()
            report.update(truck=preset_name, volume_utilization_pct=round(vol_util, 2))
            save_report_json(report, out_prefix + "_report.json")
            draw3d(result.placed, truck, out_prefix + "_plot3d.png",
                   title=f"{name} on {spec.name}: {vol_util:.2f}% vol")

    print(f"BEST for {name}: {best['preset']}")

print('\nDone. Results saved under bench_results/.')
