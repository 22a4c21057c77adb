"""
Debug runner: load crates from a sheet and run the planner directly.
Prints the lane breakdown, stacks, overflow and overlaps, and writes a CSV for inspection.
Run:
    python3 run_pack_debug.py sample_crates.csv
"""
import sys
from crate_planner.config import TruckSpec, Flags
from crate_planner.importer import load_crates
from crate_planner.layout import plan_layout
from crate_planner.utils import save_layout_csv, build_warnings

if len(sys.argv) < 2:
    print('Usage: python3 run_pack_debug.py <crates.csv|xlsx>')
    sys.exit(1)

path = sys.argv[1]
try:
    imported = load_crates(path)
except (ValueError, OSError) as e:
    print('Import failed:', e, file=sys.stderr)
    sys.exit(2)
crates = imported.crates
print(f'Loaded {len(crates)} crates from {path}')
for row, why in imported.rejected:
    print(f' skipped row {row}: {why}')

truck = TruckSpec().to_truck()
result = plan_layout(truck, crates, Flags())
print(f'Plan returned {len(result.placed)} placements, total weight {result.total_weight:.2f} kg')
vol_used = sum(p.L*p.W*p.H for p in result.placed)
vol_total = truck.L*truck.W*truck.H
print(f'Volume used {vol_used:.3f} m3 of {vol_total:.3f} ({100.0*vol_used/vol_total:.2f}%)')

# lane breakdown
lanes = {}
for p in result.placed:
    lanes.setdefault(p.lane, []).append(p)
for lane in ("left", "right", "stack"):
    ps = lanes.get(lane, [])
    if not ps: continue
    end = max(p.position[0] + p.L/2 for p in ps)
    weight = sum(p.crate.weight for p in ps)
    print(f' {lane:>5}: {len(ps)} crates; reaches x={end:.3f} m; {weight:.1f} kg')
for line in build_warnings(result, crates):
    print(' ' + line)

out = path.rsplit('.',1)[0] + '_debug_packed.csv'
save_layout_csv(result.placed, out)
print('Wrote debug CSV to', out)
