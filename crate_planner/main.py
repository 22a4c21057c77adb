import argparse, logging, os, sys
from .config import TruckSpec, Flags, LAYOUT_CSV, REPORT_JSON, PLOT_PNG
from .importer import load_crates
from .layout import plan_layout
from .models import Truck
from .units import normalize_unit
from .utils import save_layout_csv, save_report_json, build_warnings, draw3d

def build_parser():
    spec = TruckSpec()
    ap = argparse.ArgumentParser(prog="crate-planner", description="Plan crate placement inside a truck bed.")
    ap.add_argument("--items", required=True, help="CSV or Excel sheet with label,length,width,height,weight columns")
    ap.add_argument("--truck", nargs=3, type=float, metavar=("L", "W", "H"), default=[spec.L, spec.W, spec.H])
    ap.add_argument("--truck-unit", default="m")
    ap.add_argument("--max-load", type=float, default=spec.max_load, help="kg; pass 0 to disable the capacity check")
    ap.add_argument("--unit", default="m", help="unit of crate dimensions without a unit column")
    ap.add_argument("--sheet", default=0, help="sheet name or index for Excel files")
    ap.add_argument("--placed-weight-only", action="store_true", help="ignore overflow crates in the total weight")
    ap.add_argument("--out", default=".")
    ap.add_argument("--no-plot", action="store_true")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    sheet = int(args.sheet) if str(args.sheet).isdigit() else args.sheet
    try:
        truck = Truck(*args.truck, unit=normalize_unit(args.truck_unit), max_load=args.max_load or None)
        imported = load_crates(args.items, unit=args.unit, sheet_name=sheet)
    except (ValueError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    crates = imported.crates
    print(f"[INFO] Loaded {len(crates)} crates from {args.items} ({len(imported.rejected)} rows skipped)")

    flags = Flags(count_overflow_weight=not args.placed_weight_only)
    result = plan_layout(truck, crates, flags)
    for line in build_warnings(result, crates):
        print(f"[WARN] {line}")

    os.makedirs(args.out, exist_ok=True)
    save_layout_csv(result.placed, os.path.join(args.out, LAYOUT_CSV))
    report = result.to_report()
    report["rejected_rows"] = [{"row": r, "reason": why} for r, why in imported.rejected]
    save_report_json(report, os.path.join(args.out, REPORT_JSON))
    written = [LAYOUT_CSV, REPORT_JSON]
    if not args.no_plot:
        load = f"{result.total_weight:g}/{truck.max_load:g} kg" if truck.max_load else f"{result.total_weight:g} kg"
        draw3d(result.placed, truck, os.path.join(args.out, PLOT_PNG), title=f"Placed {len(result.placed)}/{len(crates)} | {load}")
        written.append(PLOT_PNG)
    print(f"Placed: {len(result.placed)} | Overflow: {len(result.overflow_ids)} | Weight: {result.total_weight:g} kg")
    print("Wrote: " + ", ".join(written))
    return 0

if __name__ == "__main__":
    sys.exit(main())
