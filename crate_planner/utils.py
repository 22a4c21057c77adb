import csv, json
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection

from .config import STYLE_PALETTE

LAYOUT_KEYS = ["id","label","lane","x","y","z","L","W","H","weight","stack_target_id"]

def save_layout_csv(placed, path):
    with open(path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=LAYOUT_KEYS); w.writeheader()
        for p in placed:
            x, y, z = p.position
            w.writerow({
                "id": p.id, "label": p.label, "lane": p.lane,
                "x": round(x, 6), "y": round(y, 6), "z": round(z, 6),
                "L": round(p.L, 6), "W": round(p.W, 6), "H": round(p.H, 6),
                "weight": p.crate.weight,
                "stack_target_id": "" if p.crate.stack_target_id is None else p.crate.stack_target_id,
            })

def save_report_json(rep, path):
    with open(path, "w") as f: json.dump(rep, f, indent=2)

def build_warnings(result, crates):
    """Banner lines for overflow, capacity and overlap problems."""
    labels = {c.id: c.label for c in crates}
    out = []
    if result.overflow_ids:
        out.append("Overflow: " + ", ".join(str(labels.get(i, i)) for i in result.overflow_ids))
    if result.capacity_exceeded:
        out.append(f"Max load {result.total_weight:g}/{result.max_load:g}kg")
    if result.overlaps:
        out.append("Overlap: " + ",".join(f"{a}&{b}" for a, b in result.overlaps))
    return out

def _crate_color(p, idx):
    base = p.crate.color or STYLE_PALETTE[idx % len(STYLE_PALETTE)]
    return to_rgba(base, alpha=p.crate.opacity)

def _box_faces(b):
    (x0,x1),(y0,y1),(z0,z1) = b
    # plot axes: X = truck length, Y = truck width, Z = height
    X=[x0,x1,x1,x0,x0,x1,x1,x0]; Y=[z0,z0,z1,z1,z0,z0,z1,z1]; Z=[y0,y0,y0,y0,y1,y1,y1,y1]
    P=list(zip(X,Y,Z))
    return [[P[0],P[1],P[2],P[3]],[P[4],P[5],P[6],P[7]],[P[0],P[1],P[5],P[4]],
            [P[2],P[3],P[7],P[6]],[P[1],P[2],P[6],P[5]],[P[4],P[7],P[3],P[0]]]

def draw3d(placed, truck, out_png, title=None):
    L, W, H = truck.L, truck.W, truck.H
    fig = plt.figure()
    ax = fig.add_subplot(projection='3d')
    ax.set_xlim(0, L); ax.set_ylim(0, W); ax.set_zlim(0, H)
    # truck outline and the front (cab) wall
    outline = _box_faces(((0, L), (0, H), (0, W)))
    ax.add_collection3d(Line3DCollection([f + [f[0]] for f in outline], colors="0.4", linewidths=0.5))
    ax.add_collection3d(Poly3DCollection([outline[5]], facecolors=[(0.33,0.33,0.33,0.35)]))
    for i, p in enumerate(placed):
        color = _crate_color(p, i)
        ax.add_collection3d(Poly3DCollection(_box_faces(p.bounds()), facecolors=[color]*6, edgecolors='k', linewidths=0.2))
        x, y, z = p.position
        ax.text(x, z, y + p.H/2 + 0.02, str(p.label), fontsize=6, ha="center")
    ax.set_xlabel("L (m)"); ax.set_ylabel("W (m)"); ax.set_zlabel("H (m)")
    if title: ax.set_title(title)
    fig.tight_layout(); fig.savefig(out_png, dpi=150); plt.close(fig)
