"""
Generate a synthetic scanner dataset with a known solution.

- Places scanners along a random walk so each one overlaps its predecessor.
- Scatters beacons around every scanner and extra beacons inside each
  consecutive overlap region, so neighbouring scanners share enough beacons.
- Each scanner reports the beacons within its cubic range, rotated into a
  random proper orientation and relative to its own position.
- Writes the reports in the text format read by ScannerReportLoader, plus a
  JSON file with the true scanner poses.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.parent / "src"))

from beacon_registration.alignment import PROPER_ORIENTATIONS, ScannerReport
from beacon_registration.preprocessing import format_reports
from beacon_registration.utils.geometry import array_to_points


def make_scene(n_scanners=8, scan_range=1000, beacons_per_scanner=20, shared_per_overlap=14, seed=42):
    rng = np.random.default_rng(seed)
    positions = [np.zeros(3, dtype=np.int64)]
    for _ in range(n_scanners - 1):
        step = rng.integers(-scan_range // 2, scan_range // 2 + 1, size=3)
        axis = rng.integers(0, 3)
        step[axis] = rng.choice([-1, 1]) * rng.integers(scan_range // 2, scan_range + 1)
        positions.append(positions[-1] + step)

    clouds = []
    for p in positions:
        clouds.append(p + rng.integers(-scan_range, scan_range + 1, size=(beacons_per_scanner, 3)))
    for a, b in zip(positions[:-1], positions[1:]):
        lo = np.maximum(a, b) - scan_range
        hi = np.minimum(a, b) + scan_range
        clouds.append(rng.integers(lo, hi + 1, size=(shared_per_overlap, 3)))
    world = np.unique(np.vstack(clouds), axis=0)

    orientations = [PROPER_ORIENTATIONS[0]] + [
        PROPER_ORIENTATIONS[int(i)] for i in rng.integers(0, len(PROPER_ORIENTATIONS), size=n_scanners - 1)
    ]
    reports = []
    for scanner_id, (p, orientation) in enumerate(zip(positions, orientations)):
        visible = world[np.all(np.abs(world - p) <= scan_range, axis=1)]
        local = orientation.inverse().apply_array(visible - p)
        local = local[rng.permutation(len(local))]
        reports.append(ScannerReport(scanner_id, tuple(array_to_points(local))))

    truth = {
        "total_beacons": int(len(np.unique(np.vstack([
            world[np.all(np.abs(world - p) <= scan_range, axis=1)] for p in positions
        ]), axis=0))),
        "scanners": [
            {"scanner_id": i, "position": [int(v) for v in p], "orientation": str(o)}
            for i, (p, o) in enumerate(zip(positions, orientations))
        ],
    }
    return reports, truth


def main():
    parser = argparse.ArgumentParser(description="Generate synthetic scanner reports")
    parser.add_argument("--output", type=str, default="data/synthetic/scanners.txt")
    parser.add_argument("--scanners", type=int, default=8)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    reports, truth = make_scene(n_scanners=args.scanners, seed=args.seed)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(format_reports(reports), encoding="utf-8")
    out.with_suffix(".truth.json").write_text(json.dumps(truth, indent=2), encoding="utf-8")
    print(f"Wrote {len(reports)} scanners to {out} ({truth['total_beacons']} distinct beacons)")


if __name__ == "__main__":
    main()
