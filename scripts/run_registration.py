"""
Beacon registration workflow

Loads scanner reports, places every scanner in one global frame and reports the
number of distinct beacons and the largest Manhattan distance between scanners.
"""

import sys
import argparse
import logging
import time
import numpy as np
from pathlib import Path

# Add the src to the path to import modules
sys.path.append(str(Path(__file__).parent.parent / "src"))

from beacon_registration.preprocessing.loader import ScannerReportLoader
from beacon_registration.alignment import (
    DisconnectedDatasetError,
    GlobalAssembler,
    PairwiseAligner,
    RegistrationSummary,
    beacon_observation_counts,
    global_beacons,
)
from beacon_registration.acceleration import PairParallelExecutor
from beacon_registration.utils.config import load_config, AppConfig
from beacon_registration.utils.export import export_beacons_to_laz, export_summary_json
from beacon_registration.utils.logging import setup_logger, set_package_log_level


def main(argv=None) -> int:
    """
    Run the registration workflow. Returns the process exit code.
    """
    parser = argparse.ArgumentParser(description="Beacon Registration Workflow")
    parser.add_argument("--input", type=str, default=None, help="Scanner report text file")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file (defaults to config/default.yaml)",
    )
    parser.add_argument("--min-overlap", type=int, default=None, help="Override alignment.min_overlap")
    parser.add_argument(
        "--orientations",
        choices=["all", "proper"],
        default=None,
        help="Override alignment.orientations",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Align scanner pairs with this many worker processes (enables parallel mode)",
    )
    parser.add_argument("--output-dir", type=str, default=None, help="Override paths.output_dir")
    parser.add_argument("--visualize", action="store_true", help="Open a 3D view of the result")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args(argv)

    cfg: AppConfig = load_config(args.config)
    if args.input:
        cfg.paths.input_file = args.input
    if args.output_dir:
        cfg.paths.output_dir = args.output_dir
    if args.min_overlap is not None:
        cfg.alignment.min_overlap = args.min_overlap
    if args.orientations:
        cfg.alignment.orientations = args.orientations
    if args.workers is not None:
        cfg.parallel.enabled = True
        cfg.parallel.n_workers = args.workers
    if args.visualize:
        cfg.visualization.enabled = True

    log_level = logging.DEBUG if args.debug else getattr(logging, cfg.logging.level.upper(), logging.INFO)
    logger = setup_logger(__name__, level=log_level, log_file=cfg.logging.file)
    set_package_log_level(log_level)

    if not cfg.paths.input_file:
        logger.error("No input file given (use --input or paths.input_file)")
        return 1

    logger.info("Beacon Registration Workflow")
    logger.info("============================")

    # Step 1: load reports
    try:
        reports = ScannerReportLoader().load(cfg.paths.input_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not read scanner reports: {e}")
        return 1

    # Step 2: assemble the global frame
    try:
        aligner = PairwiseAligner(
            min_overlap=cfg.alignment.min_overlap,
            orientations=cfg.alignment.orientations,
        )
    except ValueError as e:
        logger.error(str(e))
        return 1
    executor = PairParallelExecutor(cfg.parallel.n_workers) if cfg.parallel.enabled else None

    start = time.time()
    try:
        result = GlobalAssembler(aligner, executor).assemble(reports)
    except DisconnectedDatasetError as e:
        logger.error(f"Registration failed: {e}")
        return 1
    logger.info(f"Assembly finished in {time.time() - start:.2f}s")

    # Step 3: aggregate
    summary = RegistrationSummary.from_solved(result.solved, attempts=result.attempts)
    logger.info(f"Distinct beacons: {summary.total_beacons}")
    logger.info(f"Largest scanner separation (Manhattan): {summary.max_scanner_separation}")

    # Step 4: outputs
    output_dir = Path(cfg.paths.output_dir)
    stem = Path(cfg.paths.input_file).stem
    if cfg.export.summary_json:
        export_summary_json(summary, str(output_dir / f"{stem}_registration.json"))
    if cfg.export.laz:
        beacons = global_beacons(result.solved)
        counts = beacon_observation_counts(result.solved)
        export_beacons_to_laz(
            beacons,
            str(output_dir / f"{stem}_beacons.las"),
            extra_dims={"scanner_count": np.array([counts[b] for b in beacons], dtype=np.uint16)},
        )
    if cfg.visualization.enabled:
        from beacon_registration.visualization import RegistrationVisualizer
        RegistrationVisualizer(show_scanners=cfg.visualization.show_scanners).show(result.solved)

    return 0


if __name__ == "__main__":
    sys.exit(main())
