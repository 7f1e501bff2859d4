"""
Export utilities for registration results.

Provides functions to export:
- The merged global beacon set as a LAS/LAZ point cloud
- A JSON summary of scanner poses and the aggregate answers

The point cloud output opens in CloudCompare, QGIS and similar software.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Sequence, TYPE_CHECKING

import numpy as np

from .geometry import Point, points_to_array
from .logging import setup_logger

if TYPE_CHECKING:
    from ..alignment.aggregation import RegistrationSummary

logger = setup_logger(__name__)

LAS_COORD_LIMIT = 2 ** 31 - 1


def export_beacons_to_laz(
    beacons: Sequence[Point],
    output_path: str,
    *,
    extra_dims: Optional[Dict[str, np.ndarray]] = None,
) -> str:
    """
    Export beacon positions to a LAS/LAZ file.

    Coordinates are integers, so the file uses unit scale and zero offset and
    stores them exactly.

    Args:
        beacons: Global-frame beacon positions
        output_path: Path for output file (extension determines format)
        extra_dims: Optional dict of per-beacon arrays stored as extra dimensions

    Returns:
        Path to created file

    Raises:
        ValueError: If there are no beacons, a coordinate does not fit the LAS
            integer range, or an extra dimension has the wrong length
    """
    import laspy

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    points = points_to_array(beacons)
    if len(points) == 0:
        raise ValueError("No beacons to export")
    # unit scale stores coordinates directly in the signed 32-bit record fields
    if points.dtype == object or np.abs(points).max() > LAS_COORD_LIMIT:
        raise ValueError(f"Beacon coordinates exceed the LAS integer range of +/-{LAS_COORD_LIMIT}")

    header = laspy.LasHeader(point_format=6, version="1.4")
    header.offsets = np.zeros(3)
    header.scales = np.ones(3)

    if extra_dims:
        for dim_name, dim_data in extra_dims.items():
            if len(dim_data) != len(points):
                raise ValueError(
                    f"Extra dimension '{dim_name}' has {len(dim_data)} values for {len(points)} beacons"
                )
            header.add_extra_dim(laspy.ExtraBytesParams(name=dim_name, type=np.asarray(dim_data).dtype))

    las = laspy.LasData(header)
    las.x = points[:, 0]
    las.y = points[:, 1]
    las.z = points[:, 2]
    if extra_dims:
        for dim_name, dim_data in extra_dims.items():
            setattr(las, dim_name, np.asarray(dim_data))

    las.write(str(output_path))
    logger.info(f"Exported {len(points)} beacons to {output_path}")
    return str(output_path)


def export_summary_json(summary: "RegistrationSummary", output_path: str) -> str:
    """Write the registration summary as indented JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(summary.to_dict(), f, indent=2)
    logger.info(f"Exported registration summary to {output_path}")
    return str(output_path)
