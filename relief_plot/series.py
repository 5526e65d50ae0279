from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class DataPoint:
    time: float
    elevation: float


def points_to_arrays(points: Sequence[DataPoint]) -> tuple[np.ndarray, np.ndarray]:
    times = np.fromiter((p.time for p in points), dtype=np.float64, count=len(points))
    elevations = np.fromiter((p.elevation for p in points), dtype=np.float64, count=len(points))
    return times, elevations
