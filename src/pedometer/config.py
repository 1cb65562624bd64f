"""Configuration settings for step detection and stream replay."""

from pathlib import Path
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class DetectorConfig:
    """Tunable constants of the step detector."""

    ACCEL_RING_SIZE: int = 50  # Samples averaged for the gravity estimate
    VEL_RING_SIZE: int = 10  # Residuals summed for the velocity estimate
    STEP_THRESHOLD: float = 4.0  # Velocity estimate that counts as a step (same units as accel)
    STEP_DELAY_NS: int = 250_000_000  # Minimum time between steps (ns)

    # Gravity magnitudes below this skip the velocity update. None keeps the
    # unguarded path where a zero magnitude propagates NaN.
    MIN_GRAVITY_MAGNITUDE: Optional[float] = None


@dataclass
class ReplayConfig:
    """Configuration for replaying recorded accelerometer streams."""

    DATA_DIR: Path = Path("data/raw/accel")
    TIME_COLUMN: str = "Time"  # Recording timestamps in seconds
    ACCEL_COLUMNS: Tuple[str, str, str] = ("Accel X", "Accel Y", "Accel Z")
