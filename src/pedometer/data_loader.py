"""Loading and validation of recorded accelerometer streams."""

import logging
import polars as pl
from pathlib import Path
from typing import List, Optional

from .config import ReplayConfig


logger = logging.getLogger(__name__)

CANONICAL_COLUMNS = ['timestamp_ns', 'x', 'y', 'z']
RECORDING_SUFFIXES = ('.parquet', '.csv')


class AccelDataLoader:
    """Handles loading and validation of accelerometer recordings."""

    def __init__(self, data_dir: Optional[Path] = None, config: Optional[ReplayConfig] = None):
        """
        Initialize the data loader.

        Args:
            data_dir: Directory containing recordings, defaults to ``config.DATA_DIR``
            config: Replay configuration (column names)
        """
        self.config = config or ReplayConfig()
        self.data_dir = Path(data_dir) if data_dir is not None else self.config.DATA_DIR

    def get_available_recordings(self) -> List[str]:
        """
        List recording names (file stems) in the data directory.

        Returns:
            Sorted list of unique recording names, empty if the directory
            doesn't exist
        """
        names = {
            f.stem
            for suffix in RECORDING_SUFFIXES
            for f in self.data_dir.glob(f"*{suffix}")
        }
        return sorted(names)

    def get_file_path(self, name: str) -> Path:
        """
        Resolve the file for a recording, preferring parquet over CSV.

        Raises:
            FileNotFoundError: If no recording with that name exists
        """
        for suffix in RECORDING_SUFFIXES:
            path = self.data_dir / f"{name}{suffix}"
            if path.exists():
                return path
        raise FileNotFoundError(f"Recording not found: {name} in {self.data_dir}")

    def load_recording(self, name: str) -> pl.DataFrame:
        """
        Load a recording and normalize it to the canonical columns.

        Args:
            name: Recording name (file stem)

        Returns:
            DataFrame with columns timestamp_ns, x, y, z

        Raises:
            FileNotFoundError: If the recording doesn't exist
            ValueError: If required columns are missing
        """
        path = self.get_file_path(name)

        if path.suffix == '.parquet':
            df = pl.read_parquet(path)
        else:
            df = pl.read_csv(path, infer_schema_length=10000)

        if df.is_empty():
            logger.warning(f"Recording {path.name} is empty")

        df = self.normalize_frame(df)
        logger.info(f"Loaded {path.name} ({len(df)} samples)")
        return df

    def normalize_frame(self, df: pl.DataFrame) -> pl.DataFrame:
        """
        Map a raw frame onto the canonical columns.

        Frames that already carry timestamp_ns/x/y/z are only cast. Otherwise
        the time column (seconds) is converted to integer nanoseconds and the
        accelerometer columns are renamed.

        Raises:
            ValueError: If neither layout is present
        """
        if all(col in df.columns for col in CANONICAL_COLUMNS):
            return df.select(
                pl.col('timestamp_ns').cast(pl.Int64),
                pl.col('x').cast(pl.Float64),
                pl.col('y').cast(pl.Float64),
                pl.col('z').cast(pl.Float64),
            )

        time_col = self.config.TIME_COLUMN
        accel_x, accel_y, accel_z = self.config.ACCEL_COLUMNS
        required = [time_col, accel_x, accel_y, accel_z]
        missing = [col for col in required if col not in df.columns]
        if missing:
            raise ValueError(
                f"Missing required columns {missing}. "
                f"Expected {CANONICAL_COLUMNS} or {required}"
            )

        return df.select(
            (pl.col(time_col) * 1e9).round(0).cast(pl.Int64).alias('timestamp_ns'),
            pl.col(accel_x).cast(pl.Float64).alias('x'),
            pl.col(accel_y).cast(pl.Float64).alias('y'),
            pl.col(accel_z).cast(pl.Float64).alias('z'),
        )
