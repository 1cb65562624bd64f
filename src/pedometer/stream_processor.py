"""Replays accelerometer streams through the step detector."""

import logging
from typing import List, Optional
import polars as pl

from .config import DetectorConfig
from .step_counter import StepCounter
from .step_detector import StepDetector


logger = logging.getLogger(__name__)


class AccelStreamProcessor:
    """Feeds accelerometer samples to a StepDetector and counts the steps."""

    def __init__(self, config: Optional[DetectorConfig] = None):
        """
        Initialize the stream processor.

        Args:
            config: Detector configuration, defaults to ``DetectorConfig()``
        """
        self.detector = StepDetector(config)
        self.counter = StepCounter()
        self.detector.register_listener(self.counter)
        self.samples_processed = 0
        self.latest_time_ns: Optional[int] = None

    def process_sample(self, timestamp_ns: int, x: float, y: float, z: float) -> bool:
        """
        Process a single sample.

        Returns:
            True if the sample triggered a step
        """
        self.samples_processed += 1
        self.latest_time_ns = timestamp_ns
        return self.detector.update_accel(timestamp_ns, x, y, z)

    def process_frame(self, df: pl.DataFrame) -> List[int]:
        """
        Stream every row of a frame through the detector, in order.

        Args:
            df: DataFrame with columns timestamp_ns, x, y, z

        Returns:
            Timestamps (ns) of steps detected within this frame
        """
        steps = []
        for timestamp_ns, x, y, z in df.select(['timestamp_ns', 'x', 'y', 'z']).iter_rows():
            if self.process_sample(timestamp_ns, x, y, z):
                steps.append(timestamp_ns)

        logger.info(f"Processed {len(df)} samples, detected {len(steps)} steps")
        return steps

    def get_metrics(self, window_seconds: Optional[float] = None) -> dict:
        """Cadence metrics, windowed relative to the latest processed sample."""
        return self.counter.get_metrics(window_seconds, now_ns=self.latest_time_ns)

    def reset(self):
        """Reset detector and step count (useful when starting a new stream)."""
        self.detector.reset()
        self.counter.reset()
        self.samples_processed = 0
        self.latest_time_ns = None


def count_steps(df: pl.DataFrame, config: Optional[DetectorConfig] = None) -> List[int]:
    """
    Detect steps in a complete recording.

    Args:
        df: DataFrame with columns timestamp_ns, x, y, z
        config: Detector configuration

    Returns:
        Timestamps (ns) of all detected steps
    """
    processor = AccelStreamProcessor(config)
    return processor.process_frame(df)
