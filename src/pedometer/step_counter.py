"""Step counting listener with cadence metrics."""

from typing import Dict, List, Optional
import numpy as np


NS_PER_SECOND = 1_000_000_000


class StepCounter:
    """Counts steps reported by a StepDetector and keeps their timestamps."""

    def __init__(self):
        self.num_steps = 0
        self.step_times_ns: List[int] = []

    def step(self, timestamp_ns: int):
        """Record a detected step."""
        self.num_steps += 1
        self.step_times_ns.append(timestamp_ns)

    def reset(self):
        """Zero the count, e.g. when a new walking session starts."""
        self.num_steps = 0
        self.step_times_ns = []

    def get_step_times(self) -> List[int]:
        return self.step_times_ns.copy()

    def get_metrics(
        self,
        window_seconds: Optional[float] = None,
        now_ns: Optional[int] = None,
    ) -> Dict:
        """
        Calculate cadence metrics from the recorded steps.

        Args:
            window_seconds: If provided, only use steps from the last N seconds.
                          If None, use all recorded steps.
            now_ns: Reference time for the window (ns). Defaults to the most
                    recent step, so pass the latest sample time to let the
                    metrics drop to zero when the walker stops.

        Returns:
            Dictionary containing step metrics
        """
        step_times = np.array(self.step_times_ns, dtype=np.int64)

        if window_seconds is not None and len(step_times) > 0:
            current_time = now_ns if now_ns is not None else int(step_times[-1])
            cutoff_time = current_time - int(window_seconds * NS_PER_SECOND)
            step_times = step_times[step_times >= cutoff_time]

        metrics = {
            'total_steps': len(step_times),
            'step_interval_mean': None,
            'step_interval_std': None,
            'cadence': None,
            'step_interval_cv': None,
        }

        if len(step_times) > 1:
            intervals = np.diff(step_times) / NS_PER_SECOND
            metrics['step_interval_mean'] = float(np.mean(intervals))
            metrics['step_interval_std'] = float(np.std(intervals))

            # Cadence in steps per minute
            metrics['cadence'] = float(60.0 / metrics['step_interval_mean'])

            # Higher CV indicates a less regular walking rhythm
            metrics['step_interval_cv'] = float(
                metrics['step_interval_std'] / metrics['step_interval_mean'] * 100
            )

        return metrics
