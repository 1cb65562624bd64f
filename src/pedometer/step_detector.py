"""Real-time step detection from tri-axial accelerometer samples."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

import numpy as np

from . import vector_math
from .config import DetectorConfig
from .ring_buffer import RingBuffer


logger = logging.getLogger(__name__)


class StepListener(Protocol):
    """Anything that wants to be told about detected steps."""

    def step(self, timestamp_ns: int) -> None:
        ...


@dataclass
class DetectorState:
    """Ring buffers and timing state owned by a single StepDetector."""

    accel_ring_x: RingBuffer
    accel_ring_y: RingBuffer
    accel_ring_z: RingBuffer
    vel_ring: RingBuffer
    last_step_time_ns: int = 0
    old_velocity_estimate: float = 0.0

    @classmethod
    def create(cls, config: DetectorConfig) -> 'DetectorState':
        """Build empty state sized for ``config``."""
        return cls(
            accel_ring_x=RingBuffer(config.ACCEL_RING_SIZE),
            accel_ring_y=RingBuffer(config.ACCEL_RING_SIZE),
            accel_ring_z=RingBuffer(config.ACCEL_RING_SIZE),
            vel_ring=RingBuffer(config.VEL_RING_SIZE),
        )


class StepDetector:
    """
    Receives accelerometer updates and alerts a listener when a step is detected.

    The gravity direction is estimated as the normalized mean of the last
    ``ACCEL_RING_SIZE`` samples. Each sample is projected onto that direction
    and the gravity magnitude subtracted; the last ``VEL_RING_SIZE`` residuals
    are summed into a velocity estimate. A step fires when the estimate
    crosses ``STEP_THRESHOLD`` upwards and more than ``STEP_DELAY_NS`` has
    passed since the previous step.

    No input validation is performed. A zero gravity estimate (e.g. an
    all-zero first reading) fills the velocity window with NaN; no step can
    fire until finite samples have cycled it out. Set
    ``MIN_GRAVITY_MAGNITUDE`` to skip such samples instead.
    """

    def __init__(
        self,
        config: Optional[DetectorConfig] = None,
        state: Optional[DetectorState] = None,
    ):
        """
        Initialize the step detector.

        Args:
            config: Detector constants, defaults to ``DetectorConfig()``
            state: Pre-built state to take ownership of, defaults to fresh state
        """
        self.config = config or DetectorConfig()
        self.state = state or DetectorState.create(self.config)
        self._listener: Optional[Callable[[int], None]] = None

    def register_listener(self, listener: Union[StepListener, Callable[[int], None]]):
        """
        Install the step callback, replacing any previous one.

        Args:
            listener: Object with a ``step(timestamp_ns)`` method, or a plain
                callable taking the timestamp
        """
        step = getattr(listener, 'step', None)
        self._listener = step if callable(step) else listener

    def reset(self):
        """Reset all internal state. The registered listener is kept."""
        self.state = DetectorState.create(self.config)

    @property
    def velocity_estimate(self) -> float:
        """Velocity estimate computed by the latest update."""
        return self.state.old_velocity_estimate

    @property
    def last_step_time_ns(self) -> int:
        return self.state.last_step_time_ns

    def update_accel(self, timestamp_ns: int, x: float, y: float, z: float) -> bool:
        """
        Accept one accelerometer sample.

        Args:
            timestamp_ns: Sample timestamp (monotonic nanoseconds)
            x: Acceleration along the device x axis
            y: Acceleration along the device y axis
            z: Acceleration along the device z axis

        Returns:
            True if a step was detected on this sample
        """
        state = self.state
        current_accel = np.array([x, y, z], dtype=np.float64)

        # Update our guess of where the global z vector is
        state.accel_ring_x.push(x)
        state.accel_ring_y.push(y)
        state.accel_ring_z.push(z)

        world_z = np.array([
            state.accel_ring_x.mean(),
            state.accel_ring_y.mean(),
            state.accel_ring_z.mean(),
        ])

        normalization_factor = vector_math.norm(world_z)

        min_magnitude = self.config.MIN_GRAVITY_MAGNITUDE
        if min_magnitude is not None and not normalization_factor >= min_magnitude:
            logger.debug(
                f"Skipping sample at {timestamp_ns} ns: gravity magnitude "
                f"{normalization_factor:.3g} below {min_magnitude:.3g}"
            )
            return False

        with np.errstate(divide='ignore', invalid='ignore'):
            world_z = world_z / normalization_factor

        # Component of the current acceleration along world z, minus gravity
        current_z = vector_math.dot(world_z, current_accel) - normalization_factor
        state.vel_ring.push(current_z)

        velocity_estimate = state.vel_ring.sum()

        threshold = self.config.STEP_THRESHOLD
        is_step = (
            velocity_estimate > threshold
            and state.old_velocity_estimate <= threshold
            and timestamp_ns - state.last_step_time_ns > self.config.STEP_DELAY_NS
        )

        if is_step:
            logger.debug(f"Step at {timestamp_ns} ns (velocity estimate {velocity_estimate:.3f})")
            if self._listener is not None:
                self._listener(timestamp_ns)
            state.last_step_time_ns = timestamp_ns

        state.old_velocity_estimate = velocity_estimate
        return is_step
