"""Step detection from streaming accelerometer data."""

from . import vector_math
from .config import DetectorConfig, ReplayConfig
from .ring_buffer import RingBuffer
from .step_detector import StepDetector, DetectorState, StepListener
from .step_counter import StepCounter
from .data_loader import AccelDataLoader
from .stream_processor import AccelStreamProcessor, count_steps


__all__ = [
    'vector_math',
    'DetectorConfig',
    'ReplayConfig',
    'RingBuffer',
    'StepDetector',
    'DetectorState',
    'StepListener',
    'StepCounter',
    'AccelDataLoader',
    'AccelStreamProcessor',
    'count_steps'
]
