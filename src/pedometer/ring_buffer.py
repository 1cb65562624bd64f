"""Fixed-capacity ring buffer for streaming scalar samples."""

import numpy as np

from . import vector_math


class RingBuffer:
    """
    Fixed-capacity ring buffer of floats.

    The write counter is incremented *before* indexing, so the first value
    lands in slot 1 and slot 0 is only written once the counter reaches a
    multiple of the capacity. Unwritten slots hold 0.0 and therefore do not
    contribute to ``sum()``.
    """

    def __init__(self, capacity: int):
        """
        Initialize the ring buffer.

        Args:
            capacity: Number of most recent values retained

        Raises:
            ValueError: If capacity is smaller than 1
        """
        if capacity < 1:
            raise ValueError(f"Ring buffer capacity must be at least 1, got {capacity}")

        self.capacity = capacity
        self.counter = 0
        self.data = np.zeros(capacity, dtype=np.float64)

    def push(self, value: float) -> int:
        """
        Write a value and return the slot it was written to.

        Args:
            value: New sample value

        Returns:
            Index of the slot that now holds ``value``
        """
        self.counter += 1
        slot = self.counter % self.capacity
        self.data[slot] = value
        return slot

    @property
    def fill_count(self) -> int:
        """Number of slots holding written values (``min(counter, capacity)``)."""
        return min(self.counter, self.capacity)

    def sum(self) -> float:
        return vector_math.sum(self.data)

    def mean(self) -> float:
        """Mean of the written values. Division by zero yields NaN before any push."""
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.sum()) / self.fill_count)

    def __len__(self) -> int:
        return self.fill_count
