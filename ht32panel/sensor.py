"""Common interface for system sensors."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Sensor(ABC):
    """A source of one numeric system metric.

    Subclasses set ``name``, ``unit`` and the expected value range, and
    implement :meth:`sample`.
    """

    name: str = ""
    unit: str = ""
    min_value: float = 0.0
    max_value: float = 100.0

    @abstractmethod
    def sample(self) -> float:
        """Take a new reading and return the current value."""