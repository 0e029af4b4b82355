from __future__ import annotations


class GrowthTrackerError(Exception):
    """Base class for every failure the growth core reports to callers."""


class InvalidDate(GrowthTrackerError, ValueError):
    """Birth or measurement date could not be parsed."""


class InvalidScale(GrowthTrackerError, ValueError):
    """Pixel-to-cm scale is not a positive finite number."""


class DetectionFailed(GrowthTrackerError):
    """The pose model could not locate a subject in the image."""


class SimulationTimeout(GrowthTrackerError):
    """The measurement step did not finish within its allotted time."""

    def __init__(self, timeout_s: float):
        super().__init__(f"Measurement did not finish within {timeout_s:g}s")
        self.timeout_s = timeout_s
