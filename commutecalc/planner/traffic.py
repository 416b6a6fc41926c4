"""
Time-of-day traffic model
Buckets are deterministic; the multiplier within a bucket is a random draw,
so repeated calls with the same input are not reproducible
"""

import random
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from commutecalc.core.utils import round_half_up


class TrafficBucket(str, Enum):
    """Time-of-day congestion classification"""

    PEAK = "peak"
    SHOULDER = "shoulder"
    OFF_PEAK = "off_peak"


PEAK_HOURS = ((7, 9), (17, 19))
SHOULDER_HOURS = (6, 9, 16, 19)


class TrafficBands(BaseModel):
    """Multiplier ranges per bucket, inclusive on both ends"""

    peak: Tuple[float, float] = Field((1.30, 1.50), description="Rush hour multiplier range")
    shoulder: Tuple[float, float] = Field((1.15, 1.30), description="Shoulder hour multiplier range")
    off_peak: Tuple[float, float] = Field((1.00, 1.10), description="Off-peak multiplier range")

    @field_validator("peak", "shoulder", "off_peak")
    def validate_range(cls, v):
        """Ranges must be ordered and never shorten a trip"""
        low, high = v
        if low < 1.0:
            raise ValueError("multiplier ranges must start at 1.0 or above")
        if high < low:
            raise ValueError("multiplier range upper bound must not be below lower bound")
        return v

    def for_bucket(self, bucket: TrafficBucket) -> Tuple[float, float]:
        return getattr(self, bucket.value)


def classify(hour: int) -> TrafficBucket:
    """Classify an hour of day; peak wins where it overlaps shoulder"""
    if any(start <= hour <= end for start, end in PEAK_HOURS):
        return TrafficBucket.PEAK
    if hour in SHOULDER_HOURS:
        return TrafficBucket.SHOULDER
    return TrafficBucket.OFF_PEAK


class TrafficModel:
    """
    Perturbs base route durations according to departure time

    Args:
        rng: Random source for multiplier draws; pass a seeded
            ``random.Random`` for reproducible runs
        bands: Multiplier ranges per bucket
    """

    def __init__(self, rng: Optional[random.Random] = None, bands: Optional[TrafficBands] = None):
        self.rng = rng or random.Random()
        self.bands = bands or TrafficBands()

    def multiplier(self, hour: int) -> float:
        """Draw a multiplier for a departure hour"""
        low, high = self.bands.for_bucket(classify(hour))
        return self.rng.uniform(low, high)

    def adjust(self, base_minutes: int, hour: int, minute: int = 0) -> int:
        """
        Traffic-adjust a base duration

        Args:
            base_minutes: Free-flow duration in minutes, positive
            hour: Departure hour, 0-23
            minute: Departure minute, 0-59

        Returns:
            Adjusted duration in whole minutes, never below base_minutes
        """
        if base_minutes < 1:
            raise ValueError(f"base_minutes must be positive, got {base_minutes}")
        if not 0 <= hour <= 23:
            raise ValueError(f"hour must be in 0-23, got {hour}")
        if not 0 <= minute <= 59:
            raise ValueError(f"minute must be in 0-59, got {minute}")

        return max(base_minutes, round_half_up(base_minutes * self.multiplier(hour)))
