"""Sample-rate-aware filter-response provider used by the gain compensator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

import numpy as np

from eqlab.constants import REFERENCE_SAMPLE_RATE

from .filters import BiquadCoefficients, design_filter
from .response import magnitude_db, phase_response


class FilterStage(Protocol):
    def get_frequency_response(self, frequencies: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        ...


class FilterResponseProvider(Protocol):
    """Anything that can build a filter stage and report its response."""

    def create_filter_stage(self, filter_type: str, frequency: float, gain: float, q: float) -> FilterStage:
        ...


def linear_to_db(value, floor: float = -120.0):
    """Convert linear gain to dB, never going below ``floor``."""
    value = np.asarray(value, dtype=np.float64)
    with np.errstate(divide="ignore"):
        db = 20 * np.log10(np.where(value > 0, value, 0.0))
    db = np.maximum(floor, db)
    return float(db) if db.ndim == 0 else db


def db_to_linear(value_db):
    """Convert dB to linear gain."""
    return 10 ** (np.asarray(value_db, dtype=np.float64) / 20.0)


@dataclass(frozen=True)
class BiquadStage:
    """One designed section bound to the sample rate it was designed for."""

    coefficients: BiquadCoefficients
    sample_rate: float

    def get_frequency_response(self, frequencies: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        """Return (linear magnitudes, phases in radians) at ``frequencies``."""
        magnitudes = db_to_linear(magnitude_db(self.coefficients, frequencies, self.sample_rate))
        phases = phase_response(self.coefficients, frequencies, self.sample_rate)
        return magnitudes, phases


@dataclass
class EQEngine:
    """Filter-response provider running at the playback device's sample rate."""

    sample_rate: float = REFERENCE_SAMPLE_RATE

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate!r}")

    def create_filter_stage(self, filter_type: str, frequency: float, gain: float, q: float) -> BiquadStage:
        coeffs = design_filter(filter_type, frequency, gain, q, self.sample_rate)
        return BiquadStage(coeffs, self.sample_rate)
