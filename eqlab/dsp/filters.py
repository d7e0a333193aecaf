"""DSP helpers for parametric EQ filters."""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np

from eqlab.constants import MAX_GAIN_DB, MIN_FREQUENCY, MIN_Q, NYQUIST_GUARD, REFERENCE_SAMPLE_RATE

PEAKING = "peaking"
LOW_SHELF = "lowshelf"
HIGH_SHELF = "highshelf"
FILTER_TYPES = (PEAKING, LOW_SHELF, HIGH_SHELF)


class InvalidBandError(ValueError):
    """Raised when a band carries values the filter formulas cannot use."""


def _new_band_id() -> str:
    return uuid.uuid4().hex


@dataclass
class EQBand:
    """Describes a single parametric filter band."""

    frequency: float  # Hz
    gain_db: float  # dB boost/cut
    q: float  # quality factor
    type: str = PEAKING
    id: str = field(default_factory=_new_band_id)

    def __post_init__(self) -> None:
        if not math.isfinite(self.frequency) or self.frequency <= 0:
            raise InvalidBandError(f"Band frequency must be a positive number, got {self.frequency!r}")
        if not math.isfinite(self.q) or self.q <= 0:
            raise InvalidBandError(f"Band Q must be a positive number, got {self.q!r}")
        if not math.isfinite(self.gain_db) or abs(self.gain_db) > MAX_GAIN_DB:
            raise InvalidBandError(f"Band gain must be within ±{MAX_GAIN_DB:g} dB, got {self.gain_db!r}")
        if self.type not in FILTER_TYPES:
            raise InvalidBandError(f"Unknown filter type {self.type!r}; expected one of {FILTER_TYPES}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "frequency": self.frequency,
            "gain": self.gain_db,
            "q": self.q,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EQBand":
        try:
            frequency = float(data["frequency"])
            gain = float(data["gain"])
            q = float(data["q"])
        except KeyError as exc:
            raise InvalidBandError(f"Band is missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise InvalidBandError(f"Band has a non-numeric field: {exc}") from exc
        band_type = data.get("type") or PEAKING
        band_id = data.get("id")
        if band_id is None:
            return cls(frequency, gain, q, band_type)
        return cls(frequency, gain, q, band_type, str(band_id))


@dataclass(frozen=True)
class BiquadCoefficients:
    """Unnormalized RBJ coefficients of one second-order section."""

    b0: float
    b1: float
    b2: float
    a0: float
    a1: float
    a2: float

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        return (
            np.array([self.b0, self.b1, self.b2], dtype=np.float64),
            np.array([self.a0, self.a1, self.a2], dtype=np.float64),
        )

    def normalized(self) -> "BiquadCoefficients":
        """Return the same section scaled so that a0 == 1."""
        a0 = self.a0
        return BiquadCoefficients(self.b0 / a0, self.b1 / a0, self.b2 / a0, 1.0, self.a1 / a0, self.a2 / a0)


def _prepare(frequency: float, q: float, sample_rate: float) -> Tuple[float, float]:
    freq = min(max(frequency, MIN_FREQUENCY), sample_rate / NYQUIST_GUARD)
    q = max(MIN_Q, q)
    omega = 2 * math.pi * freq / sample_rate
    alpha = math.sin(omega) / (2 * q)
    return omega, alpha


def design_peaking_eq(
    frequency: float, gain_db: float, q: float, sample_rate: float = REFERENCE_SAMPLE_RATE
) -> BiquadCoefficients:
    """Return RBJ coefficients for a peaking EQ."""
    a_gain = 10 ** (gain_db / 40.0)
    omega, alpha = _prepare(frequency, q, sample_rate)
    cos_w = math.cos(omega)

    return BiquadCoefficients(
        b0=1 + alpha * a_gain,
        b1=-2 * cos_w,
        b2=1 - alpha * a_gain,
        a0=1 + alpha / a_gain,
        a1=-2 * cos_w,
        a2=1 - alpha / a_gain,
    )


def design_low_shelf(
    frequency: float, gain_db: float, q: float, sample_rate: float = REFERENCE_SAMPLE_RATE
) -> BiquadCoefficients:
    """Return RBJ coefficients for a low shelf."""
    a_gain = 10 ** (gain_db / 40.0)
    omega, alpha = _prepare(frequency, q, sample_rate)
    cos_w = math.cos(omega)
    sqrt_a2_alpha = 2 * math.sqrt(a_gain) * alpha

    return BiquadCoefficients(
        b0=a_gain * ((a_gain + 1) - (a_gain - 1) * cos_w + sqrt_a2_alpha),
        b1=2 * a_gain * ((a_gain - 1) - (a_gain + 1) * cos_w),
        b2=a_gain * ((a_gain + 1) - (a_gain - 1) * cos_w - sqrt_a2_alpha),
        a0=(a_gain + 1) + (a_gain - 1) * cos_w + sqrt_a2_alpha,
        a1=-2 * ((a_gain - 1) + (a_gain + 1) * cos_w),
        a2=(a_gain + 1) + (a_gain - 1) * cos_w - sqrt_a2_alpha,
    )


def design_high_shelf(
    frequency: float, gain_db: float, q: float, sample_rate: float = REFERENCE_SAMPLE_RATE
) -> BiquadCoefficients:
    """Return RBJ coefficients for a high shelf."""
    a_gain = 10 ** (gain_db / 40.0)
    omega, alpha = _prepare(frequency, q, sample_rate)
    cos_w = math.cos(omega)
    sqrt_a2_alpha = 2 * math.sqrt(a_gain) * alpha

    return BiquadCoefficients(
        b0=a_gain * ((a_gain + 1) + (a_gain - 1) * cos_w + sqrt_a2_alpha),
        b1=-2 * a_gain * ((a_gain - 1) + (a_gain + 1) * cos_w),
        b2=a_gain * ((a_gain + 1) + (a_gain - 1) * cos_w - sqrt_a2_alpha),
        a0=(a_gain + 1) - (a_gain - 1) * cos_w + sqrt_a2_alpha,
        a1=2 * ((a_gain - 1) - (a_gain + 1) * cos_w),
        a2=(a_gain + 1) - (a_gain - 1) * cos_w - sqrt_a2_alpha,
    )


_DESIGNERS = {
    PEAKING: design_peaking_eq,
    LOW_SHELF: design_low_shelf,
    HIGH_SHELF: design_high_shelf,
}


def design_filter(
    filter_type: str, frequency: float, gain_db: float, q: float, sample_rate: float = REFERENCE_SAMPLE_RATE
) -> BiquadCoefficients:
    try:
        designer = _DESIGNERS[filter_type]
    except KeyError:
        raise InvalidBandError(f"Unknown filter type {filter_type!r}") from None
    return designer(frequency, gain_db, q, sample_rate)


def design_biquad(band: EQBand, sample_rate: float = REFERENCE_SAMPLE_RATE) -> BiquadCoefficients:
    """Create the biquad section for an EQBand definition."""
    return design_filter(band.type, band.frequency, band.gain_db, band.q, sample_rate)


def q_to_bandwidth(q: float) -> float:
    """Convert Q factor to bandwidth in octaves."""
    if q <= 0:
        raise ValueError(f"Q must be positive, got {q!r}")
    return (2 / math.log(2)) * math.asinh(1 / (2 * q))


def bandwidth_to_q(bandwidth: float) -> float:
    """Convert a bandwidth in octaves back to a Q factor."""
    if bandwidth <= 0:
        raise ValueError(f"Bandwidth must be positive, got {bandwidth!r}")
    return 1 / (2 * math.sinh(math.log(2) * bandwidth / 2))
