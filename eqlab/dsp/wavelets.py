"""Generative gain curves built from windowed sinusoids.

A wavelet here is a curve-shaping primitive, not a wavelet transform. Each
one is a sinusoid laid across the log-frequency axis, optionally windowed
around a centre position. The summed curve is used for previews only; it is
never sampled into bands or exported.
"""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from eqlab.constants import MAX_FREQUENCY, MIN_FREQUENCY

from .response import log_frequencies

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi
EDGE_WIDTH = 0.05
_DECADES = math.log10(MAX_FREQUENCY / MIN_FREQUENCY)

# Persisted keys differ from attribute names only for the centre position.
_FIELD_KEYS = {
    "frequency": "frequency",
    "amplitude": "amplitude",
    "phase": "phase",
    "center_freq": "centerFreq",
    "falloff": "falloff",
}


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _wrap_phase(value: float) -> float:
    phase = math.fmod(value, TWO_PI)
    if phase < 0:
        phase += TWO_PI
    # fmod of a tiny negative number can land exactly on 2*pi after the shift
    return 0.0 if phase >= TWO_PI else phase


@dataclass
class Wavelet:
    frequency: float = 4.0  # cycles across the spectrum
    amplitude: float = 0.0
    phase: float = 0.0  # radians
    center_freq: float = 0.5  # normalized log position
    falloff: float = 1.0  # 1 means no window

    def clamped(self) -> "Wavelet":
        return Wavelet(
            frequency=max(0.1, self.frequency),
            amplitude=_clamp(self.amplitude, -1.0, 1.0),
            phase=_wrap_phase(self.phase),
            center_freq=_clamp(self.center_freq, 0.0, 1.0),
            falloff=_clamp(self.falloff, 0.01, 1.0),
        )

    def to_dict(self) -> Dict[str, float]:
        return {_FIELD_KEYS[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Wavelet":
        if not isinstance(data, dict):
            raise ValueError(f"Wavelet must be an object, got {data!r}")
        defaults = cls()
        values = {}
        for name, key in _FIELD_KEYS.items():
            raw = data.get(key, data.get(name, getattr(defaults, name)))
            try:
                values[name] = float(raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Wavelet field {key!r} must be a number, got {raw!r}") from exc
            if not math.isfinite(values[name]):
                raise ValueError(f"Wavelet field {key!r} must be finite, got {raw!r}")
        return cls(**values).clamped()


def edge_envelope(t: np.ndarray) -> np.ndarray:
    """Raised-cosine taper over the outer 5% at each end of the [0, 1] axis."""
    t = np.asarray(t, dtype=np.float64)
    env = np.ones_like(t)
    low = t < EDGE_WIDTH
    high = t > 1 - EDGE_WIDTH
    env[low] = 0.5 * (1 + np.cos(np.pi * (1 - t[low] / EDGE_WIDTH)))
    env[high] = 0.5 * (1 + np.cos(np.pi * (t[high] - (1 - EDGE_WIDTH)) / EDGE_WIDTH))
    return env


class WaveletState:
    """Owns an ordered, mutable list of wavelets and evaluates their sum."""

    def __init__(self, initial: Optional[Iterable[Wavelet]] = None) -> None:
        if initial is None:
            self._wavelets: List[Wavelet] = [Wavelet()]
        else:
            self._wavelets = [w.clamped() for w in initial]

    def __len__(self) -> int:
        return len(self._wavelets)

    @property
    def wavelets(self) -> List[Wavelet]:
        return [Wavelet(**asdict(w)) for w in self._wavelets]

    # Mutation -----------------------------------------------------------
    def add_wavelet(self) -> None:
        self._wavelets.append(Wavelet())

    def remove_wavelet(self, index: int) -> None:
        self._check_index(index)
        del self._wavelets[index]

    def update_wavelet(self, index: int, field: str, value: float) -> None:
        """Set one field of one wavelet, clamping it into its legal range."""
        self._check_index(index)
        wavelet = self._wavelets[index]
        if field == "frequency":
            wavelet.frequency = max(0.1, value)
        elif field == "amplitude":
            wavelet.amplitude = _clamp(value, -1.0, 1.0)
        elif field == "phase":
            wavelet.phase = _wrap_phase(value)
        elif field in ("center_freq", "centerFreq"):
            wavelet.center_freq = _clamp(value, 0.0, 1.0)
        elif field == "falloff":
            wavelet.falloff = _clamp(value, 0.01, 1.0)
        else:
            raise ValueError(f"Unknown wavelet field {field!r}")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._wavelets):
            raise IndexError(f"Wavelet index {index} out of range (have {len(self._wavelets)})")

    # Evaluation ---------------------------------------------------------
    @staticmethod
    def hz_to_normalized(hz):
        return np.log10(np.asarray(hz, dtype=np.float64) / MIN_FREQUENCY) / _DECADES

    @staticmethod
    def normalized_to_hz(normalized):
        return MIN_FREQUENCY * np.power(MAX_FREQUENCY / MIN_FREQUENCY, np.asarray(normalized, dtype=np.float64))

    def values_at(self, frequencies: Sequence[float]) -> np.ndarray:
        freqs = np.clip(np.asarray(frequencies, dtype=np.float64), MIN_FREQUENCY, MAX_FREQUENCY)
        t = self.hz_to_normalized(freqs)
        envelope = edge_envelope(t)
        total = np.zeros_like(t)

        for wavelet in self._wavelets:
            if wavelet.amplitude == 0:
                continue
            if wavelet.falloff >= 1:
                window = np.ones_like(t)
            else:
                distance = np.abs(t - wavelet.center_freq) / wavelet.falloff
                window = np.where(distance < 1.0, 0.5 * (1 + np.cos(np.pi * np.minimum(distance, 1.0))), 0.0)
            oscillation = np.sin(t * wavelet.frequency * np.pi + wavelet.phase)
            total += wavelet.amplitude * oscillation * window * envelope
        return total

    def value_at_frequency(self, frequency: float) -> float:
        return float(self.values_at([frequency])[0])

    def generate_curve_points(self, count: int = 100) -> List[Tuple[float, float]]:
        """Sample the curve at ``count`` log-spaced frequencies for plotting."""
        freqs = log_frequencies(MIN_FREQUENCY, MAX_FREQUENCY, count)
        values = self.values_at(freqs)
        return [(float(f), float(v)) for f, v in zip(freqs, values)]

    # Persistence --------------------------------------------------------
    def export_wavelets(self) -> List[Dict[str, float]]:
        return [w.to_dict() for w in self._wavelets]

    def import_wavelets(self, params: Optional[Iterable[Dict[str, Any]]]) -> None:
        """Replace the wavelets; ``None`` or an empty list keeps the current ones."""
        if not params:
            return
        self._wavelets = [Wavelet.from_dict(p) for p in params]
        logger.debug("Imported %d wavelets", len(self._wavelets))
