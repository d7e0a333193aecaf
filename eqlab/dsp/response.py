"""Frequency-response evaluation of biquad cascades."""
from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from eqlab.constants import REFERENCE_SAMPLE_RATE

from .filters import BiquadCoefficients, EQBand, design_biquad


def log_frequencies(min_freq: float, max_freq: float, count: int) -> np.ndarray:
    """Generate `count` logarithmically spaced frequencies from `min_freq` to `max_freq` Hz.

    The endpoints are exact, so callers can rely on ``out[0] == min_freq`` and
    ``out[-1] == max_freq``.
    """
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count!r}")
    if min_freq <= 0 or max_freq <= min_freq:
        raise ValueError(f"Expected 0 < min_freq < max_freq, got {min_freq!r}..{max_freq!r}")
    if count == 1:
        return np.array([float(min_freq)])
    freqs = np.logspace(np.log10(min_freq), np.log10(max_freq), count)
    freqs[0] = min_freq
    freqs[-1] = max_freq
    return freqs


def _transfer_terms(coeffs: BiquadCoefficients, frequencies: Sequence[float], sample_rate: float):
    w = 2 * np.pi * np.asarray(frequencies, dtype=np.float64) / sample_rate
    cos_w = np.cos(w)
    cos_2w = np.cos(2 * w)
    sin_w = np.sin(w)
    sin_2w = np.sin(2 * w)

    num_real = coeffs.b0 + coeffs.b1 * cos_w + coeffs.b2 * cos_2w
    num_imag = -(coeffs.b1 * sin_w + coeffs.b2 * sin_2w)
    den_real = coeffs.a0 + coeffs.a1 * cos_w + coeffs.a2 * cos_2w
    den_imag = -(coeffs.a1 * sin_w + coeffs.a2 * sin_2w)
    return num_real, num_imag, den_real, den_imag


def magnitude_db(
    coeffs: BiquadCoefficients, frequencies: Sequence[float], sample_rate: float = REFERENCE_SAMPLE_RATE
) -> np.ndarray:
    """Magnitude of H(e^jw) in dB; a zero denominator counts as a transparent 0 dB."""
    num_real, num_imag, den_real, den_imag = _transfer_terms(coeffs, frequencies, sample_rate)
    num_mag2 = num_real * num_real + num_imag * num_imag
    den_mag2 = den_real * den_real + den_imag * den_imag

    degenerate = den_mag2 == 0
    safe_den = np.where(degenerate, 1.0, den_mag2)
    with np.errstate(divide="ignore"):
        db = 10 * np.log10(num_mag2 / safe_den)
    return np.where(degenerate, 0.0, db)


def phase_response(
    coeffs: BiquadCoefficients, frequencies: Sequence[float], sample_rate: float = REFERENCE_SAMPLE_RATE
) -> np.ndarray:
    num_real, num_imag, den_real, den_imag = _transfer_terms(coeffs, frequencies, sample_rate)
    den = den_real + 1j * den_imag
    den = np.where(den == 0, 1.0, den)
    return np.angle((num_real + 1j * num_imag) / den)


def combined_magnitude_at(
    bands: Iterable[EQBand], frequencies: Sequence[float], sample_rate: float = REFERENCE_SAMPLE_RATE
) -> np.ndarray:
    """Compute the combined magnitude response of all bands at the given frequencies.

    Per-band dB values are summed, which is the cascade of the sections.
    """
    total = np.zeros(len(frequencies), dtype=np.float64)
    for band in bands:
        total += magnitude_db(design_biquad(band, sample_rate), frequencies, sample_rate)
    return total
