"""Automatic headroom compensation for EQ boosts."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from eqlab.constants import AUTO_GAIN_POINTS, MAX_FREQUENCY, MIN_FREQUENCY, PROGRAMME_TILT_DB_PER_OCTAVE

from .engine import FilterResponseProvider, linear_to_db
from .filters import EQBand
from .response import log_frequencies

logger = logging.getLogger(__name__)

# Weighted peaks this close to 0 dB are rounding noise, not a boost.
_DB_EPSILON = 1e-9


def programme_weighting(frequencies: Sequence[float]) -> np.ndarray:
    """Spectral weight in dB: 0 at 20 Hz, about -45 dB at 20 kHz."""
    freqs = np.asarray(frequencies, dtype=np.float64)
    return PROGRAMME_TILT_DB_PER_OCTAVE * np.log2(freqs / MIN_FREQUENCY)


def calculate_auto_gain_db(
    bands: Sequence[EQBand],
    provider: FilterResponseProvider,
    points: int = AUTO_GAIN_POINTS,
) -> float:
    """Calculate the auto-gain compensation (in dB) for a set of EQ bands.

    Samples the combined EQ response at ``points`` log-spaced frequencies
    (20 Hz - 20 kHz), weights each sample by the assumed programme tilt and
    returns the negative of the maximum weighted gain, clamped to <= 0. The
    result is just enough gain reduction to keep the worst boost from clipping.
    """
    if not bands:
        return 0.0

    frequencies = log_frequencies(MIN_FREQUENCY, MAX_FREQUENCY, points)
    total_gain_db = np.zeros(points, dtype=np.float64)
    for band in bands:
        stage = provider.create_filter_stage(band.type, band.frequency, band.gain_db, band.q)
        magnitudes, _phases = stage.get_frequency_response(frequencies)
        total_gain_db += linear_to_db(magnitudes)

    weighted = total_gain_db + programme_weighting(frequencies)
    max_weighted_gain = float(np.max(weighted))
    logger.debug("Auto-gain: %d bands, max weighted gain %.3f dB", len(bands), max_weighted_gain)

    if max_weighted_gain <= _DB_EPSILON:
        return 0.0
    return -max_weighted_gain
