"""Helpers for visualising the EQ curve."""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np
from matplotlib.figure import Figure

from eqlab.constants import MAX_FREQUENCY, MIN_FREQUENCY, REFERENCE_SAMPLE_RATE
from eqlab.dsp import EQBand, WaveletState, combined_magnitude_at, log_frequencies
from eqlab.profile import EQProfile


def frequency_response(
    bands: Iterable[EQBand], sample_rate: float = REFERENCE_SAMPLE_RATE, points: int = 512
) -> Tuple[np.ndarray, np.ndarray]:
    freqs = log_frequencies(MIN_FREQUENCY, min(MAX_FREQUENCY, sample_rate / 2.0), points)
    return freqs, combined_magnitude_at(list(bands), freqs, sample_rate)


def plot_profile(
    profile: EQProfile,
    sample_rate: float = REFERENCE_SAMPLE_RATE,
    points: int = 512,
    wavelets: Optional[WaveletState] = None,
    wavelet_scale_db: float = 12.0,
) -> Figure:
    """Draw the band response (with preamp) and, if given, the wavelet preview curve.

    Wavelet values are unitless, so they are drawn scaled by ``wavelet_scale_db``.
    """
    fig = Figure(figsize=(5, 3), tight_layout=True)
    ax = fig.add_subplot(111)
    ax.set_xscale("log")
    ax.set_xlim(MIN_FREQUENCY, MAX_FREQUENCY)
    ax.set_ylim(-24, 24)
    ax.set_xlabel("Frequency (Hz)")
    ax.set_ylabel("Gain (dB)")
    ax.set_title(profile.name)
    ax.grid(True, which="both", ls=":", lw=0.5)

    freqs, magnitude = frequency_response(profile.bands, sample_rate, points)
    ax.plot(freqs, np.clip(magnitude + profile.preamp_db, -24, 24), color="orange", label="EQ")

    if wavelets is not None:
        curve = np.array(wavelets.generate_curve_points(points))
        ax.plot(curve[:, 0], curve[:, 1] * wavelet_scale_db, color="tab:blue", ls="--", label="Wavelets (preview)")
        ax.legend(loc="upper right", fontsize="small")
    return fig
