"""DSP package exports for the EQ model."""
from .autogain import calculate_auto_gain_db
from .engine import BiquadStage, EQEngine, FilterResponseProvider, FilterStage, db_to_linear, linear_to_db
from .filters import (
    FILTER_TYPES,
    HIGH_SHELF,
    LOW_SHELF,
    PEAKING,
    BiquadCoefficients,
    EQBand,
    InvalidBandError,
    bandwidth_to_q,
    design_biquad,
    design_filter,
    q_to_bandwidth,
)
from .response import combined_magnitude_at, log_frequencies, magnitude_db, phase_response
from .wavelets import Wavelet, WaveletState

__all__ = [
    "BiquadCoefficients",
    "BiquadStage",
    "EQBand",
    "EQEngine",
    "FILTER_TYPES",
    "FilterResponseProvider",
    "FilterStage",
    "HIGH_SHELF",
    "InvalidBandError",
    "LOW_SHELF",
    "PEAKING",
    "Wavelet",
    "WaveletState",
    "bandwidth_to_q",
    "calculate_auto_gain_db",
    "combined_magnitude_at",
    "db_to_linear",
    "design_biquad",
    "design_filter",
    "linear_to_db",
    "log_frequencies",
    "magnitude_db",
    "phase_response",
    "q_to_bandwidth",
]
