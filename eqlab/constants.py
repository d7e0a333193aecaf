"""Shared numeric constants for the EQ model and exporters."""

REFERENCE_SAMPLE_RATE = 48000.0

MIN_FREQUENCY = 20.0
MAX_FREQUENCY = 20000.0

# Nyquist guard used when designing filters (fs / 2.1 keeps w0 below pi)
NYQUIST_GUARD = 2.1
MIN_Q = 0.05
# Largest band boost or cut accepted; 10^(G/40) must stay representable
MAX_GAIN_DB = 96.0

GRAPHIC_EQ_POINTS = 128
AUTO_GAIN_POINTS = 128
# Assumed spectral tilt of programme material above 20 Hz
PROGRAMME_TILT_DB_PER_OCTAVE = -4.5

AUNBANDEQ_MAX_BANDS = 16
