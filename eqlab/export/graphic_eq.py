"""GraphicEQ curves for the Wavelet app's AutoEQ import on Android."""
from __future__ import annotations

from eqlab.constants import GRAPHIC_EQ_POINTS, MAX_FREQUENCY, MIN_FREQUENCY
from eqlab.dsp.response import combined_magnitude_at, log_frequencies

from .formatting import export_file_name, round_half_up, to_fixed
from .types import TEXT_MIME, ExportInput, ExportResult, FormatMeta

# Standard GraphicEQ density
GRAPHIC_EQ_FREQS = log_frequencies(MIN_FREQUENCY, MAX_FREQUENCY, GRAPHIC_EQ_POINTS)

WAVELET_META = FormatMeta(
    id="wavelet",
    name="Wavelet",
    platform="Android",
    file_extension=".txt",
    description="GraphicEQ format for Wavelet AutoEQ import",
    instructions=(
        "Copy this file to your device, open Wavelet, tap AutoEQ and choose Import. "
        "The file name becomes the preset name."
    ),
)


def convert_wavelet(export_input: ExportInput) -> ExportResult:
    """Sample the band cascade on the fixed grid; the format has no preamp, so it is added to every point."""
    gains = combined_magnitude_at(export_input.bands, GRAPHIC_EQ_FREQS, export_input.sample_rate)
    pairs = (
        f"{round_half_up(freq)} {to_fixed(float(gain) + export_input.preamp_db, 1)}"
        for freq, gain in zip(GRAPHIC_EQ_FREQS, gains)
    )
    return ExportResult(
        content="GraphicEQ: " + "; ".join(pairs),
        file_name=export_file_name(export_input.profile_name, WAVELET_META.name, WAVELET_META.file_extension),
        mime_type=TEXT_MIME,
    )
