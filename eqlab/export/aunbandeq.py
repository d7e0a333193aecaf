"""Presets for Apple's AUNBandEQ audio unit."""
from __future__ import annotations

import logging

from eqlab.constants import AUNBANDEQ_MAX_BANDS
from eqlab.dsp.filters import HIGH_SHELF, LOW_SHELF, PEAKING, q_to_bandwidth

from .formatting import export_file_name, round_half_up, to_fixed
from .types import TEXT_MIME, ExportInput, ExportResult, FormatMeta

logger = logging.getLogger(__name__)

AUNBANDEQ_FILTER_NAMES = {
    PEAKING: "Parametric",
    LOW_SHELF: "Low Shelf",
    HIGH_SHELF: "High Shelf",
}

AUNBANDEQ_META = FormatMeta(
    id="aunbandeq",
    name="AUNBandEQ",
    platform="macOS",
    file_extension=".txt",
    description="Band settings for Apple's AUNBandEQ audio unit",
    instructions=(
        "Insert AUNBandEQ in your host (Logic, AU Lab, ...), set the number of bands shown in the "
        "header and enter each band's type, frequency, gain and bandwidth."
    ),
)


def convert_aunbandeq(export_input: ExportInput) -> ExportResult:
    """AUNBandEQ takes bandwidth in octaves and at most 16 bands.

    Bands past the limit are dropped after sorting by frequency and the
    result carries a warning naming how many were lost.
    """
    sorted_bands = export_input.sorted_bands()
    kept = sorted_bands[:AUNBANDEQ_MAX_BANDS]
    warnings = ()
    dropped = len(sorted_bands) - len(kept)
    if dropped:
        message = (
            f"AUNBandEQ supports at most {AUNBANDEQ_MAX_BANDS} bands; "
            f"dropped {dropped} band(s) above {round_half_up(kept[-1].frequency)} Hz"
        )
        logger.warning("%s (profile %r)", message, export_input.profile_name)
        warnings = (message,)

    lines = [
        f"AUNBandEQ Preset: {export_input.profile_name}",
        f"Number of Bands: {len(kept)}",
        "",
    ]
    for i, band in enumerate(kept, start=1):
        lines.extend(
            [
                f"Band {i}:",
                f"  Type: {AUNBANDEQ_FILTER_NAMES.get(band.type, 'Parametric')}",
                f"  Frequency: {round_half_up(band.frequency)} Hz",
                f"  Gain: {to_fixed(band.gain_db, 1)} dB",
                f"  Bandwidth: {to_fixed(q_to_bandwidth(band.q), 4)} octaves",
                "",
            ]
        )

    return ExportResult(
        content="\n".join(lines).rstrip(),
        file_name=export_file_name(export_input.profile_name, AUNBANDEQ_META.name, AUNBANDEQ_META.file_extension),
        mime_type=TEXT_MIME,
        warnings=warnings,
    )
