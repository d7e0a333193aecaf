"""Equalizer APO style parametric presets (also read by Peace and PowerAmp)."""
from __future__ import annotations

from eqlab.dsp.filters import HIGH_SHELF, LOW_SHELF, PEAKING

from .formatting import export_file_name, round_half_up, to_fixed
from .types import TEXT_MIME, ExportInput, ExportResult, FormatMeta

APO_FILTER_CODES = {
    PEAKING: "PK",
    LOW_SHELF: "LSC",
    HIGH_SHELF: "HSC",
}

APO_META = FormatMeta(
    id="equalizer-apo",
    name="Equalizer APO",
    platform="Windows",
    file_extension=".txt",
    description="Parametric EQ config for Equalizer APO",
    instructions=(
        "Place this file in your Equalizer APO config folder (usually "
        "C:\\Program Files\\EqualizerAPO\\config), or paste the contents into the Configuration Editor."
    ),
)

PEACE_META = FormatMeta(
    id="peace-eq",
    name="Peace EQ",
    platform="Windows",
    file_extension=".txt",
    description="Peace GUI preset (Equalizer APO frontend)",
    instructions="Open Peace, click Import and select this file. Peace uses the same format as Equalizer APO.",
)

POWERAMP_META = FormatMeta(
    id="poweramp",
    name="PowerAmp",
    platform="Android",
    file_extension=".txt",
    description="AutoEQ parametric preset for PowerAmp (v911+)",
    instructions="Copy this file to your device, open the PowerAmp equalizer, long-press any preset and choose Import.",
)


def format_apo(export_input: ExportInput) -> str:
    """Render the shared ``Preamp:`` / ``Filter i:`` grammar."""
    lines = []
    if export_input.preamp_db != 0:
        lines.append(f"Preamp: {to_fixed(export_input.preamp_db, 1)} dB")

    for i, band in enumerate(export_input.sorted_bands(), start=1):
        code = APO_FILTER_CODES.get(band.type, "PK")
        lines.append(
            f"Filter {i}: ON {code} Fc {round_half_up(band.frequency)} Hz "
            f"Gain {to_fixed(band.gain_db, 1)} dB Q {to_fixed(band.q, 4)}"
        )
    return "\n".join(lines)


def _convert(export_input: ExportInput, meta: FormatMeta) -> ExportResult:
    return ExportResult(
        content=format_apo(export_input),
        file_name=export_file_name(export_input.profile_name, meta.name, meta.file_extension),
        mime_type=TEXT_MIME,
    )


def convert_apo(export_input: ExportInput) -> ExportResult:
    return _convert(export_input, APO_META)


def convert_peace_eq(export_input: ExportInput) -> ExportResult:
    return _convert(export_input, PEACE_META)


def convert_poweramp(export_input: ExportInput) -> ExportResult:
    """PowerAmp imports the AutoEQ parametric format, which is Equalizer APO's filter syntax."""
    return _convert(export_input, POWERAMP_META)
