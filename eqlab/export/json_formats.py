"""Lossless JSON presets: eqMac and the portable raw form."""
from __future__ import annotations

from typing import Any, Dict, List

from .formatting import dump_json, export_file_name
from .types import JSON_MIME, ExportInput, ExportResult, FormatMeta

EQMAC_META = FormatMeta(
    id="eqmac",
    name="eqMac",
    platform="macOS",
    file_extension=".json",
    description="eqMac Advanced Equalizer preset",
    instructions="Open eqMac, go to the Advanced Equalizer, open the preset menu and choose Import.",
)

JSON_META = FormatMeta(
    id="json",
    name="Raw JSON",
    platform="Cross-platform",
    file_extension=".json",
    description="Portable JSON export of the EQ profile",
    instructions="Use this file with any app or script that accepts JSON EQ data.",
)


def _band_dicts(export_input: ExportInput) -> List[Dict[str, Any]]:
    return [
        {"frequency": band.frequency, "gain": band.gain_db, "q": band.q, "type": band.type}
        for band in export_input.sorted_bands()
    ]


def convert_eqmac(export_input: ExportInput) -> ExportResult:
    data = {
        "name": export_input.profile_name,
        "global": {"gain": export_input.preamp_db},
        "bands": _band_dicts(export_input),
    }
    return ExportResult(
        content=dump_json(data),
        file_name=export_file_name(export_input.profile_name, EQMAC_META.name, EQMAC_META.file_extension),
        mime_type=JSON_MIME,
    )


def convert_json(export_input: ExportInput) -> ExportResult:
    data = {
        "name": export_input.profile_name,
        "preamp": export_input.preamp_db,
        "bands": _band_dicts(export_input),
    }
    return ExportResult(
        content=dump_json(data),
        file_name=export_file_name(export_input.profile_name, JSON_META.name, JSON_META.file_extension),
        mime_type=JSON_MIME,
    )
