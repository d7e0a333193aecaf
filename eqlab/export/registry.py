"""Table of every supported preset format.

Adding a format means writing a converter and appending one entry here.
"""
from __future__ import annotations

import logging
from typing import List, Tuple

from .apo import APO_META, PEACE_META, POWERAMP_META, convert_apo, convert_peace_eq, convert_poweramp
from .aunbandeq import AUNBANDEQ_META, convert_aunbandeq
from .graphic_eq import WAVELET_META, convert_wavelet
from .json_formats import EQMAC_META, JSON_META, convert_eqmac, convert_json
from .types import ExportInput, ExportResult, FormatEntry

logger = logging.getLogger(__name__)

PLATFORM_ORDER = ("macOS", "Windows", "Android", "Cross-platform")

FORMAT_REGISTRY: List[FormatEntry] = [
    FormatEntry(EQMAC_META, convert_eqmac),
    FormatEntry(AUNBANDEQ_META, convert_aunbandeq),
    FormatEntry(APO_META, convert_apo),
    FormatEntry(PEACE_META, convert_peace_eq),
    FormatEntry(WAVELET_META, convert_wavelet),
    FormatEntry(POWERAMP_META, convert_poweramp),
    FormatEntry(JSON_META, convert_json),
]


class UnknownFormatError(LookupError):
    pass


def format_ids() -> List[str]:
    return [entry.meta.id for entry in FORMAT_REGISTRY]


def get_format(format_id: str) -> FormatEntry:
    for entry in FORMAT_REGISTRY:
        if entry.meta.id == format_id:
            return entry
    raise UnknownFormatError(f"Unknown export format {format_id!r}; expected one of {format_ids()}")


def formats_by_platform() -> List[Tuple[str, List[FormatEntry]]]:
    """Get formats grouped by platform, in display order."""
    groups = {}
    for entry in FORMAT_REGISTRY:
        groups.setdefault(entry.meta.platform, []).append(entry)
    return [(platform, groups[platform]) for platform in PLATFORM_ORDER if platform in groups]


def export_profile(format_id: str, export_input: ExportInput) -> ExportResult:
    entry = get_format(format_id)
    result = entry.convert(export_input)
    logger.debug(
        "Exported %r as %s (%d bands, %d chars)",
        export_input.profile_name,
        format_id,
        len(export_input.bands),
        len(result.content),
    )
    return result
