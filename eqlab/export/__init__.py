"""Preset export formats and the registry that lists them."""
from .apo import convert_apo, convert_peace_eq, convert_poweramp
from .aunbandeq import convert_aunbandeq
from .formatting import export_file_name, safe_file_stem, to_fixed
from .graphic_eq import GRAPHIC_EQ_FREQS, convert_wavelet
from .json_formats import convert_eqmac, convert_json
from .parsers import ParsedPreset, PresetParseError, parse_apo, parse_json
from .registry import (
    FORMAT_REGISTRY,
    PLATFORM_ORDER,
    UnknownFormatError,
    export_profile,
    format_ids,
    formats_by_platform,
    get_format,
)
from .types import ExportConverter, ExportInput, ExportResult, FormatEntry, FormatMeta

__all__ = [
    "ExportConverter",
    "ExportInput",
    "ExportResult",
    "FORMAT_REGISTRY",
    "FormatEntry",
    "FormatMeta",
    "GRAPHIC_EQ_FREQS",
    "PLATFORM_ORDER",
    "ParsedPreset",
    "PresetParseError",
    "UnknownFormatError",
    "convert_apo",
    "convert_aunbandeq",
    "convert_eqmac",
    "convert_json",
    "convert_peace_eq",
    "convert_poweramp",
    "convert_wavelet",
    "export_file_name",
    "export_profile",
    "format_ids",
    "formats_by_platform",
    "get_format",
    "parse_apo",
    "parse_json",
    "safe_file_stem",
    "to_fixed",
]
