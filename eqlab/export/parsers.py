"""Read presets written by the converters back into bands."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import List

from eqlab.dsp.filters import HIGH_SHELF, LOW_SHELF, PEAKING, EQBand, InvalidBandError


class PresetParseError(ValueError):
    pass


@dataclass
class ParsedPreset:
    preamp_db: float = 0.0
    bands: List[EQBand] = field(default_factory=list)
    name: str = ""


# Expected format per line: Filter N: ON|OFF {PK|LSC|HSC} Fc X Hz Gain Y dB Q Z
_FILTER_RE = re.compile(
    r"^Filter\s*\d*\s*:\s*(ON|OFF)\s+(PK|PEQ|LSC|LS|HSC|HS)\s+"
    r"Fc\s+([-+]?[\d.]+)\s*Hz\s+Gain\s+([-+]?[\d.]+)\s*dB\s+Q\s+([\d.]+)\s*$",
    re.IGNORECASE,
)
_PREAMP_RE = re.compile(r"^Preamp\s*:\s*([-+]?[\d.]+)\s*dB\s*$", re.IGNORECASE)

_APO_TYPES = {
    "PK": PEAKING,
    "PEQ": PEAKING,
    "LSC": LOW_SHELF,
    "LS": LOW_SHELF,
    "HSC": HIGH_SHELF,
    "HS": HIGH_SHELF,
}


def parse_apo(text: str) -> ParsedPreset:
    """Parse Equalizer APO / Peace / PowerAmp parametric text.

    Comments (``#``), blank lines and ``OFF`` filters are skipped; repeated
    ``Preamp:`` lines add up the way Equalizer APO applies them.
    """
    preset = ParsedPreset()
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        preamp = _PREAMP_RE.match(line)
        if preamp:
            preset.preamp_db += float(preamp.group(1))
            continue
        match = _FILTER_RE.match(line)
        if not match:
            raise PresetParseError(f"Line {lineno}: unrecognised preset line {raw.strip()!r}")
        state, code, freq, gain, q = match.groups()
        if state.upper() == "OFF":
            continue
        try:
            preset.bands.append(EQBand(float(freq), float(gain), float(q), _APO_TYPES[code.upper()]))
        except (ValueError, InvalidBandError) as exc:
            raise PresetParseError(f"Line {lineno}: {exc}") from exc
    return preset


def parse_json(text: str) -> ParsedPreset:
    """Parse the raw JSON export or an eqMac preset."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PresetParseError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise PresetParseError("Preset JSON must be an object")

    try:
        if "preamp" in data:
            preamp = data["preamp"]
        else:
            preamp = (data.get("global") or {}).get("gain", 0.0)
        bands = [EQBand.from_dict(item) for item in data.get("bands") or []]
        return ParsedPreset(preamp_db=float(preamp), bands=bands, name=str(data.get("name", "")))
    except (TypeError, ValueError, AttributeError) as exc:
        raise PresetParseError(f"Invalid preset data: {exc}") from exc
