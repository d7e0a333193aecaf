"""EQ profile value object as stored by the surrounding application."""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List

from eqlab.constants import REFERENCE_SAMPLE_RATE
from eqlab.dsp.autogain import calculate_auto_gain_db
from eqlab.dsp.engine import FilterResponseProvider
from eqlab.dsp.filters import EQBand
from eqlab.dsp.wavelets import Wavelet, WaveletState
from eqlab.export.types import ExportInput


@dataclass
class EQProfile:
    name: str
    bands: List[EQBand] = field(default_factory=list)
    preamp_db: float = 0.0  # volume offset applied when the profile is enabled
    wavelets: List[Dict[str, float]] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def export_input(self, sample_rate: float = REFERENCE_SAMPLE_RATE) -> ExportInput:
        return ExportInput(self.name, tuple(self.bands), self.preamp_db, sample_rate)

    def auto_gain_db(self, provider: FilterResponseProvider) -> float:
        return calculate_auto_gain_db(self.bands, provider)

    def wavelet_state(self) -> WaveletState:
        """Preview curve for this profile; it does not change the bands."""
        state = WaveletState()
        state.import_wavelets(self.wavelets)
        return state

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bands": [band.to_dict() for band in self.bands],
            "volume": self.preamp_db,
            "wavelets": [dict(w) for w in self.wavelets],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EQProfile":
        if "name" not in data:
            raise ValueError("Profile is missing its name")
        preamp = data.get("volume", data.get("preamp", 0.0))
        try:
            preamp_db = float(preamp or 0.0)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Profile volume must be a number, got {preamp!r}") from exc
        if not math.isfinite(preamp_db):
            raise ValueError(f"Profile volume must be finite, got {preamp!r}")
        profile = cls(
            name=str(data["name"]),
            bands=[EQBand.from_dict(item) for item in _list_field(data, "bands")],
            preamp_db=preamp_db,
            # normalized through Wavelet so bad entries fail at load time
            wavelets=[Wavelet.from_dict(item).to_dict() for item in _list_field(data, "wavelets")],
        )
        if data.get("id"):
            profile.id = str(data["id"])
        return profile


def _list_field(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"Profile field {key!r} must be a list")
    return value
