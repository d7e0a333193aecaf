"""Value objects passed to and returned from preset converters."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from eqlab.constants import REFERENCE_SAMPLE_RATE
from eqlab.dsp.filters import EQBand

TEXT_MIME = "text/plain"
JSON_MIME = "application/json"


@dataclass(frozen=True)
class ExportInput:
    profile_name: str
    bands: Sequence[EQBand] = ()
    preamp_db: float = 0.0
    sample_rate: float = REFERENCE_SAMPLE_RATE

    def __post_init__(self) -> None:
        if not math.isfinite(self.preamp_db):
            raise ValueError(f"Preamp must be finite, got {self.preamp_db!r}")
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate!r}")

    def sorted_bands(self) -> List[EQBand]:
        """Bands in ascending frequency order; input order breaks ties."""
        return sorted(self.bands, key=lambda band: band.frequency)


@dataclass(frozen=True)
class ExportResult:
    content: str
    file_name: str
    mime_type: str
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FormatMeta:
    id: str
    name: str
    platform: str
    file_extension: str
    description: str
    instructions: str


ExportConverter = Callable[[ExportInput], ExportResult]


@dataclass(frozen=True)
class FormatEntry:
    meta: FormatMeta
    convert: ExportConverter = field(compare=False)
