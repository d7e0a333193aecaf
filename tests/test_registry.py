"""
Tests for the format registry and preset parsers
"""

import pytest

from eqlab.dsp import EQBand
from eqlab.export import (
    FORMAT_REGISTRY,
    ExportInput,
    PresetParseError,
    UnknownFormatError,
    convert_apo,
    convert_eqmac,
    convert_json,
    convert_poweramp,
    export_profile,
    format_ids,
    formats_by_platform,
    get_format,
    parse_apo,
    parse_json,
)


class TestRegistry:
    def test_ids_are_unique(self):
        ids = format_ids()
        assert len(ids) == len(set(ids))
        assert set(ids) == {"eqmac", "aunbandeq", "equalizer-apo", "peace-eq", "wavelet", "poweramp", "json"}

    def test_platform_order(self):
        groups = formats_by_platform()
        assert [platform for platform, _ in groups] == ["macOS", "Windows", "Android", "Cross-platform"]
        assert sum(len(entries) for _, entries in groups) == len(FORMAT_REGISTRY)
        assert [e.meta.id for e in dict(groups)["Windows"]] == ["equalizer-apo", "peace-eq"]

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError):
            get_format("rew")

    @pytest.mark.parametrize("entry", FORMAT_REGISTRY, ids=lambda e: e.meta.id)
    def test_file_name_follows_metadata(self, entry):
        result = entry.convert(ExportInput("My Profile", [EQBand(1000.0, 1.0, 1.0)]))
        assert result.file_name == f"My Profile - {entry.meta.name}{entry.meta.file_extension}"

    @pytest.mark.parametrize("entry", FORMAT_REGISTRY, ids=lambda e: e.meta.id)
    def test_empty_profile_does_not_raise(self, entry):
        result = entry.convert(ExportInput("Empty", [], -4.0))
        assert isinstance(result.content, str)

    @pytest.mark.parametrize("entry", FORMAT_REGISTRY, ids=lambda e: e.meta.id)
    @pytest.mark.parametrize(
        "bands,preamp",
        [
            ([EQBand(1000.0, 3.0, 1e30)], 0.0),
            ([EQBand(1000.0, 96.0, 1.0), EQBand(3.0, -96.0, 1e-9, "lowshelf")], 0.0),
            ([EQBand(1e9, 12.0, 1e-300, "highshelf")], 1e25),
            ([EQBand(250.0, 1e-12, 0.00001)], -1e-9),
        ],
        ids=["huge-q", "gain-limits", "huge-frequency-and-preamp", "tiny-values"],
    )
    def test_extreme_values_do_not_raise(self, entry, bands, preamp):
        result = entry.convert(ExportInput("Extreme", bands, preamp))
        assert isinstance(result.content, str)
        assert result.content

    def test_export_profile_dispatch(self):
        export_input = ExportInput("P", [EQBand(440.0, 2.0, 3.0)], -1.0)
        assert export_profile("poweramp", export_input) == convert_poweramp(export_input)


class TestParsers:
    def test_apo_round_trip_is_lossy(self):
        bands = [EQBand(2000.4, -3.04, 1.0), EQBand(199.6, 4.06, 2.123456, "lowshelf")]
        parsed = parse_apo(convert_apo(ExportInput("P", bands, 3.0)).content)
        assert parsed.preamp_db == 3.0
        assert [(b.frequency, b.gain_db, b.type) for b in parsed.bands] == [
            (200.0, 4.1, "lowshelf"),
            (2000.0, -3.0, "peaking"),
        ]
        assert parsed.bands[0].q == pytest.approx(2.1235)

    def test_apo_skips_comments_and_off_filters(self):
        text = "# AutoEQ\nPreamp: -6.2 dB\n\nFilter 1: OFF PK Fc 100 Hz Gain 1.0 dB Q 1.0\nFilter 2: ON HSC Fc 9000 Hz Gain -2 dB Q 0.71\n"
        parsed = parse_apo(text)
        assert parsed.preamp_db == pytest.approx(-6.2)
        assert len(parsed.bands) == 1
        assert parsed.bands[0].type == "highshelf"

    def test_apo_rejects_garbage(self):
        with pytest.raises(PresetParseError):
            parse_apo("GraphicEQ: 20 0.0; 40 1.0")

    def test_apo_rejects_zero_q(self):
        with pytest.raises(PresetParseError):
            parse_apo("Filter 1: ON PK Fc 100 Hz Gain 1.0 dB Q 0")

    def test_json_round_trip_is_lossless(self):
        bands = [EQBand(31.25, 0.1 + 0.2, 0.7071067811865476, "lowshelf"), EQBand(15000.5, -9.75, 4.0, "highshelf")]
        parsed = parse_json(convert_json(ExportInput("Lossless", bands, -2.5)).content)
        assert parsed.name == "Lossless"
        assert parsed.preamp_db == -2.5
        assert [(b.frequency, b.gain_db, b.q, b.type) for b in parsed.bands] == [
            (b.frequency, b.gain_db, b.q, b.type) for b in bands
        ]

    def test_json_reads_eqmac(self):
        parsed = parse_json(convert_eqmac(ExportInput("Mac", [EQBand(60.0, 3.0, 0.9)], -3.5)).content)
        assert parsed.preamp_db == -3.5
        assert parsed.bands[0].frequency == 60

    @pytest.mark.parametrize("text", ["not json", "[]", '{"bands": [{"frequency": 100}]}', '{"global": 5}'])
    def test_json_rejects_malformed(self, text):
        with pytest.raises(PresetParseError):
            parse_json(text)
