"""
Tests for the profile object, preview plotting and the export command
"""

import json
import logging

import pytest

from eqlab.cli import main
from eqlab.dsp import EQBand, EQEngine
from eqlab.export import format_ids
from eqlab.plotting import frequency_response, plot_profile
from eqlab.profile import EQProfile

PROFILE = {
    "id": "p1",
    "name": "Bass/Boost",
    "volume": -2.0,
    "bands": [
        {"id": "a", "frequency": 60, "gain": 6.0, "q": 0.9, "type": "lowshelf"},
        {"id": "b", "frequency": 3000, "gain": -2.5, "q": 2.0},
    ],
    "wavelets": [{"frequency": 3, "amplitude": 0.4, "phase": 0, "centerFreq": 0.5, "falloff": 0.6}],
}


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(PROFILE), encoding="utf-8")
    return path


class TestEQProfile:
    def test_from_dict(self):
        profile = EQProfile.from_dict(PROFILE)
        assert profile.id == "p1"
        assert profile.preamp_db == -2.0
        assert [b.type for b in profile.bands] == ["lowshelf", "peaking"]
        assert len(profile.wavelet_state()) == 1

    def test_to_dict_round_trip(self):
        profile = EQProfile.from_dict(PROFILE)
        assert EQProfile.from_dict(profile.to_dict()) == profile

    def test_accepts_preamp_key(self):
        profile = EQProfile.from_dict({"name": "x", "preamp": 1.5})
        assert profile.preamp_db == 1.5
        assert profile.bands == []

    def test_requires_name(self):
        with pytest.raises(ValueError):
            EQProfile.from_dict({"bands": []})

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "x", "wavelets": [{"amplitude": None}]},
            {"name": "x", "wavelets": {"amplitude": 0.5}},
            {"name": "x", "bands": 5},
            {"name": "x", "volume": [1]},
            {"name": "x", "volume": float("nan")},
        ],
    )
    def test_rejects_malformed_fields(self, data):
        with pytest.raises(ValueError):
            EQProfile.from_dict(data)

    def test_wavelets_are_clamped_on_load(self):
        profile = EQProfile.from_dict({"name": "x", "wavelets": [{"amplitude": 3, "centerFreq": -1}]})
        assert profile.wavelets[0]["amplitude"] == 1.0
        assert profile.wavelets[0]["centerFreq"] == 0.0

    def test_export_input_and_auto_gain(self):
        profile = EQProfile("P", [EQBand(20.0, 8.0, 1.0)], -1.0)
        export_input = profile.export_input(44100.0)
        assert export_input.sample_rate == 44100.0
        assert export_input.preamp_db == -1.0
        assert profile.auto_gain_db(EQEngine(44100.0)) == pytest.approx(-8.0, abs=1e-6)


class TestPlotting:
    def test_frequency_response_range(self):
        freqs, magnitude = frequency_response([], 48000.0, points=64)
        assert freqs[0] == 20 and freqs[-1] == 20000
        assert not magnitude.any()

    def test_plot_profile_lines(self):
        profile = EQProfile.from_dict(PROFILE)
        fig = plot_profile(profile)
        assert len(fig.axes[0].lines) == 1
        fig = plot_profile(profile, wavelets=profile.wavelet_state())
        assert len(fig.axes[0].lines) == 2


class TestCLI:
    def test_exports_every_format(self, profile_file, tmp_path):
        out_dir = tmp_path / "out"
        assert main([str(profile_file), "--out-dir", str(out_dir)]) == 0
        written = sorted(p.name for p in out_dir.iterdir())
        assert len(written) == len(format_ids())
        assert all(name.startswith("Bass_Boost - ") for name in written)

    def test_single_format_with_auto_gain(self, profile_file, tmp_path):
        assert main([str(profile_file), "--format", "json", "--auto-gain", "--out-dir", str(tmp_path)]) == 0
        data = json.loads((tmp_path / "Bass_Boost - Raw JSON.json").read_text(encoding="utf-8"))
        assert data["preamp"] < -2.0
        assert data["name"] == "Bass/Boost"

    def test_preview(self, profile_file, tmp_path):
        preview = tmp_path / "curve.png"
        assert main([str(profile_file), "--format", "equalizer-apo", "--out-dir", str(tmp_path), "--preview", str(preview)]) == 0
        assert preview.stat().st_size > 0

    def test_list_formats(self, capsys):
        assert main(["--list-formats"]) == 0
        out = capsys.readouterr().out
        assert "Cross-platform" in out and "aunbandeq" in out

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "nope.json"), "--out-dir", str(tmp_path)]) == 2

    def test_no_profile_argument(self):
        assert main([]) == 2

    def test_malformed_wavelets_exit_with_usage_code(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"name": "Bad", "wavelets": [{"amplitude": None}]}), encoding="utf-8")
        preview = tmp_path / "curve.png"
        assert main([str(path), "--out-dir", str(tmp_path / "out"), "--preview", str(preview)]) == 2
        assert not preview.exists()

    def test_truncation_warning_logged_once(self, tmp_path, caplog):
        path = tmp_path / "many.json"
        bands = [{"frequency": 100 * (i + 1), "gain": 1.0, "q": 1.0} for i in range(17)]
        path.write_text(json.dumps({"name": "Many", "bands": bands}), encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert main([str(path), "--format", "aunbandeq", "--out-dir", str(tmp_path)]) == 0
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "dropped 1 band(s)" in warnings[0].getMessage()
