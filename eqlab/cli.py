"""Command-line harness: export a profile JSON file to preset files."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from eqlab.constants import REFERENCE_SAMPLE_RATE
from eqlab.dsp import EQEngine
from eqlab.export import export_profile, format_ids, formats_by_platform
from eqlab.profile import EQProfile

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eqlab", description="Export an EQ profile to third-party preset formats")
    parser.add_argument("profile", nargs="?", help="Profile JSON file ({name, bands, volume, wavelets})")
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=format_ids() + ["all"],
        help="Format id to export (repeatable, default: all)",
    )
    parser.add_argument("--out-dir", type=Path, default=Path("."), help="Directory for the exported files")
    parser.add_argument(
        "--sample-rate", type=float, default=REFERENCE_SAMPLE_RATE, help="Sample rate used for curve sampling in Hz"
    )
    parser.add_argument("--auto-gain", action="store_true", help="Replace the profile preamp with the auto-gain value")
    parser.add_argument("--preview", type=Path, help="Also write a PNG preview of the curve")
    parser.add_argument("--list-formats", action="store_true", help="List the available formats and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_formats() -> None:
    for platform, entries in formats_by_platform():
        print(platform)
        for entry in entries:
            print(f"  {entry.meta.id:<14} {entry.meta.name} ({entry.meta.file_extension}) - {entry.meta.description}")


def load_profile(path: Path) -> EQProfile:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a profile object")
    return EQProfile.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_formats:
        _print_formats()
        return EXIT_OK
    if not args.profile:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    try:
        profile = load_profile(Path(args.profile))
        engine = EQEngine(sample_rate=args.sample_rate)
    except (OSError, ValueError) as exc:
        logger.error("Cannot load %s: %s", args.profile, exc)
        return EXIT_USAGE

    if args.auto_gain:
        profile.preamp_db = profile.auto_gain_db(engine)
        logger.info("Auto-gain preamp: %.2f dB", profile.preamp_db)

    selected = args.formats or ["all"]
    targets = format_ids() if "all" in selected else list(dict.fromkeys(selected))
    export_input = profile.export_input(engine.sample_rate)

    args.out_dir.mkdir(parents=True, exist_ok=True)
    for format_id in targets:
        result = export_profile(format_id, export_input)
        path = args.out_dir / result.file_name
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(result.content)
        logger.info("Wrote %s", path)

    if args.preview:
        from eqlab.plotting import plot_profile

        wavelets = profile.wavelet_state() if profile.wavelets else None
        fig = plot_profile(profile, engine.sample_rate, wavelets=wavelets)
        fig.savefig(args.preview)
        logger.info("Wrote preview %s", args.preview)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
