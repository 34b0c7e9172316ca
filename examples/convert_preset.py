#!/usr/bin/env python3
"""Example: convert a built-in preset to another EQ resolution.

Usage:
  python examples/convert_preset.py --preset "Bass Boost" --source 5 --target 32 \
      [--out reports/] [--config configs/engine.json] [--native]

Prints the converted gains and writes a JSON comparison (plus a PNG when
matplotlib is installed) into the output directory. With --native, the best
matching built-in preset of the target mode is printed as well.
"""
from __future__ import annotations

import argparse
from pathlib import Path

from eq_engine import presets as catalog
from eq_engine.config import load_config
from eq_engine.converter import convert_preset, find_best_matching_preset
from eq_engine.display import format_frequency
from eq_engine.types import EQMode
from eq_engine.visualization import create_conversion_report


def main() -> None:
    p = argparse.ArgumentParser(description="Convert an EQ preset between resolutions")
    p.add_argument("--preset", type=str, required=True, help="Built-in preset name")
    p.add_argument("--source", type=int, default=5, help="Band count of the preset's mode")
    p.add_argument("--target", type=int, default=32, help="Band count to convert to")
    p.add_argument("--out", type=str, default="reports", help="Report directory")
    p.add_argument("--config", type=str, default=None, help="JSON engine config")
    p.add_argument("--native", action="store_true", help="Also show the best native match")
    args = p.parse_args()

    try:
        source_mode = EQMode.from_band_count(args.source)
        target_mode = EQMode.from_band_count(args.target)
        preset = catalog.get_preset(source_mode, args.preset)
    except (KeyError, ValueError) as e:
        raise SystemExit(str(e))
    cfg = load_config(Path(args.config) if args.config else None)

    converted = convert_preset(preset, target_mode, cfg.influence_radii)
    print(f"{preset.name}: {source_mode.display_name} -> {target_mode.display_name}")
    for freq, gain in zip(target_mode.frequencies, converted.bands):
        print(f"  {format_frequency(freq):>8}  {gain:+6.2f} dB")

    if args.native:
        native = find_best_matching_preset(preset, target_mode)
        if native is not None:
            print(f"Best native {target_mode.display_name} preset: {native.name}")

    _, png_path, json_path = create_conversion_report(preset, converted, Path(args.out))
    print(f"Wrote: {json_path}")
    if png_path.exists():
        print(f"Wrote: {png_path}")


if __name__ == "__main__":
    main()
