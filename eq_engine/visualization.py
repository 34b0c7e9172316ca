"""Conversion reports: compare a preset with its converted counterpart.

This module generates:
- A JSON comparison with per-band gains and curve characteristics.
- A PNG with both curves on a log-frequency axis.

Dependencies: numpy, matplotlib (optional at runtime). If matplotlib is
missing, plotting is skipped but the JSON comparison is still written.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

import json
import re
import numpy as np

from .converter import analyze_preset_characteristics, interpolate_gains
from .display import format_frequency
from .types import MAX_GAIN_DB, MIN_GAIN_DB, Preset


def compute_comparison(source: Preset, converted: Preset) -> Dict:
    """Per-band comparison of ``converted`` against ``source``.

    ``source_gain_db`` is the source curve read at the converted band's
    frequency (log-frequency interpolation), so the two columns line up.

    Returns a dict with keys:
      - summary: names, modes and both curves' characteristics
      - bands: list of {index, frequency_hz, source_gain_db, converted_gain_db, delta_db}
    """
    target_freqs = converted.target_mode.frequencies
    reference = interpolate_gains(source.target_mode.frequencies, source.bands, target_freqs)
    bands = []
    for i, (freq, ref, out) in enumerate(zip(target_freqs, reference, converted.bands)):
        bands.append({
            "index": i,
            "frequency_hz": int(freq),
            "source_gain_db": round(float(ref), 3),
            "converted_gain_db": round(float(out), 3),
            "delta_db": round(float(out - ref), 3),
        })

    deltas = np.asarray([b["delta_db"] for b in bands], dtype=float)
    summary = {
        "source": source.name,
        "converted": converted.name,
        "source_mode": source.target_mode.display_name,
        "target_mode": converted.target_mode.display_name,
        "max_abs_delta_db": round(float(np.max(np.abs(deltas))), 3) if len(deltas) else 0.0,
        "source_characteristics": analyze_preset_characteristics(source).to_dict(),
        "converted_characteristics": analyze_preset_characteristics(converted).to_dict(),
    }
    return {"summary": summary, "bands": bands}


def _save_json(data: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _plot_report(source: Preset, converted: Preset, png_path: Path) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        return  # plotting optional

    fig, ax = plt.subplots(1, 1, figsize=(11, 5), constrained_layout=True)
    src_f = source.target_mode.frequencies
    dst_f = converted.target_mode.frequencies
    ax.plot(src_f, source.bands, color="#444444", marker="o", linewidth=1.4,
            label=f"{source.name} ({source.target_mode.band_count} bands)", zorder=2)
    ax.plot(dst_f, converted.bands, color="#b19cd9", marker="s", alpha=0.85, linewidth=1.8,
            label=f"{converted.name} ({converted.target_mode.band_count} bands)", zorder=3)
    ax.axhline(0.0, color="#999999", linewidth=0.8, zorder=1)
    ax.set_xscale("log")
    ax.set_xticks(dst_f)
    ax.set_xticklabels([format_frequency(f) for f in dst_f], rotation=60, fontsize=7)
    ax.minorticks_off()
    ax.set_ylim(MIN_GAIN_DB - 0.5, MAX_GAIN_DB + 0.5)
    ax.set_xlabel("Frequency")
    ax.set_ylabel("Gain (dB)")
    ax.set_title(f"{source.target_mode.display_name} -> {converted.target_mode.display_name}")
    ax.legend(loc="upper right")

    png_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(png_path, dpi=150)
    plt.close(fig)


def create_conversion_report(source: Preset, converted: Preset, out_dir: Path) -> Tuple[Dict, Path, Path]:
    """Write a PNG plot and a JSON comparison into ``out_dir``.

    Returns (comparison, png_path, json_path). The PNG only exists when
    matplotlib is installed.
    """
    comparison = compute_comparison(source, converted)
    stem = re.sub(r"[^a-z0-9]+", "_", converted.id.lower()).strip("_")
    png_path = out_dir / f"{stem}_curve.png"
    json_path = out_dir / f"{stem}_comparison.json"

    _plot_report(source, converted, png_path)
    _save_json(comparison, json_path)
    return comparison, png_path, json_path
