"""Terminal Equalizer Workbench (Rich CLI)

App Flow
--------
1) Initialization: load the optional JSON config, show welcome menu.
2) Inspect the four EQ resolutions and their frequency ladders.
3) Switch resolution (gains carried over by nearest frequency).
4) Edit single bands; view the curve and its shape.
5) Browse the preset catalog and apply presets (converted when needed).
6) Convert a preset to another resolution and write a comparison report.
7) Show how the curve maps onto the hardware equalizer bands.

This file orchestrates the UX; the engine lives in `eq_engine/`.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import argparse
import logging
import sys
# Dependency preflight: fail fast with clear guidance if a package is missing.
try:
    import numpy as np  # noqa: F401
except ImportError:
    print("Missing required dependency: numpy. Install dependencies with:")
    print("  pip install -r requirements.txt")
    sys.exit(1)
try:
    import scipy  # noqa: F401
except ImportError:
    print("Missing required dependency: scipy. Install dependencies with:")
    print("  pip install -r requirements.txt")
    sys.exit(1)
try:
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.table import Table
    from rich.panel import Panel
    from rich.prompt import Prompt, Confirm, FloatPrompt
except ImportError:
    print("Missing required dependency: rich. Install dependencies with:")
    print("  pip install -r requirements.txt")
    sys.exit(1)

from eq_engine import presets as catalog
from eq_engine.config import DEFAULT_HARDWARE, EngineConfig, load_config
from eq_engine.converter import analyze_gains, convert_preset, find_best_matching_preset
from eq_engine.display import (
    MODE_COLORS,
    MODE_ICONS,
    MODE_RECOMMENDED_USE,
    MODE_SPACING,
    format_frequency,
    frequency_category,
    frequency_color,
    gain_bar,
)
from eq_engine.engine import AdaptiveEqualizer
from eq_engine.errors import EQEngineError
from eq_engine.hardware import group_boundaries
from eq_engine.ladder import generate_ladder
from eq_engine.types import ALL_MODES, EQMode, Preset
from eq_engine.visualization import create_conversion_report

console = Console()
REPORT_DIR = Path("reports")


# ====================================
# UI helpers
# ====================================

def clear_screen() -> None:
    console.clear()


def welcome_screen(eq: AdaptiveEqualizer) -> None:
    clear_screen()
    mode = eq.configuration.mode
    panel = Panel.fit(
        "Inspect and edit a 5/10/20/32-band equalizer curve,\n"
        "convert presets between resolutions, and preview the\n"
        "gains sent to the hardware equalizer.\n\n"
        f"Current mode: [bold {MODE_COLORS[mode]}]{mode.display_name}[/bold {MODE_COLORS[mode]}] "
        f"({mode.band_count} bands)",
        title="Adaptive EQ Workbench",
        border_style="cyan",
    )
    console.print(panel)


def main_menu() -> str:
    console.print("\n[bold]Main Menu[/bold]")
    choices = {
        "1": "Show EQ modes",
        "2": "Show current curve",
        "3": "Switch mode",
        "4": "Edit a band",
        "5": "Apply a preset",
        "6": "Convert a preset & write report",
        "7": "Show hardware mapping",
        "8": "Reset to flat",
        "9": "Exit",
    }
    for k, v in choices.items():
        console.print(f"  [cyan]{k}[/cyan]) {v}")
    return Prompt.ask("Select an option", choices=list(choices.keys()), default="2")


def pick_mode(prompt: str = "Pick a mode") -> EQMode:
    for idx, mode in enumerate(ALL_MODES, 1):
        console.print(f"  [cyan]{idx}[/cyan]) {mode.display_name} ({mode.band_count} bands)")
    sel = Prompt.ask(prompt, choices=[str(i) for i in range(1, len(ALL_MODES) + 1)])
    return ALL_MODES[int(sel) - 1]


def pick_preset(mode: EQMode) -> Optional[Preset]:
    options = catalog.get_presets_for_mode(mode)
    t = Table(title=f"{mode.display_name} Presets", show_lines=False)
    t.add_column("#", justify="right", style="cyan")
    t.add_column("Name", style="white")
    t.add_column("Category", style="magenta")
    t.add_column("Description")
    for idx, p in enumerate(options, 1):
        t.add_row(str(idx), p.name, p.category.display_name, p.description)
    console.print(t)
    choices = ["0"] + [str(i) for i in range(1, len(options) + 1)]
    sel = Prompt.ask("Pick a preset (0 to cancel)", choices=choices, default="0")
    if sel == "0":
        return None
    return options[int(sel) - 1]


# ====================================
# Reports
# ====================================

def show_modes() -> None:
    t = Table(title="EQ Modes", show_lines=True)
    t.add_column("Mode", style="bold")
    t.add_column("Bands", justify="right")
    t.add_column("Range")
    t.add_column("Spacing")
    t.add_column("Recommended use")
    for mode in ALL_MODES:
        ladder = generate_ladder(mode.band_count)
        color = MODE_COLORS[mode]
        t.add_row(
            f"[{color}]{mode.display_name}[/{color}]\n[dim]{MODE_ICONS[mode]}[/dim]",
            str(mode.band_count),
            f"{format_frequency(ladder[0])} - {format_frequency(ladder[-1])}",
            MODE_SPACING[mode],
            MODE_RECOMMENDED_USE[mode],
        )
    console.print(t)


def show_curve(eq: AdaptiveEqualizer) -> None:
    config, preset = eq.manager.snapshot()
    title = f"{config.mode.display_name} curve"
    if preset is not None:
        title += f" - preset: {preset.name}"
    t = Table(title=title)
    t.add_column("#", justify="right", style="cyan")
    t.add_column("Freq", justify="right")
    t.add_column("Region")
    t.add_column("Gain dB", justify="right")
    t.add_column("", no_wrap=True)
    for band in config.bands:
        color = frequency_color(band.frequency)
        gain = f"{band.gain:+.1f}" if band.enabled else "[dim]off[/dim]"
        t.add_row(
            str(band.id),
            format_frequency(band.frequency),
            f"[{color}]{frequency_category(band.frequency)}[/{color}]",
            gain,
            gain_bar(band.gain),
        )
    console.print(t)
    traits = analyze_gains(config.gains)
    console.print(
        f"Shape: [bold]{traits.shape}[/bold]  bass {traits.bass_level:+.1f} dB, "
        f"mid {traits.mid_level:+.1f} dB, treble {traits.treble_level:+.1f} dB, "
        f"range {traits.dynamic_range:.1f} dB"
    )


def show_hardware_mapping(eq: AdaptiveEqualizer) -> None:
    if eq.descriptor is None:
        console.print(Panel("No hardware equalizer attached.", title="Hardware", border_style="red"))
        return
    if not eq.is_ready:
        console.print(Panel(f"{eq.last_error}\nFlat response pushed.", title="Hardware", border_style="red"))
        return
    gains = eq.hardware_gains()
    bands = eq.configuration.bands
    t = Table(title=f"Hardware mapping ({len(bands)} -> {eq.descriptor.count} bands)")
    t.add_column("HW band", justify="right", style="cyan")
    t.add_column("HW freq", justify="right")
    t.add_column("UI bands")
    t.add_column("HW gain", justify="right")
    for i, (start, end) in enumerate(group_boundaries(len(bands), eq.descriptor.count)):
        t.add_row(
            str(i),
            format_frequency(eq.descriptor.frequencies[i]),
            f"{start}-{end - 1} ({format_frequency(bands[start].frequency)}-"
            f"{format_frequency(bands[end - 1].frequency)})",
            f"{gains[i]:+.1f}",
        )
    console.print(t)


# ====================================
# Actions
# ====================================

def do_switch_mode(eq: AdaptiveEqualizer) -> None:
    mode = pick_mode("Switch to")
    eq.switch_mode(mode)
    console.print(f"Switched to [bold]{mode.display_name}[/bold]. Gains carried over by nearest frequency.")
    show_curve(eq)


def do_edit_band(eq: AdaptiveEqualizer) -> None:
    config = eq.configuration
    band_id = int(Prompt.ask("Band #", choices=[str(b.id) for b in config.bands]))
    gain = FloatPrompt.ask("Gain (dB, -15..15)", default=config.bands[band_id].gain)
    try:
        eq.update_band(band_id, gain)
    except EQEngineError as e:
        console.print(Panel(str(e), title="Error", border_style="red"))
        return
    show_curve(eq)


def do_apply_preset(eq: AdaptiveEqualizer) -> None:
    mode = pick_mode("Preset catalog")
    preset = pick_preset(mode)
    if preset is None:
        return
    current = eq.configuration.mode
    if preset.target_mode != current:
        native = find_best_matching_preset(preset, current)
        if native is not None and Confirm.ask(
            f"Use the native {current.display_name} preset '{native.name}' instead of converting?",
            default=False,
        ):
            preset = native
    eq.apply_preset(preset)
    show_curve(eq)


def do_convert(eq: AdaptiveEqualizer) -> None:
    source_mode = pick_mode("Source catalog")
    preset = pick_preset(source_mode)
    if preset is None:
        return
    target = pick_mode("Convert to")
    converted = convert_preset(preset, target, eq.config.influence_radii)
    comparison, png_path, json_path = create_conversion_report(preset, converted, REPORT_DIR)

    t = Table(title=f"{preset.name}: {source_mode.display_name} -> {target.display_name}")
    t.add_column("Freq", justify="right", style="cyan")
    t.add_column("Source dB", justify="right")
    t.add_column("Converted dB", justify="right")
    for row in comparison["bands"]:
        t.add_row(
            format_frequency(row["frequency_hz"]),
            f"{row['source_gain_db']:+.2f}",
            f"{row['converted_gain_db']:+.2f}",
        )
    console.print(t)
    png_line = f"Curve plot: [cyan]{png_path}[/cyan]" if png_path.exists() else (
        "Curve plot: not created (install matplotlib to enable plotting)."
    )
    console.print(Panel(f"{png_line}\nComparison: [cyan]{json_path}[/cyan]", title="Report", border_style="green"))


# ====================================
# Main loop
# ====================================

def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def build_equalizer(config: EngineConfig) -> AdaptiveEqualizer:
    eq = AdaptiveEqualizer(config)
    eq.attach_hardware(config.hardware or DEFAULT_HARDWARE)
    return eq


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(description="Adaptive EQ workbench")
    p.add_argument("--config", type=str, default=None, help="JSON engine config")
    args = p.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        console.print(Panel(f"Failed to load config: {e}", title="Error", border_style="red"))
        sys.exit(1)
    setup_logging(config.log_level)
    eq = build_equalizer(config)

    actions = {
        "1": lambda: show_modes(),
        "2": lambda: show_curve(eq),
        "3": lambda: do_switch_mode(eq),
        "4": lambda: do_edit_band(eq),
        "5": lambda: do_apply_preset(eq),
        "6": lambda: do_convert(eq),
        "7": lambda: show_hardware_mapping(eq),
        "8": lambda: (eq.reset_to_flat(), show_curve(eq)),
    }
    welcome_screen(eq)
    while True:
        sel = main_menu()
        if sel == "9":
            break
        actions[sel]()
    console.print("Goodbye!")


if __name__ == "__main__":
    main()
