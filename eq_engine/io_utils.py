"""Preset file I/O for the host application.

- Listing preset files in `presets/`
- Exporting presets to JSON with metadata
- Importing presets (optionally converting them to one mode)
- Validating a file before import

Notes
-----
The engine core never touches disk; this module is the storage side that
hands `Preset` lists to it. Files use the `.json` or `.ftleq` extension.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import json
import logging
import re

from .converter import analyze_preset_characteristics, convert_preset
from .errors import EQEngineError, PresetFileError
from .types import EQMode, Preset, PresetCategory

logger = logging.getLogger(__name__)

EXPORT_FILE_VERSION = "1.0"
EXPORTED_BY = "Adaptive EQ Engine"
MAX_FILE_SIZE_MB = 10
SUPPORTED_EXTS = {".json", ".ftleq"}
PRESET_DIR = Path("presets")


@dataclass
class ImportResult:
    imported: List[Preset] = field(default_factory=list)
    converted: List[Preset] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    total_processed: int = 0

    @property
    def presets(self) -> List[Preset]:
        return self.imported + self.converted


@dataclass
class ValidationResult:
    valid: bool
    reason: str = ""
    preset_count: int = 0
    file_version: str = ""
    export_date: str = ""
    exported_by: str = ""


def ensure_directories() -> None:
    PRESET_DIR.mkdir(parents=True, exist_ok=True)


def list_preset_files(directory: Path = PRESET_DIR) -> List[Path]:
    """List supported preset files in ``directory``, sorted by name."""
    directory.mkdir(parents=True, exist_ok=True)
    files = [p for p in directory.glob("*") if p.suffix.lower() in SUPPORTED_EXTS]
    return sorted(files)


def parse_mode(text: Any) -> EQMode:
    """Lenient mode parser: accepts band counts, enum names and display names."""
    if isinstance(text, EQMode):
        return text
    if isinstance(text, int):
        return EQMode.from_band_count(text)
    raw = str(text).strip()
    for mode in EQMode:
        if raw.upper() in (mode.name, mode.display_name):
            return mode
    digits = re.findall(r"\d+", raw)
    if digits:
        return EQMode.from_band_count(int(digits[0]))
    raise ValueError(f"Unrecognised EQ mode '{text}'")


def preset_to_dict(preset: Preset, include_metadata: bool = True) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": preset.name,
        "description": preset.description,
        "bands": [round(g, 3) for g in preset.bands],
        "target_mode": preset.target_mode.band_count,
        "category": preset.category.name,
        "is_custom": preset.is_custom,
        "author": preset.author,
        "tags": list(preset.tags),
    }
    if include_metadata:
        data["metadata"] = analyze_preset_characteristics(preset).to_dict()
    return data


def preset_from_dict(data: Dict[str, Any]) -> Preset:
    """Rebuild a preset from its exported form. Raises ValueError/KeyError when malformed."""
    if not isinstance(data, dict):
        raise TypeError(f"Preset entry must be an object, got {type(data).__name__}")
    category = str(data.get("category", "GENERAL")).upper()
    return Preset(
        name=str(data["name"]),
        description=str(data.get("description", "")),
        bands=tuple(float(g) for g in data["bands"]),
        target_mode=parse_mode(data["target_mode"]),
        category=PresetCategory[category] if category in PresetCategory.__members__ else PresetCategory.GENERAL,
        is_custom=bool(data.get("is_custom", True)),
        author=str(data.get("author", "")),
        tags=tuple(str(t) for t in data.get("tags", [])),
    )


def export_presets(presets: Sequence[Preset], path: Path, include_metadata: bool = True) -> int:
    """Write ``presets`` to ``path`` as JSON. Returns the number written."""
    payload = {
        "version": EXPORT_FILE_VERSION,
        "export_date": datetime.now(timezone.utc).isoformat(),
        "exported_by": EXPORTED_BY,
        "presets": [preset_to_dict(p, include_metadata) for p in presets],
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
    except OSError as e:
        raise PresetFileError(f"Failed to export presets to {path}: {e}") from e
    logger.info("Exported %d presets to %s", len(presets), path)
    return len(presets)


def _read_payload(path: Path) -> Dict[str, Any]:
    if path.suffix.lower() not in SUPPORTED_EXTS:
        raise PresetFileError(f"Unsupported preset file type: {path.suffix or path.name}")
    try:
        size = path.stat().st_size
    except OSError as e:
        raise PresetFileError(f"Cannot read {path}: {e}") from e
    if size > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise PresetFileError(f"File too large (max {MAX_FILE_SIZE_MB}MB)")
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PresetFileError(f"Cannot parse {path}: {e}") from e
    if not isinstance(payload, dict) or not isinstance(payload.get("presets"), list):
        raise PresetFileError(f"{path} does not contain a preset list")
    return payload


def validate_preset_file(path: Path) -> ValidationResult:
    """Check a file is importable without importing it."""
    try:
        payload = _read_payload(path)
    except PresetFileError as e:
        return ValidationResult(valid=False, reason=str(e))
    return ValidationResult(
        valid=True,
        preset_count=len(payload["presets"]),
        file_version=str(payload.get("version", "")),
        export_date=str(payload.get("export_date", "")),
        exported_by=str(payload.get("exported_by", "Unknown")),
    )


def import_presets(path: Path, target_mode: Optional[EQMode] = None) -> ImportResult:
    """Load presets from ``path``.

    With ``target_mode`` set, presets of other modes are converted to it and
    reported under ``converted``. Malformed entries are skipped, not fatal.
    """
    payload = _read_payload(path)
    result = ImportResult()
    for index, entry in enumerate(payload["presets"]):
        result.total_processed += 1
        try:
            preset = preset_from_dict(entry)
        except (KeyError, TypeError, ValueError, EQEngineError) as e:
            label = entry.get("name", f"#{index}") if isinstance(entry, dict) else f"#{index}"
            logger.warning("Skipping preset %s: %s", label, e)
            result.skipped.append(str(label))
            continue
        if target_mode is not None and preset.target_mode != target_mode:
            result.converted.append(convert_preset(preset, target_mode))
        else:
            result.imported.append(preset)
    logger.info(
        "Imported %d presets (%d converted, %d skipped) from %s",
        len(result.imported),
        len(result.converted),
        len(result.skipped),
        path,
    )
    return result


def generate_export_filename(
    mode: Optional[EQMode] = None,
    preset_count: int = 0,
    is_backup: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """Suggested file name, e.g. ``eq_standard_presets_20250101_1200.json``."""
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M")
    if is_backup:
        return f"eq_backup_{timestamp}.json"
    if mode is not None:
        return f"eq_{mode.display_name.lower()}_presets_{timestamp}.json"
    return f"eq_presets_{preset_count}_{timestamp}.json"
