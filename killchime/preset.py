"""Sound preset descriptions loaded from ``<root>/<name>/info.json``."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Union


class PresetError(ValueError):
    """A preset could not be read or is malformed."""


@dataclass(frozen=True)
class Preset:
    """Which sounds a preset provides and which kill counts have voice lines."""

    has_variant: bool
    has_voice: bool
    has_common: bool
    has_headshot: bool
    has_common_headshot: bool
    start: int
    end: int


def load_preset(name: str, root: Union[str, Path] = "sounds") -> Preset:
    """Read and validate the ``info.json`` of preset ``name`` under ``root``."""
    path = Path(root) / name / "info.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise PresetError(f"cannot load {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise PresetError("preset info must be a JSON object")
    for f in fields(Preset):
        if f.name not in data:
            raise PresetError(f"missing field `{f.name}`")
        value = data[f.name]
        if f.type == "bool":
            valid = isinstance(value, bool)
        else:
            valid = type(value) is int and 0 <= value <= 0xFFFF
        if not valid:
            raise PresetError(f"invalid value for field `{f.name}`: {value!r}")
    return Preset(**{f.name: data[f.name] for f in fields(Preset)})