"""Choosing and playing the sounds for a kill."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from .args import Args
from .preset import Preset
from .state import AppState


def sound_files(
    preset: Preset,
    args: Args,
    sound_num: int,
    current_kills: int,
    origin_hs_kills: int,
    current_hs_kills: int,
    sound_num_max: int,
    root: Union[str, Path] = "sounds",
) -> List[Path]:
    """Return the files to mix for a kill, in the order they are added."""
    base = Path(root) / args.preset
    if preset.has_variant and args.variant is not None:
        voice_dir = Path(root) / f"{args.preset}_v_{args.variant}"
    else:
        voice_dir = base

    files: List[Path] = []

    if preset.has_common_headshot and current_hs_kills > origin_hs_kills:
        files.append(base / "common_headshot.wav")
    elif preset.has_common:
        files.append(base / "common.wav")

    if (
        preset.has_headshot
        and not args.no_voice
        and current_hs_kills == 1
        and current_kills == 1
    ):
        files.append(voice_dir / "headshot.wav")

    wants_voice = (
        preset.has_voice
        and not args.no_voice
        and (current_kills >= preset.start or not preset.has_headshot)
        and current_kills <= sound_num_max
    )
    if wants_voice or not preset.has_common:
        files.append(voice_dir / f"{sound_num}.wav")

    return files


def play_audio(
    state: AppState,
    sound_num: int,
    current_kills: int,
    origin_hs_kills: int,
    current_hs_kills: int,
    sound_num_max: int,
) -> List[str]:
    """Mix the sounds for a kill on the state's output and wait until they end."""
    if state.stream is None:
        raise RuntimeError("no audio output stream is open")
    files = sound_files(
        state.preset,
        state.args,
        sound_num,
        current_kills,
        origin_hs_kills,
        current_hs_kills,
        sound_num_max,
        root=state.sound_root,
    )
    return state.stream.play(files, state.args.volume)