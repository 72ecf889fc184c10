"""Audio output devices and mixing of short sound files."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402
import pygame._sdl2.audio as sdl2_audio  # noqa: E402

logger = logging.getLogger(__name__)

_MIXER = {"frequency": 44100, "channels": 2}


def _device_names() -> List[str]:
    started = pygame.mixer.get_init() is None
    try:
        if started:
            pygame.mixer.init(**_MIXER)
        return [str(name) for name in sdl2_audio.get_audio_device_names(False)]
    except pygame.error as exc:
        logger.warning("cannot enumerate output devices: %s", exc)
        return []
    finally:
        if started and pygame.mixer.get_init() is not None:
            pygame.mixer.quit()


class OutputStream:
    """An open audio output on which several files can be mixed together."""

    def __init__(self, device_name: Optional[str] = None) -> None:
        self.device_name = device_name
        extra = {} if device_name is None else {"devicename": device_name}
        try:
            pygame.mixer.init(**_MIXER, **extra)
        except pygame.error as exc:
            raise RuntimeError(f"failed to open audio output: {exc}") from exc

    def play(self, paths: Iterable[Union[str, Path]], volume: float = 1.0) -> List[str]:
        """Play the files at once, block until done, return the ones that played."""
        sounds, played = [], []
        for path in map(str, paths):
            try:
                sounds.append(pygame.mixer.Sound(path))
                played.append(path)
            except (OSError, pygame.error) as exc:
                logger.error("Failed to add file to mixer: %s: %s", path, exc)
        if not sounds:
            return played
        for sound in sounds:
            sound.set_volume(max(0.0, min(1.0, volume)))
        channels = [ch for ch in (s.play() for s in sounds) if ch is not None]
        deadline = time.monotonic() + max(s.get_length() for s in sounds) + 1.0
        while any(ch.get_busy() for ch in channels) and time.monotonic() < deadline:
            time.sleep(0.01)
        return played

    def close(self) -> None:
        """Release the audio device."""
        if pygame.mixer.get_init() is not None:
            pygame.mixer.quit()

    def __enter__(self) -> "OutputStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def list_host_devices() -> List[str]:
    """Log and return the names of the available output devices."""
    names = _device_names()
    logger.info("Available output devices:")
    for name in names:
        logger.info("%s", name)
    return names


def get_output_stream(device_name: str) -> OutputStream:
    """Open the named device, falling back to the default when it is absent."""
    if device_name == "default":
        return OutputStream()
    if device_name in _device_names():
        logger.info("Using device: %s", device_name)
        return OutputStream(device_name)
    logger.warning("Specified device %s not found, using default output device.", device_name)
    return OutputStream()