"""Command-line options."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

VERSION = "0.1.0"


@dataclass(frozen=True)
class Args:
    """Options the server runs with."""

    device: str = "default"
    list_devices: bool = False
    no_voice: bool = False
    preset: str = "crossfire"
    steamid: Optional[str] = None
    variant: Optional[str] = None
    volume: float = 1.0


def parse_args(argv: Optional[Sequence[str]] = None) -> Args:
    """Parse command-line arguments; argparse exits on invalid input."""
    parser = argparse.ArgumentParser(prog="killchime")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-d", "--device", default="default", help="select output device")
    parser.add_argument("-l", "--list-devices", action="store_true",
                        help="list all available audio devices")
    parser.add_argument("-n", "--no-voice", action="store_true",
                        help="disable voice for some presets")
    parser.add_argument("-p", "--preset", default="crossfire", help="sound preset to use")
    parser.add_argument("--steamid", help="play sound only for a specific steamid")
    parser.add_argument("--variant", help="use variant of sound preset")
    parser.add_argument("-v", "--volume", type=float, default=1.0)
    return Args(**vars(parser.parse_args(argv)))