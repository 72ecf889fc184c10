"""Kill-streak sound playback driven by CS2 game state integration updates."""

__version__ = "0.1.0"
__all__ = ["__version__"]