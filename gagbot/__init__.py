"""GaGBOT: a modular Discord bot with typed prefix commands."""

__version__ = "1.0.0"
