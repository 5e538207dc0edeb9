"""LoRaWAN frame codec, subnet addressing, PoC beacon construction and helpers for a light gateway."""

__version__ = "0.1.0"