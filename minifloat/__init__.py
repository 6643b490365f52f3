"""Emulation of small binary floating-point formats such as FP8, f16 and bfloat16."""

__version__ = "0.2.0.dev0"
__all__ = ["core", "format", "value"]