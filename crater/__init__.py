"""Toolchain specs, bot commands, webhook checks, GitHub access and try-build tracking for ecosystem-wide experiments."""

__version__ = "0.1.0"