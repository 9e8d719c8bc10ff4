"""Subprocess helpers for shelling out to package managers."""

from nextpatch.sandbox.commands import CommandResult, quote, run_command

__all__ = ["CommandResult", "quote", "run_command"]
