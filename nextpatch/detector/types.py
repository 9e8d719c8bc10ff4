"""Shared types for the detector module."""

from dataclasses import dataclass
from typing import Optional

# Agent identifiers that select a patch environment.
AGENTS: tuple[str, ...] = (
    "npm",
    "yarn",
    "yarn@berry",
    "pnpm",
    "pnpm@6",
    "bun",
    "deno",
)


@dataclass
class DetectionResult:
    """A detected package manager.

    `name` is the plain package manager name ("yarn"), while `agent`
    distinguishes incompatible major lines ("yarn@berry", "pnpm@6").
    Source tracks which file or field produced the result.
    """

    name: str
    agent: str
    strategy: str
    source: str
    version: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "agent": self.agent,
            "version": self.version,
            "strategy": self.strategy,
            "source": self.source,
        }
