"""Patch environments, one per package manager patch workflow.

ENVIRONMENT_REGISTRY maps detected agents to environment classes. Any agent
not listed (npm, yarn classic, pnpm@6, bun, deno, or none) patches in place.
"""

from typing import Optional

from nextpatch.environments.base import (
    PatchEnvironment,
    remove_tree,
    run_in_environment,
)
from nextpatch.environments.in_place import InPlacePatchEnvironment
from nextpatch.environments.pnpm import PnpmPatchEnvironment
from nextpatch.environments.yarn import YarnBerryPatchEnvironment, parse_patch_output

ENVIRONMENT_REGISTRY: dict[str, type[PatchEnvironment]] = {
    "pnpm": PnpmPatchEnvironment,
    "yarn@berry": YarnBerryPatchEnvironment,
}


def environment_for(agent: Optional[str]) -> type[PatchEnvironment]:
    """Return the environment class for an agent, defaulting to in-place."""
    return ENVIRONMENT_REGISTRY.get(agent or "", InPlacePatchEnvironment)


__all__ = [
    "ENVIRONMENT_REGISTRY",
    "environment_for",
    "InPlacePatchEnvironment",
    "parse_patch_output",
    "PatchEnvironment",
    "PnpmPatchEnvironment",
    "remove_tree",
    "run_in_environment",
    "YarnBerryPatchEnvironment",
]
