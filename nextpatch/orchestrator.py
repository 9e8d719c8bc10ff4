"""Patch run orchestrator: detect the package manager, pick an environment, patch.

Flow:
1. Detect the active package manager (install metadata, lock file,
   packageManager field, devEngines field).
2. Select the patch environment registered for the detected agent,
   falling back to in-place editing.
3. Run the patcher inside that environment and return its outcome.
"""

import logging
from typing import Optional

from nextpatch.core.config import Settings, get_settings
from nextpatch.detector import DEFAULT_STRATEGIES, detect
from nextpatch.environments import (
    PatchEnvironment,
    PnpmPatchEnvironment,
    environment_for,
    run_in_environment,
)
from nextpatch.environments.base import CommandRunner
from nextpatch.patches import PatchFn, apply_patches
from nextpatch.sandbox.commands import run_command
from nextpatch.types import FailureReasonCode, PatchOutcome

logger = logging.getLogger(__name__)


def build_environment(
    agent: Optional[str],
    settings: Settings,
    runner: CommandRunner = run_command,
) -> PatchEnvironment:
    """Instantiate the patch environment registered for an agent."""
    environment_cls = environment_for(agent)
    if issubclass(environment_cls, PnpmPatchEnvironment):
        return environment_cls(
            settings.project_dir,
            runner=runner,
            staging_root=settings.staging_root,
        )
    return environment_cls(settings.project_dir, runner=runner)


def run(
    settings: Optional[Settings] = None,
    patch_fn: PatchFn = apply_patches,
    runner: CommandRunner = run_command,
) -> PatchOutcome:
    """Patch the configured package with whichever manager is active.

    Returns a PatchOutcome; never exits the process.
    """
    settings = settings or get_settings()

    detection = detect(settings.project_dir, strategies=DEFAULT_STRATEGIES)
    if detection is None:
        logger.info("❌ No package manager found")
        return PatchOutcome.failure(
            FailureReasonCode.NO_PACKAGE_MANAGER,
            "No package manager found",
            package=settings.package,
        )

    logger.debug(
        "Using %s patch environment for agent %s",
        environment_for(detection.agent).__name__,
        detection.agent,
    )
    environment = build_environment(detection.agent, settings, runner=runner)
    outcome = run_in_environment(environment, settings.package, patch_fn)
    outcome.agent = detection.agent
    return outcome
