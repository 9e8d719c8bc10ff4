"""Patch environment contract and the shared prepare/patch/commit driver.

A patch environment owns a staging directory for the duration of one run:

    prepare(package) -> staging_dir   materialise an editable copy
    patch_fn(package, staging_dir)    edit files in place
    commit(staging_dir)               record the edits with the manager

On any failure after prepare(), discard() runs instead of commit(). Whether
discard() actually removes the staging directory is the environment's
`cleanup_on_failure` policy.
"""

import logging
import shutil
from pathlib import Path
from typing import Callable

from nextpatch.patches.applicator import PatchFn
from nextpatch.sandbox.commands import CommandResult, run_command
from nextpatch.types import NextPatchError, PatchOutcome, StagingError, reason_for

logger = logging.getLogger(__name__)

CommandRunner = Callable[..., CommandResult]


def remove_tree(path: Path) -> None:
    """Remove a directory tree, ignoring a missing path.

    Raises:
        StagingError: the tree exists but could not be removed.
    """
    path = Path(path)
    if not path.exists():
        return
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise StagingError(path, exc) from exc


class PatchEnvironment:
    """Default environment: no staging and nothing to commit."""

    #: Agent identifier this environment is registered under
    agent: str = ""

    #: Remove the staging directory when the run fails
    cleanup_on_failure: bool = False

    def __init__(self, project_dir: Path, runner: CommandRunner = run_command):
        self.project_dir = Path(project_dir)
        self.runner = runner

    def prepare(self, package: str) -> Path:
        raise NotImplementedError

    def commit(self, staging_dir: Path) -> None:
        """Record staged edits. Environments that edit in place do nothing."""

    def discard(self, staging_dir: Path) -> None:
        if not self.cleanup_on_failure:
            return
        logger.debug("Removing staging directory %s", staging_dir)
        try:
            remove_tree(staging_dir)
        except StagingError as exc:
            # The run has already failed; keep its error as the reported one.
            logger.warning("%s", exc)

    def run(self, command: str) -> CommandResult:
        return self.runner(command, cwd=self.project_dir)


def run_in_environment(
    environment: PatchEnvironment,
    package: str,
    patch_fn: PatchFn,
) -> PatchOutcome:
    """Prepare, patch and commit, converting every failure into an outcome.

    A failing patch_fn never reaches commit(), so nothing is recorded by the
    package manager. This function never exits the process.
    """
    logger.info("⌛ Starting to patch package: %s ...", package)
    outcome = PatchOutcome(agent=environment.agent or None, package=package)

    try:
        staging_dir = environment.prepare(package)
    except NextPatchError as exc:
        logger.info("❌ Failed to prepare patch environment")
        logger.error("%s", exc)
        return _failed(outcome, exc)

    outcome.staging_dir = staging_dir

    try:
        report = patch_fn(package, staging_dir)
    except Exception as exc:
        logger.info("❌ Failed to patch files")
        logger.error("%s", exc)
        environment.discard(staging_dir)
        return _failed(outcome, exc)

    outcome.patched_files = list(report.patched)
    outcome.skipped_files = list(report.skipped)

    try:
        environment.commit(staging_dir)
    except NextPatchError as exc:
        logger.info("❌ Failed to commit patch")
        logger.error("%s", exc)
        environment.discard(staging_dir)
        return _failed(outcome, exc)

    logger.info("✅ Successfully patched files")
    outcome.is_success = True
    return outcome


def _failed(outcome: PatchOutcome, exc: BaseException) -> PatchOutcome:
    outcome.is_success = False
    outcome.reason_code = reason_for(exc)
    outcome.error = str(exc)
    return outcome
