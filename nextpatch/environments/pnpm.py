"""pnpm patch environment.

Uses `pnpm patch --edit-dir` to materialise the package at a deterministic
path under node_modules/.temp, then `pnpm patch-commit` to write the patch
file and record it in the lockfile. The staging directory is removed on
both success and failure.
"""

import logging
from pathlib import Path

from nextpatch.environments.base import CommandRunner, PatchEnvironment, remove_tree
from nextpatch.sandbox.commands import quote, run_command
from nextpatch.types import CommandError

logger = logging.getLogger(__name__)

DEFAULT_STAGING_ROOT = Path("node_modules/.temp")


class PnpmPatchEnvironment(PatchEnvironment):
    agent = "pnpm"
    cleanup_on_failure = True

    def __init__(
        self,
        project_dir: Path,
        runner: CommandRunner = run_command,
        staging_root: Path = DEFAULT_STAGING_ROOT,
    ):
        super().__init__(project_dir, runner)
        self.staging_root = Path(staging_root)

    def staging_path(self, package: str) -> Path:
        return (self.project_dir / self.staging_root / package).resolve()

    def prepare(self, package: str) -> Path:
        staging_dir = self.staging_path(package)
        remove_tree(staging_dir)

        try:
            self.run(f"pnpm patch {quote(package)} --edit-dir {quote(staging_dir)}")
        except CommandError:
            remove_tree(staging_dir)
            raise

        logger.debug("pnpm staging directory ready: %s", staging_dir)
        return staging_dir

    def commit(self, staging_dir: Path) -> None:
        self.run(f"pnpm patch-commit {quote(staging_dir)}")
        remove_tree(staging_dir)
