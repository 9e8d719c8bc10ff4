"""Yarn Berry patch environment.

`yarn patch --json` unpacks the package into a temporary folder chosen by
yarn and reports it as `{"locator": ..., "path": ...}`. The staging folder
is never removed here: `yarn patch-commit` consumes it on success, and a
failed run leaves it behind for inspection.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from nextpatch.environments.base import PatchEnvironment
from nextpatch.sandbox.commands import quote
from nextpatch.types import StrategyOutputError

logger = logging.getLogger(__name__)


class YarnPatchOutput(BaseModel):
    """One JSON line printed by `yarn patch --json`."""

    model_config = ConfigDict(extra="ignore")

    locator: str = ""
    path: str = ""


def parse_patch_output(stdout: str) -> Path:
    """Extract the staging path from `yarn patch --json` output.

    Yarn may print several JSON lines; the last one carrying a non-empty
    path wins.

    Raises:
        StrategyOutputError: no line parses, or no parsed line has a path.
    """
    payloads: list[YarnPatchOutput] = []
    for line in stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            payloads.append(YarnPatchOutput.model_validate_json(line))
        except ValidationError:
            continue

    if not payloads:
        raise StrategyOutputError("Failed to parse yarn patch output")

    paths = [payload.path for payload in payloads if payload.path.strip()]
    if not paths:
        raise StrategyOutputError("Failed to get yarn patch temp path")

    return Path(paths[-1].strip())


class YarnBerryPatchEnvironment(PatchEnvironment):
    agent = "yarn@berry"
    cleanup_on_failure = False

    def prepare(self, package: str) -> Path:
        result = self.run(f"yarn patch --json {quote(package)}")
        staging_dir = parse_patch_output(result.stdout)
        logger.debug("yarn staging directory ready: %s", staging_dir)
        return staging_dir

    def commit(self, staging_dir: Path) -> None:
        self.run(f"yarn patch-commit -s {quote(staging_dir)}")
