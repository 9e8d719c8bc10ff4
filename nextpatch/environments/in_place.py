"""In-place patch environment for managers without a patch workflow.

Edits the installed package under node_modules directly. Nothing is
isolated and nothing is committed, so the fix is lost on reinstall.
"""

from pathlib import Path

from nextpatch.environments.base import PatchEnvironment


class InPlacePatchEnvironment(PatchEnvironment):
    cleanup_on_failure = False

    def prepare(self, package: str) -> Path:
        return (self.project_dir / "node_modules" / package).resolve()
