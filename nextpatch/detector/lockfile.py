"""Lock file detection.

Walks up from the project directory and returns the package manager of
the first lock file found. Within one directory, lock files are checked
in priority order:

1. pnpm-lock.yaml      -> pnpm
2. yarn.lock           -> yarn (yarn@berry for v2+ lockfiles)
3. package-lock.json   -> npm
4. bun.lock/bun.lockb  -> bun
5. deno.lock           -> deno
6. npm-shrinkwrap.json -> npm
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from nextpatch.detector.package_json import (
    parse_package_manager_field,
    read_package_json,
    resolve_agent,
)
from nextpatch.detector.types import DetectionResult

logger = logging.getLogger(__name__)

LOCK_FILES: list[tuple[str, str]] = [
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
    ("bun.lock", "bun"),
    ("bun.lockb", "bun"),
    ("deno.lock", "deno"),
    ("npm-shrinkwrap.json", "npm"),
]


def is_berry_lockfile(lock_path: Path) -> bool:
    """Return True if a yarn.lock was written by yarn 2+.

    Berry lockfiles are valid YAML with a top-level `__metadata` key.
    Classic (v1) lockfiles are not YAML and usually fail to parse.
    """
    try:
        data = yaml.safe_load(lock_path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, UnicodeDecodeError):
        return False
    return isinstance(data, dict) and "__metadata" in data


def detect_from_lockfile(project_dir: Path) -> Optional[DetectionResult]:
    """Detect the package manager from the nearest lock file."""
    project_dir = Path(project_dir).resolve()

    for directory in (project_dir, *project_dir.parents):
        for filename, name in LOCK_FILES:
            lock_path = directory / filename
            if not lock_path.is_file():
                continue
            logger.debug("Found lock file: %s", lock_path)
            return _classify(project_dir, lock_path, name)

    return None


def _classify(project_dir: Path, lock_path: Path, name: str) -> DetectionResult:
    """Refine a lock file hit with the manifest's packageManager version."""
    version: Optional[str] = None
    field = parse_package_manager_field(read_package_json(project_dir))
    if field is not None and field[0] == name:
        version = field[1]

    agent = resolve_agent(name, version) or name
    if name == "yarn" and version is None and is_berry_lockfile(lock_path):
        agent = "yarn@berry"

    return DetectionResult(
        name=name,
        agent=agent,
        version=version,
        strategy="lockfile",
        source=f"lock file: {lock_path.name}",
    )
