"""package.json lookup and package manager field parsing.

Handles both the corepack `packageManager` field ("pnpm@9.1.0") and the
`devEngines.packageManager` field, which may be a single object or a list
of objects with `name` and `version`.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from nextpatch.detector.types import AGENTS, DetectionResult

logger = logging.getLogger(__name__)

_MAJOR_VERSION = re.compile(r"^\D*(\d+)")


def find_up(start_dir: Path, filename: str) -> Optional[Path]:
    """Return the first `filename` found in start_dir or any parent."""
    start_dir = Path(start_dir).resolve()
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def read_package_json(project_dir: Path) -> Optional[dict]:
    """Load the nearest package.json, or None if absent or unreadable."""
    pkg_path = find_up(project_dir, "package.json")
    if pkg_path is None:
        return None

    try:
        data = json.loads(pkg_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Failed to parse %s: %s", pkg_path, exc)
        return None

    return data if isinstance(data, dict) else None


def major_version(version: Optional[str]) -> Optional[int]:
    """Extract the major version from strings like "4.1.0", "^8", "v1.22"."""
    if not version:
        return None
    match = _MAJOR_VERSION.match(version.strip())
    return int(match.group(1)) if match else None


def resolve_agent(name: str, version: Optional[str] = None) -> Optional[str]:
    """Map a package manager name and version to an agent identifier.

    Yarn 2+ is "yarn@berry" and pnpm below 7 is "pnpm@6". Unknown names
    return None.
    """
    name = name.strip().lower()
    major = major_version(version)

    if name == "yarn" and major is not None and major > 1:
        return "yarn@berry"
    if name == "pnpm" and major is not None and major < 7:
        return "pnpm@6"
    if name in AGENTS:
        return name
    return None


def _split_name_version(value: str) -> tuple[str, Optional[str]]:
    """Split "name@version+sha" into (name, version)."""
    value = value.strip()
    # Package manager names are never scoped; the first "@" starts the version.
    name, sep, version = value.partition("@")
    if not sep:
        return name, None
    version = version.split("+", 1)[0]
    return name, version or None


def parse_package_manager_field(data: Optional[dict]) -> Optional[tuple[str, Optional[str]]]:
    """Return (name, version) from the `packageManager` field."""
    if not data:
        return None
    field = data.get("packageManager")
    if not isinstance(field, str) or not field.strip():
        return None
    return _split_name_version(field)


def parse_dev_engines_field(data: Optional[dict]) -> Optional[tuple[str, Optional[str]]]:
    """Return (name, version) from `devEngines.packageManager`.

    When a list is given, the first entry with a name wins.
    """
    if not data:
        return None
    dev_engines = data.get("devEngines")
    if not isinstance(dev_engines, dict):
        return None

    entries = dev_engines.get("packageManager")
    if isinstance(entries, dict):
        entries = [entries]
    if not isinstance(entries, list):
        return None

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        if isinstance(name, str) and name.strip():
            version = entry.get("version")
            return name.strip(), version if isinstance(version, str) else None
    return None


def detect_from_package_manager_field(project_dir: Path) -> Optional[DetectionResult]:
    """Detect the package manager from the `packageManager` manifest field."""
    parsed = parse_package_manager_field(read_package_json(project_dir))
    if parsed is None:
        return None

    name, version = parsed
    agent = resolve_agent(name, version)
    if agent is None:
        logger.warning("Unsupported packageManager field value: %s", name)
        return None

    return DetectionResult(
        name=name,
        agent=agent,
        version=version,
        strategy="packageManager-field",
        source="package.json packageManager field",
    )


def detect_from_dev_engines_field(project_dir: Path) -> Optional[DetectionResult]:
    """Detect the package manager from `devEngines.packageManager`."""
    parsed = parse_dev_engines_field(read_package_json(project_dir))
    if parsed is None:
        return None

    name, version = parsed
    agent = resolve_agent(name, version)
    if agent is None:
        logger.warning("Unsupported devEngines.packageManager name: %s", name)
        return None

    return DetectionResult(
        name=name,
        agent=agent,
        version=version,
        strategy="devEngines-field",
        source="package.json devEngines.packageManager",
    )
