"""Install metadata detection.

Package managers leave marker files behind after an install. These are
the most reliable signal because they describe what actually produced
node_modules, regardless of what the manifest claims.
"""

import logging
from pathlib import Path
from typing import Optional

from nextpatch.detector.types import DetectionResult

logger = logging.getLogger(__name__)

# Marker path (relative to the project root) -> (name, agent).
# Order matters: first match wins.
INSTALL_MARKERS: list[tuple[str, str, str]] = [
    ("node_modules/.deno", "deno", "deno"),
    ("node_modules/.pnpm", "pnpm", "pnpm"),
    ("node_modules/.yarn-state.yml", "yarn", "yarn@berry"),
    ("node_modules/.yarn_integrity", "yarn", "yarn"),
    ("node_modules/.package-lock.json", "npm", "npm"),
    ("node_modules/.bun-tag", "bun", "bun"),
    (".pnp.cjs", "yarn", "yarn@berry"),
    (".pnp.js", "yarn", "yarn@berry"),
]


def detect_from_install_metadata(project_dir: Path) -> Optional[DetectionResult]:
    """Detect the package manager from files left by the last install."""
    project_dir = Path(project_dir)

    for marker, name, agent in INSTALL_MARKERS:
        if (project_dir / marker).exists():
            logger.debug("Found install marker: %s", marker)
            return DetectionResult(
                name=name,
                agent=agent,
                strategy="install-metadata",
                source=f"install metadata: {marker}",
            )

    return None
