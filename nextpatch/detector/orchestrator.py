"""Detector orchestrator: tries detection strategies in order.

Strategy names:
  install-metadata      -> node_modules markers from the last install
  lockfile              -> nearest lock file
  packageManager-field  -> package.json `packageManager`
  devEngines-field      -> package.json `devEngines.packageManager`

The first strategy that returns a result wins.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from nextpatch.detector.install_metadata import detect_from_install_metadata
from nextpatch.detector.lockfile import detect_from_lockfile
from nextpatch.detector.package_json import (
    detect_from_dev_engines_field,
    detect_from_package_manager_field,
)
from nextpatch.detector.types import DetectionResult

logger = logging.getLogger(__name__)

DetectionStrategy = Callable[[Path], Optional[DetectionResult]]

STRATEGY_REGISTRY: dict[str, DetectionStrategy] = {
    "install-metadata": detect_from_install_metadata,
    "lockfile": detect_from_lockfile,
    "packageManager-field": detect_from_package_manager_field,
    "devEngines-field": detect_from_dev_engines_field,
}

DEFAULT_STRATEGIES: tuple[str, ...] = (
    "install-metadata",
    "lockfile",
    "packageManager-field",
    "devEngines-field",
)


def detect(
    project_dir: Path,
    strategies: Sequence[str] = DEFAULT_STRATEGIES,
) -> Optional[DetectionResult]:
    """Return the first successful detection, or None.

    Raises ValueError for an unknown strategy name before any probing.
    """
    unknown = [name for name in strategies if name not in STRATEGY_REGISTRY]
    if unknown:
        raise ValueError(f"Unknown detection strategies: {', '.join(unknown)}")

    project_dir = Path(project_dir)
    for name in strategies:
        result = STRATEGY_REGISTRY[name](project_dir)
        if result is not None:
            logger.debug(
                "Detected package manager: %s (agent=%s, %s)",
                result.name, result.agent, result.source,
            )
            return result

    logger.debug("No package manager detected in %s", project_dir)
    return None
