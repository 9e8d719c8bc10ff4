"""Detector module for identifying the active package manager.

Public API:
    detect(project_dir, strategies) -> DetectionResult | None
"""

from nextpatch.detector.orchestrator import DEFAULT_STRATEGIES, detect
from nextpatch.detector.types import DetectionResult

__all__ = ["detect", "DEFAULT_STRATEGIES", "DetectionResult"]
