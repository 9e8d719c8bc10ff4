"""Base types for file patches.

A FilePatch pairs a path inside the package with a PatchTransform. The
transform receives the full file content and returns the new content, or
raises if the file no longer looks the way the patch expects.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class PatchTransform(ABC):
    """Abstract base class for content transformations.

    Implementations must be idempotent: applying a transform to its own
    output returns that output unchanged.
    """

    #: Human-readable description of what the transform looks for
    search: str = ""

    @abstractmethod
    def apply(self, content: str) -> str:
        """Return the transformed content.

        Raises:
            PatternNotFoundError: if the target construct is missing in both
                its unpatched and patched form.
        """
        ...

    def is_applied(self, content: str) -> bool:
        """Return True if content already carries this patch."""
        return False


@dataclass(frozen=True)
class FilePatch:
    """One file to patch, relative to the package root."""

    filepath: str
    transform: PatchTransform
