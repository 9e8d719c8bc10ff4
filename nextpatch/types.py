"""Shared result and error types for a patch run.

Every failure a run can hit is raised as a NextPatchError subclass and
converted exactly once into a PatchOutcome. Only the CLI turns an outcome
into a process exit status.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Optional


class FailureReasonCode(StrEnum):
    """Normalized failure reasons reported in a PatchOutcome."""

    NO_PACKAGE_MANAGER = "no_package_manager"
    STRATEGY_OUTPUT = "strategy_output"
    TARGET_FILE_MISSING = "target_file_missing"
    PATTERN_NOT_FOUND = "pattern_not_found"
    COMMAND_FAILED = "command_failed"
    PATCH_FAILED = "patch_failed"


class NextPatchError(Exception):
    """Base class for all errors raised while patching a package."""

    reason_code: FailureReasonCode = FailureReasonCode.PATCH_FAILED


class CommandError(NextPatchError):
    """Raised when a shelled-out command fails to spawn or exits non-zero.

    Carries stdout/stderr for detailed error reporting.
    """

    reason_code = FailureReasonCode.COMMAND_FAILED

    def __init__(
        self,
        command: str,
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
        message: str = "",
    ):
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            message or f"Command '{command}' failed with exit code {exit_code}"
        )


class StrategyOutputError(NextPatchError):
    """Raised when a package manager's structured output is unusable."""

    reason_code = FailureReasonCode.STRATEGY_OUTPUT


class StagingError(NextPatchError):
    """Raised when a staging directory cannot be removed."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to clean up staging directory {path}: {cause}")


class MissingTargetFileError(NextPatchError):
    """Raised when a file to patch is absent or empty in the staging directory."""

    reason_code = FailureReasonCode.TARGET_FILE_MISSING

    def __init__(self, relative_path: str):
        self.relative_path = relative_path
        super().__init__(f"File does not exist or is empty: {relative_path}")


class PatternNotFoundError(NextPatchError):
    """Raised when neither the unpatched nor the patched signature is present.

    This means the upstream package changed shape and the patch can no
    longer be applied blindly.
    """

    reason_code = FailureReasonCode.PATTERN_NOT_FOUND

    def __init__(self, search: str):
        self.search = search
        super().__init__(f"Search string not found: `{search}`")


def reason_for(exc: BaseException) -> FailureReasonCode:
    """Map an exception raised during a run to its failure reason."""
    if isinstance(exc, NextPatchError):
        return exc.reason_code
    return FailureReasonCode.PATCH_FAILED


@dataclass
class PatchOutcome:
    """Result of one patch run.

    A run is successful only if every patch descriptor applied (or was
    already applied) and the staged changes were committed.
    """

    is_success: bool = False
    reason_code: Optional[FailureReasonCode] = None
    error: Optional[str] = None
    agent: Optional[str] = None
    package: Optional[str] = None
    staging_dir: Optional[Path] = None
    patched_files: list[str] = field(default_factory=list)
    skipped_files: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        reason_code: FailureReasonCode,
        error: str,
        **kwargs,
    ) -> "PatchOutcome":
        return cls(is_success=False, reason_code=reason_code, error=error, **kwargs)

    @property
    def exit_code(self) -> int:
        return 0 if self.is_success else 1

    def to_dict(self) -> dict:
        return {
            "is_success": self.is_success,
            "reason_code": self.reason_code.value if self.reason_code else None,
            "error": self.error,
            "agent": self.agent,
            "package": self.package,
            "staging_dir": str(self.staging_dir) if self.staging_dir else None,
            "patched_files": self.patched_files,
            "skipped_files": self.skipped_files,
        }
