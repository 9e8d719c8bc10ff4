"""Apply an ordered list of file patches inside a staging directory.

This is not a per-file-independent operation: the first failure aborts
the remaining patches and propagates to the patch environment, which
decides whether anything gets committed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from nextpatch.patches.base import FilePatch
from nextpatch.patches.next_tsconfig import NEXT_TSCONFIG_PATCHES
from nextpatch.types import MissingTargetFileError

logger = logging.getLogger(__name__)


@dataclass
class PatchReport:
    """Files touched by one apply_patches() call, as package-relative paths."""

    patched: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


PatchFn = Callable[[str, Path], PatchReport]


def _read_target(filepath: Path, relative: str) -> str:
    try:
        content = filepath.read_bytes().decode("utf-8")
    except FileNotFoundError:
        raise MissingTargetFileError(relative)

    if not content:
        raise MissingTargetFileError(relative)
    return content


def apply_patches(
    package: str,
    base_dir: Path,
    patches: Optional[Sequence[FilePatch]] = None,
) -> PatchReport:
    """Apply each patch in order to files under base_dir.

    Files are only rewritten when their content changes, so an already
    patched tree is left untouched. Content is read and written as raw
    UTF-8 so line endings outside the matched lines survive.

    Raises:
        MissingTargetFileError: a target file is absent or empty.
        PatternNotFoundError: a transform no longer matches the file.
    """
    base_dir = Path(base_dir)
    if patches is None:
        patches = NEXT_TSCONFIG_PATCHES
    report = PatchReport()

    for file_patch in patches:
        filepath = base_dir / file_patch.filepath
        relative = f"{package}/{file_patch.filepath}"
        content = _read_target(filepath, relative)

        logger.info("⌛ Patching file: %s ...", relative)
        try:
            patched = file_patch.transform.apply(content)
        except Exception:
            logger.info("❌ Failed to patch file")
            raise

        if patched == content:
            report.skipped.append(relative)
            continue

        filepath.write_bytes(patched.encode("utf-8"))
        report.patched.append(relative)

    return report
