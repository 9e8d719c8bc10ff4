"""File patches applied to the target package.

Each FilePatch pairs a package-relative path with an idempotent
PatchTransform.
"""

from nextpatch.patches.applicator import PatchFn, PatchReport, apply_patches
from nextpatch.patches.base import FilePatch, PatchTransform
from nextpatch.patches.comment_out import CommentOutTransform
from nextpatch.patches.next_tsconfig import NEXT_TSCONFIG_PATCHES

__all__ = [
    "apply_patches",
    "CommentOutTransform",
    "FilePatch",
    "NEXT_TSCONFIG_PATCHES",
    "PatchFn",
    "PatchReport",
    "PatchTransform",
]
