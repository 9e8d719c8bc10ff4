"""Template: comment out a statement matched by a regular expression.

Transforms:
    fs.writeFileSync(path, JSON.stringify(config));
Into:
    // fs.writeFileSync(path, JSON.stringify(config));

Leading indentation is preserved. Content that already has the statement
commented out is returned unchanged.
"""

import logging
import re

from nextpatch.patches.base import PatchTransform
from nextpatch.types import PatternNotFoundError

logger = logging.getLogger(__name__)

COMMENT_MARKER = "// "


class CommentOutTransform(PatchTransform):
    """Prefix every line matching `statement` with a line comment.

    `statement` is the regex for the statement itself, without indentation.
    It is anchored to the start of a line and compiled twice: once for the
    live form and once behind the comment marker.
    """

    def __init__(self, statement: str, search: str):
        self.search = search
        self.original = re.compile(rf"^([ \t]*)({statement})", re.MULTILINE)
        self.patched = re.compile(
            rf"^([ \t]*){re.escape(COMMENT_MARKER)}({statement})",
            re.MULTILINE,
        )

    def is_applied(self, content: str) -> bool:
        return (
            self.original.search(content) is None
            and self.patched.search(content) is not None
        )

    def apply(self, content: str) -> str:
        if self.is_applied(content):
            logger.info("✅ File already patched, skipping ...")
            return content

        if self.original.search(content) is None:
            raise PatternNotFoundError(self.search)

        return self.original.sub(rf"\1{COMMENT_MARKER}\2", content)
