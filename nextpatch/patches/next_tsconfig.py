"""Patches that stop `next` from rewriting the project's tsconfig.json.

`writeConfigurationDefaults` serialises its suggested compiler options and
writes them over the user's tsconfig.json. Commenting out the write call
keeps the check but drops the side effect. The ESM and CommonJS builds
compile the call differently, so each gets its own pattern.
"""

from nextpatch.patches.base import FilePatch
from nextpatch.patches.comment_out import CommentOutTransform

SEARCH = "writeFile or writeFileSync"

# await fs.writeFile(tsConfigPath, JSON.stringify(userTsConfig, null, 2) + os.EOL)
ESM_WRITE_CALL = r"(?:await )?(?:fs\.)?writeFile(?:Sync)?\(.*stringify\("

# await (0, _fs.promises.writeFile)(tsConfigPath, (0, _commentjson.stringify)(...))
CJS_WRITE_CALL = (
    r"(?:await )?(?:\(0, )?(?:_fs\.)?(?:promises\.)?"
    r"writeFile(?:Sync)?(?:\))?\(.*stringify\("
)

NEXT_TSCONFIG_PATCHES: list[FilePatch] = [
    FilePatch(
        filepath="dist/esm/lib/typescript/writeConfigurationDefaults.js",
        transform=CommentOutTransform(ESM_WRITE_CALL, search=SEARCH),
    ),
    FilePatch(
        filepath="dist/lib/typescript/writeConfigurationDefaults.js",
        transform=CommentOutTransform(CJS_WRITE_CALL, search=SEARCH),
    ),
]
