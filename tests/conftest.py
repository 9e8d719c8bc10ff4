"""Shared fixtures: a minimal installed `next` package and a fake command runner."""

import shlex
from pathlib import Path
from typing import Callable, Optional

import pytest

from nextpatch.sandbox.commands import CommandResult
from nextpatch.types import CommandError

ESM_PATH = "dist/esm/lib/typescript/writeConfigurationDefaults.js"
CJS_PATH = "dist/lib/typescript/writeConfigurationDefaults.js"

ESM_SOURCE = """\
export async function writeConfigurationDefaults(ts, tsConfigPath, isFirstTimeSetup) {
    if (isFirstTimeSetup) {
        await fs.writeFile(tsConfigPath, '{}' + os.EOL);
    }
    const userTsConfig = CommentJson.parse(await fs.readFile(tsConfigPath, 'utf8'));
    await fs.writeFile(tsConfigPath, CommentJson.stringify(userTsConfig, null, 2) + os.EOL);
    Log.info('');
}
"""

CJS_SOURCE = """\
async function writeConfigurationDefaults(ts, tsConfigPath, isFirstTimeSetup) {
    if (isFirstTimeSetup) {
        await _fs.promises.writeFile(tsConfigPath, '{}' + _os.default.EOL);
    }
    const userTsConfig = _commentjson.parse(await _fs.promises.readFile(tsConfigPath, 'utf8'));
    await _fs.promises.writeFile(tsConfigPath, _commentjson.stringify(userTsConfig, null, 2) + _os.default.EOL);
    _log.info('');
}
"""


def write_next_package(package_dir: Path, esm: str = ESM_SOURCE, cjs: str = CJS_SOURCE) -> Path:
    """Write the two target files of a `next` build under package_dir."""
    for relative, content in ((ESM_PATH, esm), (CJS_PATH, cjs)):
        target = package_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return package_dir


@pytest.fixture
def next_package(tmp_path) -> Path:
    """An unpatched `next` package directory."""
    return write_next_package(tmp_path / "next")


class FakeRunner:
    """Records commands and fakes pnpm/yarn patch workflows.

    `on_command` may return stdout for a command, or raise to simulate a
    failing process.
    """

    def __init__(self, on_command: Optional[Callable[[list[str]], str]] = None):
        self.calls: list[str] = []
        self.on_command = on_command

    def __call__(self, command: str, cwd: Optional[Path] = None) -> CommandResult:
        self.calls.append(command)
        stdout = self.on_command(shlex.split(command)) if self.on_command else ""
        return CommandResult(command=command, stdout=stdout or "")

    def commands_starting_with(self, prefix: str) -> list[str]:
        return [call for call in self.calls if call.startswith(prefix)]


def pnpm_runner(esm: str = ESM_SOURCE, cjs: str = CJS_SOURCE, fail_commit: bool = False) -> FakeRunner:
    """A runner where `pnpm patch --edit-dir` materialises the package."""

    def on_command(args: list[str]) -> str:
        if args[:2] == ["pnpm", "patch"]:
            edit_dir = Path(args[args.index("--edit-dir") + 1])
            write_next_package(edit_dir, esm=esm, cjs=cjs)
        if args[:2] == ["pnpm", "patch-commit"] and fail_commit:
            raise CommandError(" ".join(args), exit_code=1, stderr="ERR_PNPM_PATCH")
        return ""

    return FakeRunner(on_command)
