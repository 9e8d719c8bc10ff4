"""Tests for the pnpm patch environment."""

from pathlib import Path
from unittest.mock import patch

import pytest

from nextpatch.environments import PnpmPatchEnvironment, run_in_environment
from nextpatch.environments.base import remove_tree
from nextpatch.patches import apply_patches
from nextpatch.types import CommandError, FailureReasonCode, StagingError
from tests.conftest import ESM_PATH, FakeRunner, pnpm_runner


def _staging(project_dir: Path) -> Path:
    return (project_dir / "node_modules" / ".temp" / "next").resolve()


class TestPnpmSuccess:
    def test_patches_commits_and_cleans_up(self, tmp_path):
        runner = pnpm_runner()
        env = PnpmPatchEnvironment(tmp_path, runner=runner)

        outcome = run_in_environment(env, "next", apply_patches)

        staging = _staging(tmp_path)
        assert outcome.is_success is True
        assert outcome.staging_dir == staging
        assert len(outcome.patched_files) == 2
        assert runner.calls == [
            f"pnpm patch next --edit-dir {staging}",
            f"pnpm patch-commit {staging}",
        ]
        assert not staging.exists()

    def test_removes_stale_staging_directory_first(self, tmp_path):
        staging = _staging(tmp_path)
        staging.mkdir(parents=True)
        (staging / "stale.txt").write_text("left over")
        seen_stale: list[bool] = []

        base = pnpm_runner()

        def on_command(args):
            if args[:2] == ["pnpm", "patch"]:
                seen_stale.append((staging / "stale.txt").exists())
            return base.on_command(args)

        env = PnpmPatchEnvironment(tmp_path, runner=FakeRunner(on_command))
        outcome = run_in_environment(env, "next", apply_patches)

        assert outcome.is_success is True
        assert seen_stale == [False]

    def test_custom_staging_root(self, tmp_path):
        runner = pnpm_runner()
        env = PnpmPatchEnvironment(tmp_path, runner=runner, staging_root=Path(".patches"))

        assert env.staging_path("next") == (tmp_path / ".patches" / "next").resolve()
        outcome = run_in_environment(env, "next", apply_patches)
        assert outcome.is_success is True


class TestPnpmFailure:
    def test_patch_failure_skips_commit_and_cleans_up(self, tmp_path):
        runner = pnpm_runner(esm="export const nothing = 1;\n")
        env = PnpmPatchEnvironment(tmp_path, runner=runner)

        outcome = run_in_environment(env, "next", apply_patches)

        assert outcome.is_success is False
        assert outcome.reason_code == FailureReasonCode.PATTERN_NOT_FOUND
        assert runner.commands_starting_with("pnpm patch-commit") == []
        assert not _staging(tmp_path).exists()

    def test_missing_file_reports_target_file_missing(self, tmp_path):
        def on_command(args):
            if args[:2] == ["pnpm", "patch"]:
                Path(args[args.index("--edit-dir") + 1]).mkdir(parents=True)
            return ""

        env = PnpmPatchEnvironment(tmp_path, runner=FakeRunner(on_command))
        outcome = run_in_environment(env, "next", apply_patches)

        assert outcome.reason_code == FailureReasonCode.TARGET_FILE_MISSING
        assert f"next/{ESM_PATH}" in outcome.error
        assert not _staging(tmp_path).exists()

    def test_prepare_command_failure(self, tmp_path):
        def on_command(args):
            raise CommandError(" ".join(args), exit_code=1, stderr="ERR_PNPM_NO_PKG")

        called: list[Path] = []
        env = PnpmPatchEnvironment(tmp_path, runner=FakeRunner(on_command))
        outcome = run_in_environment(env, "next", lambda pkg, d: called.append(d))

        assert outcome.is_success is False
        assert outcome.reason_code == FailureReasonCode.COMMAND_FAILED
        assert called == []

    def test_commit_failure_cleans_up(self, tmp_path):
        runner = pnpm_runner(fail_commit=True)
        env = PnpmPatchEnvironment(tmp_path, runner=runner)

        outcome = run_in_environment(env, "next", apply_patches)

        assert outcome.is_success is False
        assert outcome.reason_code == FailureReasonCode.COMMAND_FAILED
        assert not _staging(tmp_path).exists()


class TestPnpmStagingCleanupErrors:
    def test_remove_tree_wraps_os_errors(self, tmp_path):
        staging = tmp_path / "staging"
        staging.mkdir()

        with patch("nextpatch.environments.base.shutil.rmtree", side_effect=PermissionError("denied")):
            with pytest.raises(StagingError, match="denied") as exc_info:
                remove_tree(staging)

        assert exc_info.value.path == staging

    def test_remove_tree_ignores_missing_path(self, tmp_path):
        remove_tree(tmp_path / "absent")

    def test_stale_staging_removal_failure_becomes_outcome(self, tmp_path):
        _staging(tmp_path).mkdir(parents=True)
        runner = pnpm_runner()
        called: list[Path] = []
        env = PnpmPatchEnvironment(tmp_path, runner=runner)

        with patch("nextpatch.environments.base.shutil.rmtree", side_effect=PermissionError("denied")):
            outcome = run_in_environment(env, "next", lambda pkg, d: called.append(d))

        assert outcome.is_success is False
        assert outcome.reason_code == FailureReasonCode.PATCH_FAILED
        assert "Failed to clean up staging directory" in outcome.error
        assert called == []
        assert runner.calls == []

    def test_cleanup_failure_after_commit_becomes_outcome(self, tmp_path):
        runner = pnpm_runner()
        env = PnpmPatchEnvironment(tmp_path, runner=runner)

        with patch("nextpatch.environments.base.shutil.rmtree", side_effect=PermissionError("denied")):
            outcome = run_in_environment(env, "next", apply_patches)

        assert outcome.is_success is False
        assert outcome.reason_code == FailureReasonCode.PATCH_FAILED
        assert "denied" in outcome.error
        assert len(runner.commands_starting_with("pnpm patch-commit")) == 1
