"""Tests for the git clone collaborator."""

import shutil
import pytest
from pathlib import Path
from unittest.mock import MagicMock, patch

from newproject.exceptions import CloneError
from newproject.git import build_clone_command, clone_repo, normalize_repo


class TestNormalizeRepo:
    """Source locator normalization."""

    def test_owner_repo_shorthand(self):
        assert normalize_repo("m1guelpf/template") == "https://github.com/m1guelpf/template"

    def test_whitespace_is_trimmed(self):
        assert normalize_repo("  owner/repo \n") == "https://github.com/owner/repo"

    def test_urls_pass_through(self):
        assert normalize_repo("https://gitlab.com/a/b.git") == "https://gitlab.com/a/b.git"
        assert normalize_repo("git@github.com:a/b.git") == "git@github.com:a/b.git"

    def test_local_path_passes_through(self, tmp_path):
        assert normalize_repo(str(tmp_path)) == str(tmp_path)


class TestBuildCloneCommand:
    """git clone argv construction."""

    def test_remote_clone_is_shallow(self, tmp_path):
        command = build_clone_command("https://github.com/a/b", None, tmp_path / "dest")

        assert command == ["git", "clone", "--quiet", "--depth", "1",
                           "https://github.com/a/b", str(tmp_path / "dest")]

    def test_local_clone_with_branch(self, tmp_path):
        command = build_clone_command(str(tmp_path), "dev", tmp_path / "dest")

        assert "--depth" not in command
        assert command[-4:] == ["--branch", "dev", str(tmp_path), str(tmp_path / "dest")]


class TestCloneRepo:
    """Failure handling."""

    def test_failure_raises_with_stderr_and_cleans_up(self, tmp_path):
        destination = tmp_path / "dest"

        def fake_run(command, **kwargs):
            destination.mkdir()
            (destination / "partial").write_text("x")
            return MagicMock(returncode=128, stderr="fatal: repository not found\n")

        with patch("newproject.git.subprocess.run", side_effect=fake_run):
            with pytest.raises(CloneError) as exc_info:
                clone_repo("owner/missing", None, destination)

        assert "https://github.com/owner/missing" in str(exc_info.value)
        assert "repository not found" in str(exc_info.value)
        assert not destination.exists()

    def test_missing_git_executable(self, tmp_path):
        with patch("newproject.git.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(CloneError):
                clone_repo("owner/repo", None, tmp_path / "dest")

    def test_disables_terminal_prompt(self, tmp_path):
        with patch("newproject.git.subprocess.run", return_value=MagicMock(returncode=0)) as run:
            clone_repo("owner/repo", "main", tmp_path / "dest")

        assert run.call_args.kwargs["env"]["GIT_TERMINAL_PROMPT"] == "0"
