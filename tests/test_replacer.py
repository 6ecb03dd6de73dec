"""Tests for the placeholder substitution engine."""

import os
import stat
import pytest
from pathlib import Path
from unittest.mock import patch

from newproject.exceptions import FileSystemError
from newproject.placeholders.replacer import Replacer


class TestSubstitute:
    """Single-pass multi-literal matching."""

    def test_replaces_every_known_literal(self):
        replacer = Replacer({"NAME": "MyProject", "APP_ID": "com.example.app"})

        result = replacer.substitute("Hello {{NAME}} ({{APP_ID}})")

        assert result == "Hello MyProject (com.example.app)"

    def test_returns_none_without_matches(self):
        assert Replacer({"NAME": "x"}).substitute("nothing {{OTHER}} here") is None

    def test_whitespace_variant_is_not_substituted(self):
        assert Replacer({"NAME": "x"}).substitute("{{ NAME }}") is None

    def test_no_double_substitution(self):
        replacer = Replacer({"A": "{{B}}", "B": "done"})

        assert replacer.substitute("{{A}} {{B}}") == "{{B}} done"

    def test_order_independent(self):
        forward = Replacer({"A": "{{B}}", "B": "{{A}}"})
        backward = Replacer({"B": "{{A}}", "A": "{{B}}"})

        assert forward.substitute("{{A}}{{B}}") == "{{B}}{{A}}"
        assert backward.substitute("{{A}}{{B}}") == "{{B}}{{A}}"

    def test_regex_metacharacters_in_keys_are_literal(self):
        replacer = Replacer({"a.b": "dot", "x*": "star"})

        assert replacer.substitute("{{a.b}} {{axb}} {{x*}}") == "dot {{axb}} star"

    def test_empty_map_is_a_noop(self):
        assert Replacer({}).substitute("{{NAME}}") is None


class TestReplacerApply:
    """Rewriting a directory tree."""

    def build_tree(self, root: Path) -> None:
        (root / "README.md").write_text("Hello {{NAME}} ({{APP_ID}})")
        nested = root / "{{NAME}}"
        nested.mkdir()
        (nested / "config-{{APP_ID}}.txt").write_text("id={{APP_ID}}")

    def test_end_to_end_tree(self, tmp_path):
        self.build_tree(tmp_path)

        Replacer({"NAME": "MyProject", "APP_ID": "com.example.app"}).apply(tmp_path)

        config = tmp_path / "MyProject" / "config-com.example.app.txt"
        assert config.read_text() == "id=com.example.app"
        assert (tmp_path / "README.md").read_text() == "Hello MyProject (com.example.app)"
        assert not (tmp_path / "{{NAME}}").exists()

    def test_nested_directories_renamed_deepest_first(self, tmp_path):
        deep = tmp_path / "{{A}}" / "{{B}}" / "{{A}}-{{B}}"
        deep.mkdir(parents=True)
        (deep / "{{B}}.txt").write_text("{{A}}/{{B}}")

        Replacer({"A": "alpha", "B": "beta"}).apply(tmp_path)

        renamed = tmp_path / "alpha" / "beta" / "alpha-beta" / "beta.txt"
        assert renamed.read_text() == "alpha/beta"

    def test_root_is_never_renamed(self, tmp_path):
        root = tmp_path / "{{NAME}}"
        root.mkdir()
        (root / "file.txt").write_text("{{NAME}}")

        Replacer({"NAME": "renamed"}).apply(root)

        assert root.is_dir()
        assert (root / "file.txt").read_text() == "renamed"

    def test_binary_files_untouched(self, tmp_path):
        nul = tmp_path / "data.bin"
        nul.write_bytes(b"{{NAME}}\x00{{NAME}}")
        latin = tmp_path / "latin.txt"
        latin.write_bytes(b"{{NAME}} caf\xe9")

        Replacer({"NAME": "x"}).apply(tmp_path)

        assert nul.read_bytes() == b"{{NAME}}\x00{{NAME}}"
        assert latin.read_bytes() == b"{{NAME}} caf\xe9"

    def test_unchanged_files_are_not_rewritten(self, tmp_path):
        untouched = tmp_path / "plain.txt"
        untouched.write_text("no placeholders")
        os.utime(untouched, (1_000_000, 1_000_000))

        Replacer({"NAME": "x"}).apply(tmp_path)

        assert untouched.stat().st_mtime == 1_000_000

    def test_file_mode_is_preserved(self, tmp_path):
        script = tmp_path / "run.sh"
        script.write_text("#!/bin/sh\necho {{NAME}}\n")
        script.chmod(0o755)

        Replacer({"NAME": "x"}).apply(tmp_path)

        assert script.read_text() == "#!/bin/sh\necho x\n"
        assert stat.S_IMODE(script.stat().st_mode) == 0o755

    def test_git_directory_untouched(self, tmp_path):
        git_dir = tmp_path / ".git"
        git_dir.mkdir()
        (git_dir / "{{NAME}}").write_text("{{NAME}}")

        Replacer({"NAME": "x"}).apply(tmp_path)

        assert (git_dir / "{{NAME}}").read_text() == "{{NAME}}"

    def test_apply_is_idempotent(self, tmp_path):
        self.build_tree(tmp_path)
        replacer = Replacer({"NAME": "MyProject", "APP_ID": "com.example.app"})

        replacer.apply(tmp_path)
        before = sorted(str(p.relative_to(tmp_path)) for p in tmp_path.rglob("*"))
        replacer.apply(tmp_path)
        after = sorted(str(p.relative_to(tmp_path)) for p in tmp_path.rglob("*"))

        assert before == after
        for path in tmp_path.rglob("*"):
            assert "{{" not in path.name
            if path.is_file():
                assert "{{NAME}}" not in path.read_text()
                assert "{{APP_ID}}" not in path.read_text()

    def test_rename_collision_is_refused(self, tmp_path):
        (tmp_path / "{{NAME}}.txt").write_text("template")
        (tmp_path / "taken.txt").write_text("existing")

        with pytest.raises(FileSystemError) as exc_info:
            Replacer({"NAME": "taken"}).apply(tmp_path)

        assert exc_info.value.path == tmp_path / "taken.txt"
        assert (tmp_path / "taken.txt").read_text() == "existing"

    def test_write_failure_reports_path(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("{{NAME}}")

        with patch("newproject.placeholders.replacer.os.replace", side_effect=PermissionError("denied")):
            with pytest.raises(FileSystemError) as exc_info:
                Replacer({"NAME": "x"}).apply(tmp_path)

        assert exc_info.value.path == target
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert [p.name for p in tmp_path.iterdir()] == ["file.txt"]

    @pytest.mark.parametrize("value", ["../escaped", "nested/inside", "..", "."])
    def test_file_rename_cannot_leave_its_directory(self, tmp_path, value):
        root = tmp_path / "project"
        root.mkdir()
        template = root / "{{X}}.txt" if value not in ("..", ".") else root / "{{X}}"
        template.write_text("content")

        with pytest.raises(FileSystemError) as exc_info:
            Replacer({"X": value}).apply(root)

        assert exc_info.value.path == template
        assert template.read_text() == "content"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["project"]

    def test_directory_rename_cannot_leave_its_directory(self, tmp_path):
        root = tmp_path / "project"
        template_dir = root / "{{X}}"
        template_dir.mkdir(parents=True)
        (template_dir / "file.txt").write_text("content")

        with pytest.raises(FileSystemError):
            Replacer({"X": "../escaped"}).apply(root)

        assert (template_dir / "file.txt").read_text() == "content"
        assert not (tmp_path / "escaped").exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["project"]

    def test_empty_replacement_name_refused(self, tmp_path):
        (tmp_path / "{{X}}").write_text("content")

        with pytest.raises(FileSystemError):
            Replacer({"X": ""}).apply(tmp_path)

        assert (tmp_path / "{{X}}").exists()
