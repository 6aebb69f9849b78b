"""Tests for CLI module"""

from unittest.mock import MagicMock, patch

import click
import pytest
from click.testing import CliRunner

from repo2file.cli import _die, cli, default_output_path, split_list
from repo2file.domain.errors import AcquisitionError


@pytest.fixture
def source_tree(tmp_path):
    root = tmp_path / "repo"
    (root / "src").mkdir(parents=True)
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "src" / "main.rs").write_text("fn main(){}", encoding="utf-8")
    (root / "node_modules" / "pkg" / "index.js").write_text("x", encoding="utf-8")
    (root / "Cargo.lock").write_text("lock", encoding="utf-8")
    return root


class TestHelpers:
    """Tests for CLI helper functions"""

    def test_die_raises_click_exception(self):
        """Test _die raises ClickException"""
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error")

    def test_die_with_exception(self):
        """Test _die with exception in verbose mode"""
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error", verbose=True, exc=ValueError("boom"))

    def test_split_list(self):
        """Test comma lists are flattened and blanks dropped"""
        assert split_list(None, None, ("a.txt,b.txt", " c ,", "")) == ("a.txt", "b.txt", "c")
        assert split_list(None, None, ()) == ()

    def test_default_output_path(self, tmp_path):
        """Test output is named after the working directory"""
        project = tmp_path / "myproject"
        assert default_output_path(project) == project / "myproject.txt"


class TestCommand:
    """Tests for the repo2file command"""

    def test_defaults(self, source_tree, tmp_path):
        """Test default run writes only main.rs"""
        out = tmp_path / "out.txt"
        runner = CliRunner()

        result = runner.invoke(cli, [str(source_tree), "--output", str(out)])

        assert result.exit_code == 0, result.output
        content = out.read_text(encoding="utf-8")
        assert content == f"\n\n// File: {source_tree / 'src' / 'main.rs'}\n\nfn main(){{}}"
        assert "Files included: 1" in result.output

    def test_include_files(self, source_tree, tmp_path):
        """Test --include-files *.rs"""
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(
            cli, [str(source_tree), "--include-files", "*.rs", "--output", str(out)]
        )

        assert result.exit_code == 0, result.output
        content = out.read_text(encoding="utf-8")
        assert content.count("// File: ") == 1
        assert "index.js" not in content

    def test_include_files_bypasses_defaults(self, source_tree, tmp_path):
        """Test include list can select a file excluded by default"""
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(
            cli, [str(source_tree), "--include-files", "Cargo.lock,main.rs", "-o", str(out)]
        )

        assert result.exit_code == 0, result.output
        content = out.read_text(encoding="utf-8")
        assert "Cargo.lock" in content
        assert "main.rs" in content

    def test_ignore_options(self, source_tree, tmp_path):
        """Test --ignore-files and --ignore-dirs"""
        (source_tree / "src" / "lib.rs").write_text("lib", encoding="utf-8")
        (source_tree / "gen").mkdir()
        (source_tree / "gen" / "out.rs").write_text("gen", encoding="utf-8")
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(
            cli,
            [str(source_tree), "--ignore-files", "lib.rs", "--ignore-dirs", "gen", "-o", str(out)],
        )

        assert result.exit_code == 0, result.output
        content = out.read_text(encoding="utf-8")
        assert "main.rs" in content
        assert "lib.rs" not in content
        assert "out.rs" not in content

    def test_conflicting_options_rejected(self, source_tree, tmp_path):
        """Test include and ignore together fail before any output is created"""
        out = tmp_path / "out.txt"

        with patch("repo2file.cli.ConfigManager") as mock_config_manager:
            result = CliRunner().invoke(
                cli,
                [str(source_tree), "--include-files", "x", "--ignore-dirs", "y", "-o", str(out)],
            )

        assert result.exit_code != 0
        assert "--include-files" in result.output
        assert not out.exists()
        mock_config_manager.assert_not_called()

    def test_conflict_with_ignore_files(self, tmp_path):
        """Test include and --ignore-files conflict even for a missing input"""
        out = tmp_path / "out.txt"
        result = CliRunner().invoke(
            cli, ["nowhere", "--include-files", "x", "--ignore-files", "y", "-o", str(out)]
        )
        assert result.exit_code == 2
        assert not out.exists()

    def test_default_output_in_cwd(self, source_tree, tmp_path, monkeypatch):
        """Test output defaults to <cwd>/<cwd name>.txt"""
        workdir = tmp_path / "work"
        workdir.mkdir()
        monkeypatch.chdir(workdir)

        result = CliRunner().invoke(cli, [str(source_tree)])

        assert result.exit_code == 0, result.output
        assert (workdir / "work.txt").exists()

    def test_unreadable_file_fails(self, source_tree, tmp_path):
        """Test a selected file that is not valid text gives a non-zero exit"""
        (source_tree / "src" / "bad.rs").write_bytes(b"\xff\xfe")
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(cli, [str(source_tree), "-o", str(out)])

        assert result.exit_code == 1
        assert "bad.rs" in result.output

    def test_invalid_glob_fails(self, source_tree, tmp_path):
        """Test malformed user pattern is reported as an error"""
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(
            cli, [str(source_tree), "--ignore-files", "[abc", "-o", str(out)]
        )

        assert result.exit_code == 1
        assert "unclosed character class" in result.output
        assert not out.exists()

    def test_missing_config_file(self, source_tree, tmp_path):
        """Test explicit config path must exist"""
        result = CliRunner().invoke(
            cli, [str(source_tree), "--config", str(tmp_path / "nope.yml"), "-o", str(tmp_path / "o.txt")]
        )
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_config_file_used(self, source_tree, tmp_path):
        """Test config file replaces the built-in exclusions"""
        config = tmp_path / "cfg.yml"
        config.write_text("ignore:\n  files: []\n  dirs: []\n", encoding="utf-8")
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(cli, [str(source_tree), "--config", str(config), "-o", str(out)])

        assert result.exit_code == 0, result.output
        content = out.read_text(encoding="utf-8")
        assert "Cargo.lock" in content
        assert "index.js" in content

    @patch("repo2file.cli.RepositoryAcquirer")
    def test_remote_input_is_cloned(self, mock_acquirer_cls, source_tree, tmp_path):
        """Test GitHub URL is acquired and the working copy walked"""
        acquirer = MagicMock()
        acquirer.is_remote.return_value = True
        acquirer.acquire.return_value.__enter__.return_value = source_tree
        acquirer.acquire.return_value.__exit__.return_value = False
        mock_acquirer_cls.from_config.return_value = acquirer
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(cli, ["https://github.com/o/r", "-o", str(out)])

        assert result.exit_code == 0, result.output
        acquirer.acquire.assert_called_once_with("https://github.com/o/r")
        assert "main.rs" in out.read_text(encoding="utf-8")

    @patch("repo2file.cli.RepositoryAcquirer")
    def test_acquisition_failure(self, mock_acquirer_cls, tmp_path):
        """Test clone failure exits non-zero without output"""
        acquirer = MagicMock()
        acquirer.is_remote.return_value = True
        acquirer.acquire.side_effect = AcquisitionError("Failed to clone repository")
        mock_acquirer_cls.from_config.return_value = acquirer
        out = tmp_path / "out.txt"

        result = CliRunner().invoke(cli, ["https://github.com/o/missing", "-o", str(out)])

        assert result.exit_code == 1
        assert "Failed to clone repository" in result.output
        assert not out.exists()
