"""Tests for dmc CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from dmc.cli.commands.config import mask_api_key
from dmc.cli.main import cli
from dmc.core.exceptions import GeminiHTTPError
from tests.helpers import AUTHOR, git, make_commit


class TestMaskApiKey:
    """Test API key masking."""

    def test_long_key(self):
        """Test first and last four characters are kept."""
        assert mask_api_key("abcd12345678") == "abcd****5678"

    def test_short_key(self):
        """Test keys under eight characters are fully hidden."""
        assert mask_api_key("abc") == "***"
        assert mask_api_key("1234567") == "***"

    def test_eight_character_key(self):
        """Test the boundary length is masked in the middle."""
        assert mask_api_key("abcdefgh") == "abcd****efgh"

    def test_empty_key(self):
        """Test an unset key."""
        assert mask_api_key("") == "<not set>"


class TestCLI:
    """Test top-level CLI behaviour."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_cli_help(self):
        """Test CLI help output."""
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "dmc: Daily Message Creator" in result.output
        assert "generate" in result.output
        assert "config" in result.output

    def test_version(self):
        """Test the version option."""
        result = self.runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "dmc" in result.output

    def test_verbose_flag(self):
        """Test verbose flag."""
        result = self.runner.invoke(cli, ["--verbose", "--help"])
        assert result.exit_code == 0


class TestConfigCommands:
    """Test config show/set/path."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_show_fresh_environment(self, isolated_env: Path):
        """Test config show creates the default file on first run."""
        config_file = isolated_env / "dmc" / "config.json"
        assert not config_file.exists()

        result = self.runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert config_file.exists()
        assert "API Key: <not set>" in result.output
        assert "Default Template: report" in result.output
        for key in ("daily", "weekly", "monthly", "report", "transcript", "summary"):
            assert key in result.output

        data = json.loads(config_file.read_text())
        assert list(data["intervals"]) == ["daily", "weekly", "monthly"]
        assert list(data["templates"]) == ["report", "transcript", "summary"]
        assert data["default_type"] == "report"

    def test_show_masks_key(self, saved_config: Path):
        """Test the stored API key is masked."""
        result = self.runner.invoke(cli, ["--config", str(saved_config), "config", "show"])

        assert result.exit_code == 0
        assert "stor****3456" in result.output
        assert "stored-key-123456" not in result.output
        assert AUTHOR in result.output

    def test_show_env_key(self, saved_config: Path, monkeypatch: pytest.MonkeyPatch):
        """Test GEMINI_API_KEY is shown in place of the stored key."""
        monkeypatch.setenv("GEMINI_API_KEY", "envkey-abcdefgh")

        result = self.runner.invoke(cli, ["--config", str(saved_config), "config", "show"])

        assert result.exit_code == 0
        assert "envk****efgh" in result.output

    def test_set_author(self, config_path: Path):
        """Test setting the author persists it."""
        result = self.runner.invoke(
            cli, ["--config", str(config_path), "config", "set", "author", "me@example.com"]
        )

        assert result.exit_code == 0
        assert "Set author = me@example.com" in result.output
        assert json.loads(config_path.read_text())["author"] == "me@example.com"

    def test_set_default_type(self, saved_config: Path):
        """Test setting a known template as default."""
        result = self.runner.invoke(
            cli, ["-c", str(saved_config), "config", "set", "default_type", "summary"]
        )

        assert result.exit_code == 0
        assert json.loads(saved_config.read_text())["default_type"] == "summary"

    def test_set_unknown_template(self, saved_config: Path):
        """Test an unknown template is rejected and nothing is written."""
        before = saved_config.read_text()

        result = self.runner.invoke(
            cli, ["-c", str(saved_config), "config", "set", "default_type", "poem"]
        )

        assert result.exit_code != 0
        assert "unknown template: poem" in result.output
        assert saved_config.read_text() == before

    def test_set_unknown_key(self, saved_config: Path):
        """Test an unknown key is rejected and nothing is written."""
        before = saved_config.read_text()

        result = self.runner.invoke(
            cli, ["-c", str(saved_config), "config", "set", "language", "tr"]
        )

        assert result.exit_code != 0
        assert "unknown config key: language" in result.output
        assert saved_config.read_text() == before

    def test_set_api_key_is_masked(self, saved_config: Path):
        """Test the confirmation does not echo the key."""
        result = self.runner.invoke(
            cli, ["-c", str(saved_config), "config", "set", "api_key", "new-secret-key"]
        )

        assert result.exit_code == 0
        assert "new-****-key" in result.output
        assert json.loads(saved_config.read_text())["api_key"] == "new-secret-key"

    def test_set_does_not_persist_env_key(
        self, saved_config: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test the environment override is never written back."""
        monkeypatch.setenv("GEMINI_API_KEY", "env-only-key")

        result = self.runner.invoke(
            cli, ["-c", str(saved_config), "config", "set", "author", "x@example.com"]
        )

        assert result.exit_code == 0
        assert json.loads(saved_config.read_text())["api_key"] == "stored-key-123456"

    def test_set_requires_two_arguments(self):
        """Test set without a value fails."""
        result = self.runner.invoke(cli, ["config", "set", "author"])
        assert result.exit_code != 0

    def test_path(self, isolated_env: Path, config_path: Path):
        """Test config path reports the default and explicit locations."""
        result = self.runner.invoke(cli, ["config", "path"])
        assert result.exit_code == 0
        assert str(isolated_env / "dmc" / "config.json") in result.output

        result = self.runner.invoke(cli, ["-c", str(config_path), "config", "path"])
        assert str(config_path) in result.output


class TestGenerateCommand:
    """Test the generate command."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_missing_author(self, config_path: Path):
        """Test generate fails without an author."""
        result = self.runner.invoke(
            cli, ["-c", str(config_path), "generate", "--api-key", "k"]
        )

        assert result.exit_code != 0
        assert "author email is required" in result.output

    def test_missing_api_key(self, config_path: Path):
        """Test generate fails without an API key."""
        result = self.runner.invoke(
            cli, ["-c", str(config_path), "generate", "-a", AUTHOR]
        )

        assert result.exit_code != 0
        assert "API key is required" in result.output

    def test_unknown_template(self, saved_config: Path):
        """Test an unknown template fails before git runs."""
        with patch("dmc.core.pipeline.CommitFetcher") as mock_fetcher:
            result = self.runner.invoke(
                cli, ["-c", str(saved_config), "generate", "-t", "poem"]
            )

        assert result.exit_code != 0
        assert "unknown template: poem" in result.output
        mock_fetcher.assert_not_called()

    def test_not_a_repository(
        self, saved_config: Path, plain_dir: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test generate outside a repository."""
        monkeypatch.chdir(plain_dir)

        result = self.runner.invoke(cli, ["-c", str(saved_config), "generate"])

        assert result.exit_code != 0
        assert "not a git repository" in result.output

    def test_no_commits(
        self, saved_config: Path, git_repo: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test no commits is reported without calling Gemini."""
        monkeypatch.chdir(git_repo)

        with patch("dmc.core.pipeline.GeminiClient") as mock_client:
            result = self.runner.invoke(
                cli, ["-c", str(saved_config), "generate", "-a", "nobody@example.com"]
            )

        assert result.exit_code == 0
        assert "No commits found for nobody@example.com" in result.output
        assert "Found" not in result.output
        assert "Language:" not in result.output
        mock_client.assert_not_called()

    def test_repository_line_is_not_wrapped(
        self, saved_config: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test a long repository path stays on one line."""
        repo = tmp_path / ("nested-directory-" * 6) / "repo"
        repo.mkdir(parents=True)
        git(repo, "init")
        git(repo, "config", "user.name", "Test User")
        git(repo, "config", "user.email", AUTHOR)
        git(repo, "config", "commit.gpgsign", "false")
        make_commit(repo, "README.md", "# Repo\n", "Initial commit")
        monkeypatch.chdir(repo)

        with patch("dmc.core.pipeline.GeminiClient") as mock_client:
            mock_client.return_value.__enter__.return_value.generate_message.return_value = "ok"
            result = self.runner.invoke(cli, ["-c", str(saved_config), "generate"])

        assert result.exit_code == 0, result.output
        assert f"Repository: Local repository: {repo.resolve()}\n" in result.output

    def test_message_is_printed_verbatim(
        self, saved_config: Path, git_repo: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test emoji shortcodes and markup in the reply are not rendered."""
        monkeypatch.chdir(git_repo)
        message = "Status :warning: pending, deploy :rocket: done [bold]x[/bold]"

        with patch("dmc.core.pipeline.GeminiClient") as mock_client:
            mock_client.return_value.__enter__.return_value.generate_message.return_value = message
            result = self.runner.invoke(cli, ["-c", str(saved_config), "generate"])

        assert result.exit_code == 0, result.output
        assert message in result.output

    def test_generate_message(
        self, saved_config: Path, git_repo: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test the full flow prints the generated message under its banner."""
        monkeypatch.chdir(git_repo)

        with patch("dmc.core.pipeline.GeminiClient") as mock_client:
            client = mock_client.return_value.__enter__.return_value
            client.generate_message.return_value = "Shipped the [app] entry point."
            result = self.runner.invoke(
                cli,
                ["-c", str(saved_config), "generate", "-i", "weekly", "-t", "transcript", "-l", "tr"],
            )

        assert result.exit_code == 0, result.output
        assert "Found 2 commits for weekly period" in result.output
        assert "Language: Turkish" in result.output
        assert "Meeting Transcript (Weekly)" in result.output
        assert "=" * 50 in result.output
        assert "Shipped the [app] entry point." in result.output

        mock_client.assert_called_once()
        assert mock_client.call_args.args[0] == "stored-key-123456"
        args = client.generate_message.call_args.args
        assert args[1:] == ("transcript", "weekly", AUTHOR, "tr")

    def test_flag_api_key_overrides_env(
        self,
        saved_config: Path,
        git_repo: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Test --api-key beats GEMINI_API_KEY."""
        monkeypatch.chdir(git_repo)
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")

        with patch("dmc.core.pipeline.GeminiClient") as mock_client:
            mock_client.return_value.__enter__.return_value.generate_message.return_value = "ok"
            result = self.runner.invoke(
                cli, ["-c", str(saved_config), "generate", "--api-key", "flag-key"]
            )

        assert result.exit_code == 0, result.output
        assert mock_client.call_args.args[0] == "flag-key"

    def test_api_error(
        self, saved_config: Path, git_repo: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test API failures exit non-zero with the status and body."""
        monkeypatch.chdir(git_repo)

        with patch("dmc.core.pipeline.GeminiClient") as mock_client:
            client = mock_client.return_value.__enter__.return_value
            client.generate_message.side_effect = GeminiHTTPError(429, "rate limited")
            result = self.runner.invoke(cli, ["-c", str(saved_config), "generate"])

        assert result.exit_code == 1
        assert "API error (429): rate limited" in result.output
