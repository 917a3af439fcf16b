"""Unit tests for approval.yaml loading and validation."""

from pathlib import Path

import pytest

from approval_gate.config import (
    ConfigError,
    load_config,
    parse_approvers,
)


def _write(tmp_path: Path, text: str) -> str:
    path = tmp_path / "approval.yaml"
    path.write_text(text)
    return str(path)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_loads_full_config(self, config_file, tmp_path):
        config = load_config(str(config_file))

        assert config.approvers == ["login1", "login2"]
        assert config.github.repo == "octo/widgets"
        assert config.github.token_env_var == "GITHUB_TOKEN"
        assert config.poll.interval_seconds == 5
        assert config.poll.max_polls == 3
        assert config.logs_path == tmp_path / ".approval" / "logs"

    def test_defaults_for_optional_sections(self, tmp_path):
        path = _write(tmp_path, "approvers: [alice]\ngithub:\n  repo: octo/widgets\n")
        config = load_config(path)

        assert config.poll.interval_seconds == 60
        assert config.poll.max_polls == 0
        assert config.github.timeout_seconds == 30
        assert config.state_dir == ".approval"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(tmp_path / "missing.yaml"))

    def test_empty_file(self, tmp_path):
        with pytest.raises(ConfigError, match="empty"):
            load_config(_write(tmp_path, ""))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(_write(tmp_path, "approvers: [alice\n"))

    def test_non_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(_write(tmp_path, "- alice\n- bob\n"))

    def test_missing_github_section(self, tmp_path):
        with pytest.raises(ConfigError, match="github"):
            load_config(_write(tmp_path, "approvers: [alice]\n"))

    def test_missing_approvers_section(self, tmp_path):
        with pytest.raises(ConfigError, match="approvers"):
            load_config(_write(tmp_path, "github:\n  repo: octo/widgets\n"))

    def test_empty_approvers_rejected(self, tmp_path):
        path = _write(tmp_path, "approvers: []\ngithub:\n  repo: octo/widgets\n")
        with pytest.raises(ConfigError, match="at least one"):
            load_config(path)

    def test_bad_repo_format(self, tmp_path):
        path = _write(tmp_path, "approvers: [alice]\ngithub:\n  repo: widgets\n")
        with pytest.raises(ConfigError, match="owner/repo"):
            load_config(path)

    def test_bad_poll_interval(self, tmp_path):
        path = _write(
            tmp_path,
            "approvers: [alice]\ngithub:\n  repo: octo/widgets\npoll:\n  interval_seconds: 0\n",
        )
        with pytest.raises(ConfigError, match="interval_seconds"):
            load_config(path)


class TestEnvVarResolution:
    """${VAR} values are read from the environment."""

    def test_resolves_approvers_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APPROVERS", "alice, bob")
        path = _write(tmp_path, "approvers: ${APPROVERS}\ngithub:\n  repo: octo/widgets\n")

        assert load_config(path).approvers == ["alice", "bob"]

    def test_unset_variable_raises(self, tmp_path, monkeypatch):
        monkeypatch.delenv("APPROVAL_REPO", raising=False)
        path = _write(tmp_path, "approvers: [alice]\ngithub:\n  repo: ${APPROVAL_REPO}\n")

        with pytest.raises(ConfigError, match=r"github\.repo: .*APPROVAL_REPO"):
            load_config(path)


class TestParseApprovers:
    """Approver list normalization."""

    def test_comma_separated_string(self):
        assert parse_approvers("alice,bob , carol") == ["alice", "bob", "carol"]

    def test_duplicates_and_blanks_removed(self):
        assert parse_approvers(["alice", "", " alice", "bob"]) == ["alice", "bob"]

    @pytest.mark.parametrize("value", [None, "", " , ", []])
    def test_empty_rejected(self, value):
        with pytest.raises(ConfigError):
            parse_approvers(value)

    def test_wrong_type_rejected(self):
        with pytest.raises(ConfigError, match="list"):
            parse_approvers({"alice": True})


class TestIntegerSettings:
    """Integer settings reject booleans and out-of-range values."""

    @pytest.mark.parametrize("section,key,value", [
        ("poll", "interval_seconds", "true"),
        ("poll", "max_polls", "false"),
        ("poll", "max_polls", "-1"),
        ("github", "timeout_seconds", "0"),
        ("github", "timeout_seconds", "yes"),
        ("github", "timeout_seconds", "'30'"),
    ])
    def test_invalid_values_rejected(self, tmp_path, section, key, value):
        github = "github:\n  repo: octo/widgets\n"
        if section == "github":
            github += f"  {key}: {value}\n"
            text = f"approvers: [alice]\n{github}"
        else:
            text = f"approvers: [alice]\n{github}poll:\n  {key}: {value}\n"

        with pytest.raises(ConfigError, match=key):
            load_config(_write(tmp_path, text))

    def test_timeout_loaded(self, tmp_path):
        path = _write(
            tmp_path,
            "approvers: [alice]\ngithub:\n  repo: octo/widgets\n  timeout_seconds: 5\n",
        )
        assert load_config(path).github.timeout_seconds == 5


class TestRepoRoot:
    """A relative repo_root is anchored at the config file, not the cwd."""

    def test_default_repo_root_is_config_dir(self, tmp_path, monkeypatch):
        project = tmp_path / "project"
        elsewhere = tmp_path / "elsewhere"
        project.mkdir()
        elsewhere.mkdir()
        path = _write(project, "approvers: [alice]\ngithub:\n  repo: octo/widgets\n")
        monkeypatch.chdir(elsewhere)

        config = load_config(path)

        assert Path(config.repo_root) == project
        assert config.logs_path == project / ".approval" / "logs"

    def test_relative_repo_root_joined_to_config_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = _write(tmp_path, "repo_root: sub\napprovers: [alice]\ngithub:\n  repo: octo/widgets\n")

        assert Path(load_config(path).repo_root) == tmp_path / "sub"

    def test_absolute_repo_root_kept(self, tmp_path):
        target = tmp_path / "checkout"
        path = _write(
            tmp_path,
            f"repo_root: {target}\napprovers: [alice]\ngithub:\n  repo: octo/widgets\n",
        )

        assert Path(load_config(path).repo_root) == target


class TestGitHubToken:
    def test_token_from_env(self, config, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        assert config.github.get_token() == "ghp_test"

    def test_missing_token_is_none(self, config, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        assert config.github.get_token() is None
