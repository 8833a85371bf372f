"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from tsnarrow.config.loader import ConfigError, load_config
from tsnarrow.config.schema import TsNarrowConfig


class TestDefaults:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.analysis.max_file_size_kb == 10240
        assert cfg.analysis.cache_ttl == 3600
        assert cfg.analysis.ignore_patterns == ["**/node_modules/**", "**/dist/**", "**/build/**"]
        assert cfg.fix.default_replacement == "unknown"
        assert cfg.fix.create_backups is True
        assert cfg.batch.concurrency >= 1
        assert cfg.batch.progress_interval_ms == 200
        assert cfg.logging.format == "console"

    def test_instances_do_not_share_lists(self):
        a, b = TsNarrowConfig(), TsNarrowConfig()
        a.analysis.ignore_patterns.append("**/tmp/**")
        assert "**/tmp/**" not in b.analysis.ignore_patterns


class TestConfigLoading:
    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".tsnarrow.toml").write_text(
            '[analysis]\n'
            'cache_ttl = 60\n'
            '[fix]\n'
            'default_replacement = "object"\n'
            '[batch]\n'
            'concurrency = 2\n'
            '[rules]\n'
            'disable = ["EVENT_E"]\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.analysis.cache_ttl == 60
        assert cfg.fix.default_replacement == "object"
        assert cfg.batch.concurrency == 2
        assert cfg.rules.disable == ["EVENT_E"]

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[batch]\nconcurrency = 5\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.batch.concurrency == 5

    def test_missing_override(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override=str(tmp_path / "nope.toml"))

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".tsnarrow.toml").write_text('[analysis]\nfuture_option = true\n')
        assert load_config(tmp_path).analysis.cache_enabled is True

    def test_malformed_toml(self, tmp_path: Path):
        (tmp_path / ".tsnarrow.toml").write_text("[analysis\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".tsnarrow.toml").write_text('fix = "unknown"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    @pytest.mark.parametrize(
        "body",
        [
            '[fix]\ndefault_replacement = "any"\n',
            '[analysis]\nmax_file_size_kb = 0\n',
            '[batch]\nconcurrency = -1\n',
            '[logging]\nlevel = "LOUD"\n',
            '[logging]\nformat = "xml"\n',
        ],
    )
    def test_invalid_values(self, tmp_path: Path, body: str):
        (tmp_path / ".tsnarrow.toml").write_text(body)
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvOverrides:
    def test_overrides_apply(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TSNARROW_DEFAULT_REPLACEMENT", "Record<string, unknown>")
        monkeypatch.setenv("TSNARROW_CONCURRENCY", "7")
        monkeypatch.setenv("TSNARROW_CACHE_ENABLED", "false")
        monkeypatch.setenv("TSNARROW_LOG_LEVEL", "debug")
        cfg = load_config(tmp_path)
        assert cfg.fix.default_replacement == "Record<string, unknown>"
        assert cfg.batch.concurrency == 7
        assert cfg.analysis.cache_enabled is False
        assert cfg.logging.level == "DEBUG"

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".tsnarrow.toml").write_text('[batch]\nconcurrency = 2\n')
        monkeypatch.setenv("TSNARROW_CONCURRENCY", "4")
        assert load_config(tmp_path).batch.concurrency == 4

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TSNARROW_DEFAULT_REPLACEMENT", "any")
        monkeypatch.setenv("TSNARROW_CONCURRENCY", "lots")
        monkeypatch.setenv("TSNARROW_CACHE_ENABLED", "maybe")
        monkeypatch.setenv("TSNARROW_LOG_LEVEL", "LOUD")
        cfg = load_config(tmp_path)
        assert cfg.fix.default_replacement == "unknown"
        assert cfg.batch.concurrency >= 1
        assert cfg.analysis.cache_enabled is True
        assert cfg.logging.level == "INFO"
