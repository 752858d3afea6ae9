"""Tests for configuration loading and merging."""

import pytest
import yaml

from dev_autofix.cli.commands.config_loader import (
    DEFAULT_CONFIG,
    ensure_app_directories,
    load_config,
    merge_config,
)


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_config_file(self, tmp_path):
        config = load_config(tmp_path)

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_autofix_yml_overrides_defaults(self, tmp_path):
        (tmp_path / "autofix.yml").write_text(yaml.safe_dump({
            'runner': {'debounce_ms': 500},
            'generation': {'llm_provider': 'mock'},
        }))

        config = load_config(tmp_path)

        assert config['runner']['debounce_ms'] == 500
        assert config['runner']['cooldown_ms'] == DEFAULT_CONFIG['runner']['cooldown_ms']
        assert config['generation']['llm_provider'] == 'mock'
        assert config['generation']['model_name'] == DEFAULT_CONFIG['generation']['model_name']

    def test_explicit_config_path(self, tmp_path):
        (tmp_path / "custom.yml").write_text("ui:\n  show_prefix: false\n")

        config = load_config(tmp_path, "custom.yml")

        assert config['ui']['show_prefix'] is False

    def test_missing_explicit_config_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            load_config(tmp_path, "missing.yml")
        assert exc_info.value.code == 1

    def test_non_mapping_config_exits(self, tmp_path):
        (tmp_path / "autofix.yml").write_text("- just\n- a list\n")

        with pytest.raises(SystemExit):
            load_config(tmp_path)

    def test_empty_config_file_uses_defaults(self, tmp_path):
        (tmp_path / "autofix.yml").write_text("")

        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_log_file_is_resolved_against_project_root(self, tmp_path):
        (tmp_path / "autofix.yml").write_text("logging:\n  log_file: var/logs/autofix.log\n")

        config = load_config(tmp_path)

        assert config['logging']['log_file'] == str((tmp_path / "var/logs/autofix.log").resolve())
        ensure_app_directories(config)
        assert (tmp_path / "var" / "logs").is_dir()


class TestMergeConfig:
    """Tests for merge_config."""

    def test_nested_merge_does_not_mutate_base(self):
        base = {'runner': {'a': 1, 'b': 2}, 'ui': {'type': 'rich'}}

        merged = merge_config(base, {'runner': {'b': 3}, 'extra': True})

        assert merged == {'runner': {'a': 1, 'b': 3}, 'ui': {'type': 'rich'}, 'extra': True}
        assert base['runner']['b'] == 2
