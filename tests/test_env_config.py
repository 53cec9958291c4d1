"""Tests for .env configuration loading."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from config import DEFAULT_IGNORE_LIST
from env_config import EXIT_MISSING_CONFIGURATION, load_config

ENV_CONTENT = """\
BB_USERNAME=bb-user
BB_PASSWORD=bb-pass
BB_ORGANIZATION=acme
GH_USERNAME=gh-user
GH_TOKEN=gh-token
GH_ORGANIZATION=acme-gh
"""


def _write_env(tmp_path: Path, content: str) -> str:
    env_file = tmp_path / '.env'
    env_file.write_text(content, encoding='utf-8')
    return str(env_file)


def test_load_config_reads_required_values(tmp_path: Path) -> None:
    cfg = load_config(MagicMock(), _write_env(tmp_path, ENV_CONTENT), environ={})

    assert cfg.bitbucket.username == 'bb-user'
    assert cfg.bitbucket.password == 'bb-pass'
    assert cfg.bitbucket.organization == 'acme'
    assert cfg.github.username == 'gh-user'
    assert cfg.github.token == 'gh-token'
    assert cfg.github.organization == 'acme-gh'
    assert cfg.github.api_url == 'https://api.github.com'
    assert cfg.settings.ignore_list == DEFAULT_IGNORE_LIST
    assert cfg.settings.pages == 1
    assert cfg.settings.work_dir == 'repos'
    assert cfg.settings.private is True


def test_env_file_overrides_process_environment(tmp_path: Path) -> None:
    cfg = load_config(
        MagicMock(),
        _write_env(tmp_path, ENV_CONTENT),
        environ={'GH_TOKEN': 'stale', 'MIGRATION_PAGES': '3'},
    )

    assert cfg.github.token == 'gh-token'
    assert cfg.settings.pages == 3


def test_optional_settings(tmp_path: Path) -> None:
    content = ENV_CONTENT + (
        'MIGRATION_IGNORE=legacy, scratch\n'
        'GH_API_URL=https://github.acme.com/api/v3/\n'
        'MIGRATION_WORK_DIR=mirrors\n'
    )
    cfg = load_config(MagicMock(), _write_env(tmp_path, content), environ={})

    assert cfg.settings.ignore_list == frozenset({'legacy', 'scratch'})
    assert cfg.github.api_url == 'https://github.acme.com/api/v3'
    assert cfg.settings.work_dir == 'mirrors'


def test_missing_env_file_is_fatal(tmp_path: Path) -> None:
    logger = MagicMock()
    with pytest.raises(SystemExit) as excinfo:
        load_config(logger, str(tmp_path / '.env'), environ={})

    assert excinfo.value.code == EXIT_MISSING_CONFIGURATION
    logger.error.assert_called_once()


def test_empty_required_value_is_fatal(tmp_path: Path) -> None:
    content = ENV_CONTENT.replace('GH_TOKEN=gh-token', 'GH_TOKEN=')
    logger = MagicMock()
    with pytest.raises(SystemExit) as excinfo:
        load_config(logger, _write_env(tmp_path, content), environ={'GH_TOKEN': 'x'})

    assert excinfo.value.code == EXIT_MISSING_CONFIGURATION
    assert 'GH_TOKEN' in logger.error.call_args.args[0]


def test_invalid_page_count_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        load_config(
            MagicMock(),
            _write_env(tmp_path, ENV_CONTENT + 'MIGRATION_PAGES=0\n'),
            environ={},
        )

    assert excinfo.value.code == EXIT_MISSING_CONFIGURATION


def test_log_file_can_be_set_in_env_file(tmp_path: Path) -> None:
    content = ENV_CONTENT + 'MIGRATION_LOG_FILE=logs/bb2gh.log\n'
    cfg = load_config(MagicMock(), _write_env(tmp_path, content), environ={})

    assert cfg.settings.log_file == 'logs/bb2gh.log'


def test_log_file_defaults_to_migration_log(tmp_path: Path) -> None:
    cfg = load_config(MagicMock(), _write_env(tmp_path, ENV_CONTENT), environ={})

    assert cfg.settings.log_file == 'migration.log'
