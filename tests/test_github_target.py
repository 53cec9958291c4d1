"""Tests for GitHubTarget helper functionality."""

from __future__ import annotations

from unittest.mock import MagicMock

import github
import requests

from config import GitHubConfig
from github_target import GitHubTarget


def _make_target(api_url: str = 'https://api.github.com') -> GitHubTarget:
    config = GitHubConfig(
        username='gh-user',
        token='token-value',
        organization='example-org',
        api_url=api_url,
    )
    return GitHubTarget(config, MagicMock(), session=MagicMock())


def test_push_url_resolves_enterprise_host() -> None:
    """Enterprise API URLs should map to the git host without /api/v3."""
    target = _make_target('https://github.acme.com/api/v3')
    assert target.push_url('sample') == 'https://github.acme.com/example-org/sample.git'
    assert target.git_hostname() == 'github.acme.com'


def test_push_url_public_host() -> None:
    target = _make_target()
    assert target.push_url('demo') == 'https://github.com/example-org/demo.git'
    assert target.git_hostname() == 'github.com'


def test_connect_uses_basic_auth() -> None:
    target = _make_target()
    target.connect()

    assert target.session.auth == ('gh-user', 'token-value')
    assert isinstance(target.api, github.Github)


def test_repo_status_returns_status_code() -> None:
    target = _make_target()
    target.session.get.return_value = MagicMock(status_code=404)

    assert target.repo_status('demo') == 404
    target.session.get.assert_called_once_with(
        'https://api.github.com/repos/example-org/demo', timeout=30
    )


def test_repo_status_returns_none_on_transport_error() -> None:
    target = _make_target()
    target.session.get.side_effect = requests.ConnectionError('unreachable')

    assert target.repo_status('demo') is None
    target.logger.error.assert_called_once()


def test_describe_repo_returns_body() -> None:
    target = _make_target()
    target.session.get.return_value = MagicMock(text='{"message": "Bad credentials"}')

    assert target.describe_repo('demo') == '{"message": "Bad credentials"}'


def test_create_repo_returns_html_url_on_destination_host() -> None:
    target = _make_target()
    target.org = MagicMock()
    target.org.create_repo.return_value = MagicMock(
        html_url='https://github.com/example-org/demo'
    )

    assert target.create_repo('demo') == 'https://github.com/example-org/demo'
    target.org.create_repo.assert_called_once_with(name='demo', private=True)


def test_create_repo_rejects_foreign_html_url() -> None:
    target = _make_target()
    target.org = MagicMock()
    target.org.create_repo.return_value = MagicMock(html_url='https://example.com/demo')

    assert target.create_repo('demo') is None
    target.logger.error.assert_called_once()


def test_create_repo_logs_response_on_github_error() -> None:
    target = _make_target()
    target.org = MagicMock()
    target.org.create_repo.side_effect = github.GithubException(
        422, {'message': 'Repository creation failed.'}, None
    )

    assert target.create_repo('demo') is None
    message = target.logger.error.call_args.args[0]
    assert 'Repository creation failed.' in message
