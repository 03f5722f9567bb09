"""Tests for the giteeupload command line."""

import functools

import httpx
import pytest
from click.testing import CliRunner

from giteeupload import cli as cli_module
from giteeupload.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def home_dir(tmp_path):
    return str(tmp_path / 'home')


@pytest.fixture
def fake_http(monkeypatch, fake_gitee):
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_gitee))
    plugin_cls = functools.partial(cli_module.GiteeUploadPlugin, http=http)
    monkeypatch.setattr(cli_module, 'GiteeUploadPlugin', plugin_cls)
    return fake_gitee


def _invoke(runner, home_dir, *args, **kwargs):
    return runner.invoke(cli, ['--home', home_dir, *args], **kwargs)


def test_config_set_and_show(runner, home_dir):
    assert _invoke(runner, home_dir, 'config', 'set', 'repo', 'owner/repo').exit_code == 0
    assert _invoke(runner, home_dir, 'config', 'set', 'token', 'abcdefghijkl').exit_code == 0

    result = _invoke(runner, home_dir, 'config', 'show')

    assert result.exit_code == 0
    assert 'repo (仓库名): owner/repo' in result.output
    assert 'branch (分支名): master' in result.output
    assert 'abcd********ijkl' in result.output
    assert 'abcdefghijkl' not in result.output


def test_config_set_bad_boolean(runner, home_dir):
    result = _invoke(runner, home_dir, 'config', 'set', 'prompt_sub_path', 'maybe')
    assert result.exit_code != 0


def test_config_set_unknown_key(runner, home_dir):
    result = _invoke(runner, home_dir, 'config', 'set', 'colour', 'red')
    assert result.exit_code != 0


def test_config_init(runner, home_dir):
    result = _invoke(runner, home_dir, 'config', 'init')
    assert result.exit_code == 0
    assert result.output.strip().endswith('config.toml')


def test_missing_config_file(runner, home_dir, tmp_path):
    result = runner.invoke(cli, ['--home', home_dir, '--config', str(tmp_path / 'x.toml'),
                                 'config', 'show'])
    assert result.exit_code != 0
    assert 'File not exists' in result.output


def test_paste_without_prompt(runner, home_dir, fake_http, tmp_path):
    _invoke(runner, home_dir, 'config', 'set', 'repo', 'owner/repo')
    _invoke(runner, home_dir, 'config', 'set', 'prompt_sub_path', 'false')
    doc = tmp_path / 'c.txt'
    doc.write_text('hello', encoding='utf-8')

    result = _invoke(runner, home_dir, 'paste', str(doc))

    assert result.exit_code == 0, result.output
    assert 'https://gitee.com/o/r/raw/master/c.txt' in result.output
    assert len(fake_http.requests) == 1


def test_paste_with_prompt_remembers_sub_path(runner, home_dir, fake_http, tmp_path):
    _invoke(runner, home_dir, 'config', 'set', 'repo', 'owner/repo')
    _invoke(runner, home_dir, 'config', 'set', 'path', 'notes')
    image = tmp_path / 'a.png'
    image.write_bytes(b'\x89PNG')

    result = _invoke(runner, home_dir, '--verbose', 'paste', '--drop', str(image), input='images\n')

    assert result.exit_code == 0, result.output
    assert '![a.png](https://gitee.com/o/r/raw/master/a.png)' in result.output
    assert '请输入文件路径\n文件路径 (可在设置中关闭此功能)' in result.output
    assert fake_http.paths() == ['/api/v5/repos/owner/repo/contents/notes/images/a.png']

    result = _invoke(runner, home_dir, 'paste', str(image), input='\n')
    assert result.exit_code == 0, result.output
    assert fake_http.paths()[-1] == '/api/v5/repos/owner/repo/contents/notes/images/a.png'


def test_null_setting_reports_config_error(runner, home_dir, tmp_path):
    (tmp_path / 'home').mkdir()
    (tmp_path / 'home' / 'settings.json').write_text('{"repo": null}', encoding='utf-8')

    result = _invoke(runner, home_dir, 'config', 'show')

    assert result.exit_code == 1
    assert 'repo' in result.output
