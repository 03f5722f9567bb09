"""Tests for the top-level plugin: settings lifecycle and event wiring."""

import asyncio

from giteeupload.bridge import EDITOR_PASTE, EditorEvent, TextEditor, Workspace
from giteeupload.files import UploadCandidate
from giteeupload.plugin import GiteeUploadPlugin
from giteeupload.settings import AppHome, Settings


def _plugin(home, http, notices):
    return GiteeUploadPlugin(Workspace(), home, notice=notices, http=http)


def test_load_merges_config_and_saved_settings(home, http, notices):
    home.app_config_path.write_text('[gitee]\nrepo = "from/toml"\nbranch = "main"\n',
                                    encoding='utf-8')
    asyncio.run(home.settings_store.save({'repo': 'saved/repo'}))

    plugin = asyncio.run(_plugin(home, http, notices).load())

    assert plugin.settings == Settings(repo='saved/repo', branch='main')


def test_settings_object_is_shared(home, http, notices):
    plugin = asyncio.run(_plugin(home, http, notices).load())
    assert plugin.uploader.settings is plugin.settings
    assert plugin.bridge.settings is plugin.settings


def test_update_setting_persists_and_round_trips(home, http, notices):
    plugin = asyncio.run(_plugin(home, http, notices).load())
    asyncio.run(plugin.update_setting('repo', 'owner/repo'))
    asyncio.run(plugin.update_setting('prompt_sub_path', 'false'))

    again = asyncio.run(_plugin(AppHome(home.home), http, notices).load())
    assert again.settings == plugin.settings
    assert again.settings.prompt_sub_path is False


def test_unload_removes_handlers(home, http, notices, fake_gitee):
    plugin = asyncio.run(_plugin(home, http, notices).load())
    plugin.unload()
    event = EditorEvent(EDITOR_PASTE, [UploadCandidate.from_bytes('a.txt', b'a', 'text/plain')])

    results = asyncio.run(plugin.workspace.trigger(EDITOR_PASTE, event, TextEditor()))

    assert results == []
    assert not event.default_prevented


def test_direct_paste_scenario(home, http, notices, fake_gitee):
    asyncio.run(home.settings_store.save({'repo': 'owner/repo', 'token': 't',
                                          'prompt_sub_path': False}))
    plugin = asyncio.run(_plugin(home, http, notices).load())
    editor = TextEditor()
    event = EditorEvent(EDITOR_PASTE, [UploadCandidate.from_bytes('c.txt', b'c', 'text/plain')])

    asyncio.run(plugin.workspace.trigger(EDITOR_PASTE, event, editor))

    assert editor.text == 'https://gitee.com/o/r/raw/master/c.txt'


def test_prompted_paste_scenario(home, http, notices, fake_gitee):
    asyncio.run(home.settings_store.save({'repo': 'owner/repo', 'token': 't'}))
    plugin = asyncio.run(_plugin(home, http, notices).load())
    plugin.memory.set('last')
    editor = TextEditor()

    async def main():
        event = EditorEvent(EDITOR_PASTE, [UploadCandidate.from_bytes('a.png', b'a', 'image/png')])
        [prompt] = await plugin.workspace.trigger(EDITOR_PASTE, event, editor)
        assert prompt.value == 'last'
        prompt.change('images')
        await prompt.submit()

    asyncio.run(main())

    assert fake_gitee.paths()[0].endswith('/images/a.png')
    assert editor.text == '![a.png](https://gitee.com/o/r/raw/master/a.png)'
    assert AppHome(home.home).data_store.get('sub_path') == 'images'
