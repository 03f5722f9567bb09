"""giteeupload command line: paste local files into Markdown links."""
import asyncio
import logging
from pathlib import Path

import click

from giteeupload.bridge import EDITOR_DROP, EDITOR_PASTE, EditorEvent, TextEditor, Workspace
from giteeupload.errors import ConfigError
from giteeupload.files import UploadCandidate
from giteeupload.plugin import GiteeUploadPlugin
from giteeupload.settings import AppHome, SETTING_FIELDS
from giteeupload.utils import mask


def _open_home(obj, force_init=False) -> AppHome:
    try:
        return AppHome(obj['home'], obj['config_path'], force_init=force_init)
    except (ConfigError, ValueError) as err:
        raise click.ClickException(str(err))


async def _load_plugin(home: AppHome) -> GiteeUploadPlugin:
    try:
        return await GiteeUploadPlugin(Workspace(), home).load()
    except ConfigError as err:
        raise click.ClickException(str(err))


async def _paste(home: AppHome, paths, kind) -> str:
    plugin = await _load_plugin(home)
    editor = TextEditor()
    event = EditorEvent(kind, [UploadCandidate.from_path(p) for p in paths])
    try:
        for prompt in await plugin.workspace.trigger(kind, event, editor):
            if prompt is None:
                continue
            value = click.prompt(f'{prompt.title}\n{prompt.name} ({prompt.desc})',
                                 default=prompt.value, show_default=True)
            prompt.change(value)
            await prompt.submit()
    finally:
        plugin.unload()
    return editor.text


def _copy_to_clipboard(text):
    try:
        import pyperclip  # noqa
    except ImportError:
        click.echo('要使用剪切板需要安装 pyperclip 模块', err=True)
    else:
        pyperclip.copy(text)
        click.echo('结果已复制到剪切板，使用 Ctrl-V 即可粘贴。', err=True)


@click.group()
@click.option('--home', type=click.Path(file_okay=False), default=None,
              help='Application home, defaults to $GITEEUPLOAD_HOME or the user config folder.')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), default=None,
              help='TOML file to use instead of <home>/config.toml.')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging.')
@click.pass_context
def cli(ctx, home, config_path, verbose):
    """Upload files to a Gitee repository and print Markdown links."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    ctx.obj = {'home': home, 'config_path': config_path}


@cli.command()
@click.argument('files', nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--drop', is_flag=True, help='Deliver the files as a drop instead of a paste.')
@click.option('--copy/--no-copy', default=False, help='Copy the result to the clipboard.')
@click.pass_obj
def paste(obj, files, drop, copy):
    """Upload FILES as if they were pasted into the editor."""
    home = _open_home(obj)
    text = asyncio.run(_paste(home, files, EDITOR_DROP if drop else EDITOR_PASTE))
    if text:
        click.echo(text)
        if copy:
            _copy_to_clipboard(text)


@cli.group()
def config():
    """Show or change settings."""


@config.command('show')
@click.pass_obj
def config_show(obj):
    home = _open_home(obj)
    plugin = asyncio.run(_load_plugin(home))
    values = plugin.settings.to_dict()
    for f in SETTING_FIELDS:
        value = mask(values[f.key]) if f.key == 'token' else values[f.key]
        click.echo(f'{f.key} ({f.name}): {value}')


@config.command('set')
@click.argument('key', type=click.Choice([f.key for f in SETTING_FIELDS]))
@click.argument('value')
@click.pass_obj
def config_set(obj, key, value):
    """Set KEY to VALUE and save it."""
    home = _open_home(obj)

    async def _update():
        plugin = await _load_plugin(home)
        await plugin.update_setting(key, value)

    try:
        asyncio.run(_update())
    except ValueError as err:
        raise click.BadParameter(str(err), param_hint='VALUE')
    click.echo(f'{key} 已保存。')


@config.command('init')
@click.pass_obj
def config_init(obj):
    """Rewrite the commented config.toml template."""
    home = _open_home(obj, force_init=True)
    click.echo(str(home.app_config_path))


def main():
    cli()


if __name__ == '__main__':
    main()
