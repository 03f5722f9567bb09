import asyncio
import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

from giteeupload.config import (DEFAULT_SETTINGS, INIT_CONFIG_TEXT, CONFIG_FILE,
                                SETTINGS_FILE, DATA_FILE)
from giteeupload.errors import ConfigError
from giteeupload.utils import get_home, parse_bool

_log = logging.getLogger(__name__)

SUB_PATH_KEY = 'sub_path'


def _coerce(key: str, value: Any):
    """Check a stored value against the type of its default."""
    if isinstance(DEFAULT_SETTINGS[key], bool):
        try:
            return parse_bool(value)
        except (ValueError, AttributeError):
            raise ConfigError(f'设置项 {key} 需要布尔值: {value!r}')
    if not isinstance(value, str):
        raise ConfigError(f'设置项 {key} 需要字符串: {value!r}')
    return value


@dataclass
class Settings:
    repo: str = DEFAULT_SETTINGS['repo']
    branch: str = DEFAULT_SETTINGS['branch']
    path: str = DEFAULT_SETTINGS['path']
    token: str = DEFAULT_SETTINGS['token']
    prompt_sub_path: bool = DEFAULT_SETTINGS['prompt_sub_path']

    @classmethod
    def from_dict(cls, *layers: Optional[Dict[str, Any]]) -> 'Settings':
        """Shallow merge ``layers`` over the defaults, later layers win."""
        merged = dict(DEFAULT_SETTINGS)
        for layer in layers:
            if layer:
                merged.update(layer)
        known = {f.name for f in fields(cls)}
        return cls(**{k: _coerce(k, v) for k, v in merged.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def set(self, key: str, value: Any) -> None:
        if key not in DEFAULT_SETTINGS:
            raise ConfigError(f'未知的设置项: {key}')
        if isinstance(DEFAULT_SETTINGS[key], bool):
            value = parse_bool(value)
        setattr(self, key, value)


@dataclass
class SettingField:
    key: str
    name: str
    desc: str


# 设置界面中的五个配置项
SETTING_FIELDS = (
    SettingField('repo', '仓库名', '格式: owner/repo'),
    SettingField('branch', '分支名', '默认: master'),
    SettingField('path', '存储路径', '默认: /'),
    SettingField('token', '私人令牌', '获取方式：头像 -> 设置 -> 私人令牌'),
    SettingField('prompt_sub_path', '文件路径',
                 '粘贴文件时是否需要输入文件路径，文件路径始终为存储路径下的子路径'),
)


def _read_json(path: Path) -> Optional[dict]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except ValueError as err:
        raise ConfigError(f'"{path}" has invalid content: {err}')
    if not isinstance(data, dict):
        raise ConfigError(f'"{path}" has invalid content.')
    return data


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding='utf-8')


class SettingsStore:
    """Persist the settings object as JSON; load returns None on first run."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def load(self) -> Optional[dict]:
        return await asyncio.to_thread(_read_json, self.path)

    async def save(self, data: dict) -> None:
        await asyncio.to_thread(_write_json, self.path, data)
        _log.debug('Settings saved to %s', self.path)


class DataStore:
    """Small synchronous key-value store backed by a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._data = _read_json(self.path) or {}

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value) -> None:
        self._data[key] = value
        _write_json(self.path, self._data)


class SubPathMemory:
    """The last sub-path typed in the prompt, kept across sessions."""

    def __init__(self, store: DataStore):
        self._store = store

    def get(self) -> str:
        return self._store.get(SUB_PATH_KEY) or ''

    def set(self, value: str) -> None:
        self._store.set(SUB_PATH_KEY, value)


class AppHome:
    """Files that live in the application home directory."""

    def __init__(self, home=None, config_path=None, force_init=False):
        self.home = get_home(home)
        self.app_config_path = self.home.joinpath(CONFIG_FILE)
        if not self.app_config_path.is_file() or force_init:
            self.app_config_path.write_text(INIT_CONFIG_TEXT, encoding='utf-8')

        if config_path:
            self.config_path = Path(config_path)
            if not self.config_path.is_file():
                raise ConfigError(f'File not exists: {config_path}')
        else:
            self.config_path = self.app_config_path

        self.settings_store = SettingsStore(self.home.joinpath(SETTINGS_FILE))
        self.data_store = DataStore(self.home.joinpath(DATA_FILE))

    def load_config(self) -> dict:
        """Return the ``[gitee]`` table of the TOML config file."""
        try:
            config = toml.loads(self.config_path.read_text(encoding='utf-8'))
        except toml.TOMLDecodeError as err:
            raise ConfigError(f'"{self.config_path}" has invalid content: {err}')
        section = config.get('gitee', {})
        if not isinstance(section, dict):
            raise ConfigError(f'"{self.config_path}": [gitee] must be a table.')
        return section
