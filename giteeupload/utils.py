import os
from pathlib import Path
from typing import Optional, Union

import click

from giteeupload.config import PACKAGE_NAME, HOME_ENV

MASK = '********'

_TRUE = ('1', 'true', 'yes', 'on', 'y')
_FALSE = ('0', 'false', 'no', 'off', 'n', '')


def get_home(home: Optional[Union[str, Path]] = None) -> Path:
    """Return the application home, creating it when missing.

    Resolution order: explicit ``home`` argument, the ``GITEEUPLOAD_HOME``
    environment variable, then the platform config folder given by
    :func:`click.get_app_dir`.
    """
    home = home or os.getenv(HOME_ENV) or click.get_app_dir(PACKAGE_NAME)
    path = Path(home).expanduser()
    if not path.exists():
        path.mkdir(parents=True)
    if not path.is_dir():
        raise ValueError(f'"{home}" is not a directory.')
    return path


def mask(token: Optional[str]) -> str:
    if not token:
        return '(未设置)'
    return token[:4] + MASK + token[-4:] if len(token) > 8 else MASK


def parse_bool(value: Union[str, bool]) -> bool:
    if isinstance(value, bool):
        return value
    text = value.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f'无法识别的布尔值: {value}')
