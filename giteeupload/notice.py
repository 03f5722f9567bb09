from typing import Callable

import click

from giteeupload.config import NOTICE_DURATION

Notice = Callable[[str, int], None]


def console_notice(message: str, duration: int = NOTICE_DURATION) -> None:
    # a terminal has no timed toast, duration is accepted for interface parity
    click.secho(message, fg='yellow', err=True)
