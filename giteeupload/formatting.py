from enum import Enum
from typing import Iterable


class FileKind(Enum):
    IMAGE = 'image'
    FILE = 'file'


def classify(mime_type: str) -> FileKind:
    if mime_type and mime_type.lower().startswith('image/'):
        return FileKind.IMAGE
    return FileKind.FILE


def format_result(name: str, mime_type: str, url: str) -> str:
    """Markdown image for images, the bare url for everything else."""
    if classify(mime_type) is FileKind.IMAGE:
        return f'![{name}]({url})'
    return url


def join_results(results: Iterable[str]) -> str:
    # failed uploads resolve to '' and are dropped here
    return '\n'.join(r for r in results if r)
