"""Upload candidates, size filtering and base64 encoding."""
import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from giteeupload.config import MAX_FILE_SIZE
from giteeupload.errors import ReadFailure

DEFAULT_MIME_TYPE = 'application/octet-stream'


@dataclass
class UploadCandidate:
    """A file attached to a paste or drop event.

    Content is either held in memory (``data``) or read lazily from
    ``path``; exactly one of them is expected.
    """
    name: str
    size: int
    type: str = ''
    data: Optional[bytes] = None
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'UploadCandidate':
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name,
                   size=path.stat().st_size,
                   type=mime_type or '',
                   path=path)

    @classmethod
    def from_bytes(cls, name: str, data: bytes, type: str = '') -> 'UploadCandidate':
        return cls(name=name, size=len(data), type=type, data=data)

    async def read(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise ReadFailure(f'{self.name} 没有可读取的内容')
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as err:
            raise ReadFailure(f'{self.name}: {err}') from err


def split_by_size(files: Iterable[UploadCandidate],
                  limit: int = MAX_FILE_SIZE
                  ) -> Tuple[List[UploadCandidate], List[UploadCandidate]]:
    """Partition ``files`` into (accepted, rejected), keeping their order."""
    accepted, rejected = [], []
    for file in files:
        if file.size > limit:
            rejected.append(file)
        else:
            accepted.append(file)
    return accepted, rejected


async def read_data_url(file: UploadCandidate) -> str:
    content = await file.read()
    encoded = base64.b64encode(content).decode('ascii')
    return f'data:{file.type or DEFAULT_MIME_TYPE};base64,{encoded}'


def strip_data_url(data_url: str) -> str:
    if data_url.startswith('data:'):
        _, _, data_url = data_url.partition(',')
    return data_url
