"""Modal asking for a sub-path before a batch is uploaded."""
import asyncio
import logging
from enum import Enum
from typing import List, Optional

from giteeupload.errors import PromptClosedError
from giteeupload.files import UploadCandidate
from giteeupload.formatting import join_results
from giteeupload.settings import SubPathMemory

_log = logging.getLogger(__name__)


class PromptState(Enum):
    OPEN = 'open'
    CLOSED = 'closed'


class PathPrompt:
    title = '请输入文件路径'
    name = '文件路径'
    desc = '可在设置中关闭此功能'

    def __init__(self, files: List[UploadCandidate], editor, uploader,
                 memory: SubPathMemory):
        self.files = files
        self.editor = editor
        self.uploader = uploader
        self.memory = memory
        self.value = ''
        self.state = PromptState.CLOSED
        self._submitting = False
        self._closed: Optional[asyncio.Event] = None

    @property
    def is_open(self) -> bool:
        return self.state is PromptState.OPEN

    def open(self) -> 'PathPrompt':
        self.value = self.memory.get()
        self.state = PromptState.OPEN
        self._closed = asyncio.Event()
        return self

    def change(self, value: str) -> None:
        """Called on every edit of the text field."""
        self.value = value
        self.memory.set(value)

    async def submit(self) -> Optional[str]:
        """Upload with the current sub-path and insert the result.

        Returns the inserted text, or None when an upload triggered by an
        earlier submit is still running.
        """
        if not self.is_open:
            raise PromptClosedError('The path prompt is not open.')
        if self._submitting:
            _log.debug('Upload already in progress, submit ignored.')
            return None
        self._submitting = True
        try:
            results = await self.uploader.upload(self.files, sub_path=self.value)
            text = join_results(results)
            self.editor.replace_selection(text)
        finally:
            self._submitting = False
        self.close()
        return text

    def cancel(self) -> None:
        self.close()

    def close(self) -> None:
        self.state = PromptState.CLOSED
        if self._closed is not None:
            self._closed.set()

    async def wait_closed(self) -> None:
        if self._closed is not None:
            await self._closed.wait()
