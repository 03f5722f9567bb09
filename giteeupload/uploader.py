"""Upload a batch of pasted or dropped files to Gitee."""
import asyncio
import logging
from typing import Callable, Iterable, List, Optional

import httpx

from giteeupload.clients.gitee import Gitee
from giteeupload.config import MAX_FILE_SIZE, NOTICE_DURATION
from giteeupload.errors import ReadFailure, RemoteFailure
from giteeupload.files import UploadCandidate, read_data_url, split_by_size, strip_data_url
from giteeupload.formatting import format_result
from giteeupload.notice import Notice, console_notice
from giteeupload.settings import Settings

_log = logging.getLogger(__name__)


def remote_path(base_path: str, name: str, sub_path: Optional[str] = None) -> str:
    if sub_path is None:
        return f'{base_path}/{name}'
    return f'{base_path}/{sub_path}/{name}'


class GiteeUploader:
    """Upload files through the Gitee contents API.

    Every failure is soft: it is reported through ``notice`` and the file's
    slot in the result list becomes an empty string, so a batch always
    completes.
    """

    def __init__(self, settings: Settings,
                 notice: Notice = console_notice,
                 http: Optional[httpx.AsyncClient] = None,
                 max_size: int = MAX_FILE_SIZE,
                 client_factory: Callable[..., Gitee] = Gitee):
        self.settings = settings
        self.notice = notice
        self.max_size = max_size
        self._http = http
        self._client_factory = client_factory

    def _client(self) -> Gitee:
        s = self.settings
        return self._client_factory(s.repo, s.token, http=self._http)

    async def __call__(self, files, sub_path=None) -> List[str]:
        return await self.upload(files, sub_path=sub_path)

    async def upload(self, files: Iterable[UploadCandidate],
                     sub_path: Optional[str] = None) -> List[str]:
        """Upload ``files`` concurrently.

        :param files: candidates of one paste/drop event
        :param sub_path: segment between the base path and the file name,
                         ``None`` to leave it out
        :return: one display string per accepted file, in input order
        """
        accepted, rejected = split_by_size(files, self.max_size)
        if rejected:
            names = '、'.join(f.name for f in rejected)
            self.notice(f'文件大小不能超过10MB，{names}将会被丢弃', NOTICE_DURATION)
            _log.info('Dropped %d oversized file(s): %s', len(rejected), names)
        if not accepted:
            return []
        if not self.settings.repo:
            _log.warning('No repository configured, uploads will fail.')

        async with self._client() as gitee:
            results = await asyncio.gather(
                *(self._upload_one(gitee, f, sub_path) for f in accepted))
        _log.info('Uploaded %d/%d file(s) to %s',
                  sum(1 for r in results if r), len(accepted), gitee.unique_id)
        return list(results)

    async def _upload_one(self, gitee: Gitee, file: UploadCandidate,
                          sub_path: Optional[str]) -> str:
        try:
            data_url = await read_data_url(file)
        except ReadFailure as err:
            _log.warning('Read failed: %s', err)
            self.notice(f'文件读取{file.name}失败', NOTICE_DURATION)
            return ''

        path = remote_path(self.settings.path, file.name, sub_path)
        try:
            url = await gitee.upload_content(path, strip_data_url(data_url))
        except RemoteFailure as err:
            _log.warning('Upload of %s failed (%s): %s', file.name, err.status_code, err.message)
            self.notice(f'上传文件{file.name}失败，失败原因：{err.message}', NOTICE_DURATION)
            return ''
        return format_result(file.name, file.type, url)
