import logging
from typing import Optional

import httpx

from giteeupload.config import API_ROOT, COMMIT_MESSAGE
from giteeupload.errors import RemoteFailure

_log = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('message'):
        return str(body['message'])
    return response.text or response.reason_phrase or f'HTTP {response.status_code}'


class Gitee:
    """Async client for the Gitee v5 repository contents API.

    Use as an async context manager. When ``http`` is given the caller owns
    it and it is left open on exit.
    """

    def __init__(self, repo, token, api_root=API_ROOT,
                 http: Optional[httpx.AsyncClient] = None, timeout=60.0):
        self.repo = repo.strip()
        self.token = token
        self.api_root = api_root.rstrip('/')
        self.headers = {
            'Accept': 'application/json',
            'Content-Type': 'application/json;charset=UTF-8',
        }
        self._http = http
        self._owns_http = http is None
        self._timeout = timeout

    @property
    def unique_id(self) -> str:
        return f'gitee/{self.repo}'

    async def __aenter__(self) -> 'Gitee':
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout)
        return self

    async def __aexit__(self, *exc_info):
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    def contents_url(self, path: str) -> str:
        # path is used verbatim, including empty segments
        return f'{self.api_root}/repos/{self.repo}/contents/{path}'

    async def _request(self, method, url, json=None) -> dict:
        if self._http is None:
            raise RuntimeError('Gitee client used outside "async with".')
        try:
            res = await self._http.request(method, url, json=json, headers=self.headers)
        except (httpx.HTTPError, httpx.InvalidURL) as err:
            raise RemoteFailure(str(err) or err.__class__.__name__) from err
        if res.is_error:
            raise RemoteFailure(_error_message(res), res.status_code)
        try:
            return res.json()
        except ValueError as err:
            raise RemoteFailure(f'无法解析的响应: {res.text[:200]}', res.status_code) from err

    async def create_content(self, path, content, message=COMMIT_MESSAGE) -> dict:
        """Create a file at ``path``; ``content`` is base64 text."""
        body = {
            'access_token': self.token,
            'content': content,
            'message': message,
        }
        _log.debug('POST %s (%d base64 chars)', path, len(content))
        return await self._request('POST', self.contents_url(path), json=body)

    async def upload_content(self, path, content, message=COMMIT_MESSAGE) -> str:
        """Create a file and return its ``download_url``."""
        data = await self.create_content(path, content, message=message)
        try:
            url = data['content']['download_url']
        except (KeyError, TypeError):
            url = None
        if not url:
            message = data.get('message') if isinstance(data, dict) else None
            raise RemoteFailure(message or '响应中没有 download_url')
        return url
