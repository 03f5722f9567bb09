"""Shared fixtures: a temporary app home, a fake Gitee API and a notice sink."""

import json

import httpx
import pytest

from giteeupload.settings import AppHome


class FakeGitee:
    """MockTransport handler answering the contents API.

    ``errors`` maps a file name to ``(status, body)`` for failing uploads.
    """

    def __init__(self):
        self.requests = []
        self.errors = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        name = request.url.path.rsplit('/', 1)[-1]
        if name in self.errors:
            status, body = self.errors[name]
            return httpx.Response(status, json=body)
        return httpx.Response(201, json={
            'content': {'name': name, 'download_url': f'https://gitee.com/o/r/raw/master/{name}'},
            'commit': {'message': 'upload image'},
        })

    def bodies(self):
        return [json.loads(r.content) for r in self.requests]

    def paths(self):
        return [r.url.path for r in self.requests]


@pytest.fixture
def fake_gitee():
    return FakeGitee()


@pytest.fixture
def http(fake_gitee):
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_gitee))


@pytest.fixture
def notices():
    shown = []

    def notice(message, duration):
        shown.append((message, duration))

    notice.shown = shown
    return notice


@pytest.fixture
def home(tmp_path):
    return AppHome(tmp_path / 'home')
