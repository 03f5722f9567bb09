import logging
from typing import List, Optional

import httpx

from giteeupload.bridge import EventBridge, EventRef, Workspace
from giteeupload.notice import Notice, console_notice
from giteeupload.settings import AppHome, Settings, SubPathMemory
from giteeupload.uploader import GiteeUploader

_log = logging.getLogger(__name__)


class GiteeUploadPlugin:
    """Owns the settings and wires paste/drop events to Gitee uploads."""

    def __init__(self, workspace: Workspace, home: AppHome,
                 notice: Notice = console_notice,
                 http: Optional[httpx.AsyncClient] = None):
        self.workspace = workspace
        self.home = home
        self.notice = notice
        self.settings = Settings()
        self.memory = SubPathMemory(home.data_store)
        self.uploader = GiteeUploader(self.settings, notice=notice, http=http)
        self.bridge = EventBridge(self.settings, self.uploader, self.memory)
        self._refs: List[EventRef] = []

    async def load(self) -> 'GiteeUploadPlugin':
        await self.load_settings()
        self._refs = self.bridge.register(self.workspace)
        return self

    def unload(self) -> None:
        for ref in self._refs:
            self.workspace.offref(ref)
        self._refs = []

    async def load_settings(self) -> Settings:
        saved = await self.home.settings_store.load()
        loaded = Settings.from_dict(self.home.load_config(), saved)
        # update in place, the uploader and bridge hold this object
        for key, value in loaded.to_dict().items():
            setattr(self.settings, key, value)
        _log.debug('Settings loaded for repo %r', self.settings.repo)
        return self.settings

    async def save_settings(self) -> None:
        await self.home.settings_store.save(self.settings.to_dict())

    async def update_setting(self, key, value) -> None:
        self.settings.set(key, value)
        await self.save_settings()
