"""Editor events: paste/drop capture and dispatch."""
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from giteeupload.files import UploadCandidate
from giteeupload.formatting import join_results
from giteeupload.prompt import PathPrompt

_log = logging.getLogger(__name__)

EDITOR_PASTE = 'editor-paste'
EDITOR_DROP = 'editor-drop'


@dataclass
class EditorEvent:
    """A paste or drop event as delivered by the editor."""
    kind: str
    files: Optional[List[UploadCandidate]] = None
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class TextEditor:
    """Minimal editor: a text buffer with a selection that can be replaced."""

    def __init__(self, text: str = '', selection=None):
        self.text = text
        self.selection = selection or (len(text), len(text))

    def replace_selection(self, replacement: str) -> None:
        start, end = self.selection
        self.text = self.text[:start] + replacement + self.text[end:]
        cursor = start + len(replacement)
        self.selection = (cursor, cursor)


@dataclass
class EventRef:
    name: str
    callback: Callable


@dataclass
class Workspace:
    """Event hub standing in for the host application's workspace."""
    _handlers: Dict[str, List[EventRef]] = field(default_factory=dict)

    def on(self, name: str, callback: Callable) -> EventRef:
        ref = EventRef(name, callback)
        self._handlers.setdefault(name, []).append(ref)
        return ref

    def offref(self, ref: EventRef) -> None:
        refs = self._handlers.get(ref.name, [])
        if ref in refs:
            refs.remove(ref)

    async def trigger(self, name: str, *args) -> List[Any]:
        results = []
        for ref in list(self._handlers.get(name, [])):
            result = ref.callback(*args)
            if inspect.isawaitable(result):
                result = await result
            results.append(result)
        return results


class EventBridge:
    """Route files from paste/drop events to the uploader.

    ``settings`` is read on every event, so toggling the prompt takes effect
    immediately.
    """

    def __init__(self, settings, uploader, memory,
                 prompt_factory: Callable[..., PathPrompt] = PathPrompt):
        self.settings = settings
        self.uploader = uploader
        self.memory = memory
        self.prompt_factory = prompt_factory

    def register(self, workspace: Workspace) -> List[EventRef]:
        return [
            workspace.on(EDITOR_PASTE, self.on_paste),
            workspace.on(EDITOR_DROP, self.on_drop),
        ]

    async def on_paste(self, event: EditorEvent, editor):
        return await self.upload_files(event.files, event, editor)

    async def on_drop(self, event: EditorEvent, editor):
        return await self.upload_files(event.files, event, editor)

    async def upload_files(self, files, event: EditorEvent, editor) -> Optional[PathPrompt]:
        """Handle the files of one event.

        Returns the opened prompt when a sub-path must be asked for, otherwise
        None once the result has been inserted (or nothing was to be done).
        """
        if not files:
            return None

        event.prevent_default()
        event.stop_propagation()
        files = list(files)
        _log.debug('%s with %d file(s)', event.kind, len(files))

        if self.settings.prompt_sub_path:
            prompt = self.prompt_factory(files, editor, self.uploader, self.memory)
            return prompt.open()

        results = await self.uploader.upload(files)
        editor.replace_selection(join_results(results))
        return None
