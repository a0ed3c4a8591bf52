"""
Live preview for the playground and editor surfaces.

- DualPaneSession: two panes (conditional types / branch functions) kept
  in sync. An edit in one pane is translated into the other; the write
  into the other pane must not bounce back, so a session is either IDLE
  or TRANSLATING and edits arriving while TRANSLATING are ignored.
- PanelRegistry: at most one live preview panel per kind, with explicit
  creation and disposal.
- PreviewSessionStore: bounded in-memory session lookup by id.
"""
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from typeflip.services.translator import (
    TernaryTranslator,
    TranslationError,
    TranslationMode,
    annotate_failure,
)
from typeflip.services.translator.declarations import parse_type_aliases

logger = logging.getLogger(__name__)

H = TypeVar("H")


class SyncState(str, Enum):
    """Whether a session is writing a translation into one of its panes"""
    IDLE = "idle"
    TRANSLATING = "translating"


class Pane(str, Enum):
    EXPRESSION = "expression"   # Conditional type aliases
    BRANCHES = "branches"       # Function-like if/else code


PaneWriter = Callable[[Pane, str], None]


def generate_short_uuid() -> str:
    """Generate a short UUID (8 characters)."""
    return uuid.uuid4().hex[:8]


class DualPaneSession:
    """
    Two-pane live translation.

    Usage:
        session = DualPaneSession(translator, writer=editor.set_pane)
        session.update_expression("type A<T> = T extends string ? 1 : 2;")
        session.branch_text   # function A(T) { ... }

    ``writer`` is called with the target pane and its new text. A writer
    that synchronously reports the write as a user edit is safe: the
    report arrives while TRANSLATING and is dropped.
    """

    def __init__(
        self,
        translator: TernaryTranslator,
        session_id: Optional[str] = None,
        writer: Optional[PaneWriter] = None,
        mode: TranslationMode = TranslationMode.TOLERANT,
    ):
        self.session_id = session_id or generate_short_uuid()
        self.translator = translator
        self.writer = writer
        self.mode = TranslationMode(mode)
        self.expression_text = ""
        self.branch_text = ""
        self.state = SyncState.IDLE

    def update_expression(self, text: str) -> bool:
        """Expression pane changed; re-render the branch pane. False if ignored."""
        return self._push(Pane.EXPRESSION, text, Pane.BRANCHES, self._to_branches)

    def update_branches(self, text: str) -> bool:
        """Branch pane changed; re-render the expression pane. False if ignored."""
        return self._push(Pane.BRANCHES, text, Pane.EXPRESSION, self._to_expressions)

    def text(self, pane: Pane) -> str:
        return self.expression_text if pane == Pane.EXPRESSION else self.branch_text

    def _to_branches(self, text: str) -> str:
        return "\n\n".join(self.translator.expression_to_branches(text, self.mode))

    def _to_expressions(self, text: str) -> str:
        return self.translator.branches_to_expressions(text, self.mode)

    def _set(self, pane: Pane, text: str):
        if pane == Pane.EXPRESSION:
            self.expression_text = text
        else:
            self.branch_text = text

    def _push(self, source: Pane, text: str, target: Pane, translate: Callable[[str], str]) -> bool:
        if self.state == SyncState.TRANSLATING:
            logger.debug(f"[{self.session_id}] Ignoring {source.value} change during translation")
            return False

        self.state = SyncState.TRANSLATING
        try:
            self._set(source, text)
            try:
                result = translate(text)
            except TranslationError as e:
                result = annotate_failure(e)
            self._set(target, result)
            if self.writer:
                self.writer(target, result)
        finally:
            self.state = SyncState.IDLE
        return True


class PanelRegistry(Generic[H]):
    """Maps a panel kind to at most one live handle"""

    def __init__(self):
        self._handles: Dict[str, H] = {}

    def get(self, kind: str) -> Optional[H]:
        return self._handles.get(kind)

    def get_or_create(self, kind: str, factory: Callable[[], H]) -> H:
        handle = self._handles.get(kind)
        if handle is None:
            handle = factory()
            self._handles[kind] = handle
            logger.debug(f"Created {kind} panel")
        return handle

    def dispose(self, kind: str) -> Optional[H]:
        handle = self._handles.pop(kind, None)
        if handle is not None:
            logger.debug(f"Disposed {kind} panel")
        return handle

    def kinds(self) -> List[str]:
        return list(self._handles)

    def __contains__(self, kind: str) -> bool:
        return kind in self._handles


class PanelKind(str, Enum):
    FUNCTION_PREVIEW = "function_preview"  # Branch form of a TypeScript document
    TYPE_PREVIEW = "type_preview"          # Conditional types of a branch-form document


@dataclass
class PreviewPanel:
    """Content of one preview panel"""
    kind: PanelKind
    title: str = ""
    text: str = ""

    def post(self, title: str, render: Callable[[], str]):
        """Show ``render()``; a translation error is shown instead of the result"""
        self.title = title
        try:
            self.text = render()
        except TranslationError as e:
            self.text = str(e)


# Language ids whose documents feed the two panels
TYPESCRIPT_LANGUAGE = "typescript"
BRANCH_LANGUAGE = "typeflip"


class PreviewWorkspace:
    """
    Editor-side preview: a function panel and a type panel, each created
    on demand and refreshed when the active document changes.
    """

    def __init__(self, translator: TernaryTranslator):
        self.translator = translator
        self.panels: PanelRegistry[PreviewPanel] = PanelRegistry()

    def function_panel(self) -> PreviewPanel:
        return self.panels.get_or_create(
            PanelKind.FUNCTION_PREVIEW, lambda: PreviewPanel(PanelKind.FUNCTION_PREVIEW)
        )

    def type_panel(self) -> PreviewPanel:
        return self.panels.get_or_create(
            PanelKind.TYPE_PREVIEW, lambda: PreviewPanel(PanelKind.TYPE_PREVIEW)
        )

    def show_function_preview(self, file_name: str, text: str) -> PreviewPanel:
        panel = self.function_panel()
        panel.post(
            f"Function Preview for: {file_name}",
            lambda: "\n\n".join(self.translator.expression_to_branches(text, TranslationMode.STRICT)),
        )
        return panel

    def show_type_preview(self, title: str, text: str) -> PreviewPanel:
        panel = self.type_panel()
        panel.post(
            f"Type Preview for: {title}",
            lambda: self.translator.branches_to_expressions(text, TranslationMode.STRICT),
        )
        return panel

    def document_changed(self, language_id: str, file_name: str, text: str) -> List[PreviewPanel]:
        """Refresh whichever panels are open for the changed document"""
        refreshed = []
        if PanelKind.TYPE_PREVIEW in self.panels:
            if language_id == BRANCH_LANGUAGE:
                refreshed.append(self.show_type_preview(file_name, text))
            else:
                refreshed.append(self.show_type_preview("Types Not Available", ""))
        if PanelKind.FUNCTION_PREVIEW in self.panels:
            if language_id == TYPESCRIPT_LANGUAGE:
                refreshed.append(self.show_function_preview(file_name, text))
            else:
                refreshed.append(self.show_function_preview("Functions Not available", ""))
        return refreshed

    def close(self, kind: PanelKind) -> bool:
        return self.panels.dispose(kind) is not None


def hover_preview(translator: TernaryTranslator, source: str, word: str) -> Optional[str]:
    """
    Markdown hover for the type alias named ``word``.

    Returns None when ``source`` has no conditional alias of that name.
    """
    unit = next((u for u in parse_type_aliases(source) if u.name == word), None)
    if unit is None or not unit.has_conditional:
        return None
    try:
        resolved = translator.translate_type_alias(unit)
    except TranslationError as e:
        resolved = annotate_failure(e)
    return f"```ts\n{resolved}\n```"


class PreviewSessionStore:
    """In-memory sessions, oldest evicted once ``limit`` is reached"""

    def __init__(self, translator: TernaryTranslator, limit: int = 100):
        self.translator = translator
        self.limit = limit
        self._sessions: "OrderedDict[str, DualPaneSession]" = OrderedDict()

    def create(self, mode: TranslationMode = TranslationMode.TOLERANT) -> DualPaneSession:
        session = DualPaneSession(self.translator, mode=mode)
        self._sessions[session.session_id] = session
        while len(self._sessions) > self.limit:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted preview session {evicted}")
        logger.info(f"Created preview session {session.session_id}")
        return session

    def get(self, session_id: str) -> Optional[DualPaneSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
