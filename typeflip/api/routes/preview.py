"""Live preview API routes - dual-pane playground sessions and editor panels"""
from fastapi import APIRouter, HTTPException
from typing import List
import logging

from typeflip.config import settings
from typeflip.services import get_translator
from typeflip.services.preview import (
    DualPaneSession,
    PanelKind,
    PreviewPanel,
    PreviewSessionStore,
    PreviewWorkspace,
)
from typeflip.api.models import (
    SessionCreateRequest,
    PaneUpdateRequest,
    SessionResponse,
    PanelRequest,
    PanelResponse,
)
from typeflip.api.routes.translate import check_source_size, resolve_mode

logger = logging.getLogger(__name__)

router = APIRouter()

# Global preview state (reset in main.py lifespan)
_session_store: PreviewSessionStore = None
_workspace: PreviewWorkspace = None


def get_session_store() -> PreviewSessionStore:
    """Get the preview session store"""
    global _session_store
    if _session_store is None:
        _session_store = PreviewSessionStore(get_translator(), settings.PREVIEW_SESSION_LIMIT)
    return _session_store


def get_workspace() -> PreviewWorkspace:
    """Get the editor preview workspace"""
    global _workspace
    if _workspace is None:
        _workspace = PreviewWorkspace(get_translator())
    return _workspace


def reset_preview_state():
    """Drop all sessions and panels (called from main.py)"""
    global _session_store, _workspace
    _session_store = None
    _workspace = None


def _session_response(session: DualPaneSession, applied: bool = True) -> SessionResponse:
    return SessionResponse(
        sessionId=session.session_id,
        expressionText=session.expression_text,
        branchText=session.branch_text,
        state=session.state.value,
        applied=applied
    )


def _panel_response(panel: PreviewPanel) -> PanelResponse:
    return PanelResponse(kind=panel.kind.value, title=panel.title, text=panel.text)


def _require_session(session_id: str) -> DualPaneSession:
    session = get_session_store().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Preview session {session_id} not found")
    return session


@router.post("/sessions", response_model=SessionResponse)
async def create_session(request: SessionCreateRequest = SessionCreateRequest()):
    """Open a dual-pane session, optionally seeding the expression pane."""
    session = get_session_store().create(mode=resolve_mode(request.mode))
    if request.expressionText is not None:
        check_source_size(request.expressionText)
        session.update_expression(request.expressionText)
    return _session_response(session)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    return _session_response(_require_session(session_id))


@router.put("/sessions/{session_id}/expression", response_model=SessionResponse)
async def update_expression(session_id: str, request: PaneUpdateRequest):
    """Edit the conditional type pane; the branch pane is re-rendered."""
    check_source_size(request.text)
    session = _require_session(session_id)
    applied = session.update_expression(request.text)
    return _session_response(session, applied)


@router.put("/sessions/{session_id}/branches", response_model=SessionResponse)
async def update_branches(session_id: str, request: PaneUpdateRequest):
    """Edit the branch function pane; the conditional type pane is re-rendered."""
    check_source_size(request.text)
    session = _require_session(session_id)
    applied = session.update_branches(request.text)
    return _session_response(session, applied)


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    if not get_session_store().delete(session_id):
        raise HTTPException(status_code=404, detail=f"Preview session {session_id} not found")
    return {"deleted": session_id}


@router.post("/panels/function", response_model=PanelResponse)
async def show_function_panel(request: PanelRequest):
    """Open (or refresh) the function preview for a TypeScript document."""
    check_source_size(request.text)
    return _panel_response(get_workspace().show_function_preview(request.fileName, request.text))


@router.post("/panels/type", response_model=PanelResponse)
async def show_type_panel(request: PanelRequest):
    """Open (or refresh) the type preview for a branch-form document."""
    check_source_size(request.text)
    return _panel_response(get_workspace().show_type_preview(request.fileName, request.text))


@router.post("/panels/document-changed", response_model=List[PanelResponse])
async def document_changed(request: PanelRequest):
    """Refresh every open panel for a changed document."""
    check_source_size(request.text)
    panels = get_workspace().document_changed(request.languageId or "", request.fileName, request.text)
    return [_panel_response(panel) for panel in panels]


@router.delete("/panels/{kind}")
async def close_panel(kind: PanelKind):
    if not get_workspace().close(kind):
        raise HTTPException(status_code=404, detail=f"No open {kind.value} panel")
    return {"closed": kind.value}
