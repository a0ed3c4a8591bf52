"""API models package"""
from typeflip.api.models.requests import (
    TranslationModeParam,
    SourceRequest,
    TranslateRequest,
    ConditionalsResponse,
    BranchesResponse,
    ExpressionsResponse,
    HoverRequest,
    HoverResponse,
    TranslationErrorResponse,
    SessionCreateRequest,
    PaneUpdateRequest,
    SessionResponse,
    PanelRequest,
    PanelResponse,
)

__all__ = [
    "TranslationModeParam",
    "SourceRequest",
    "TranslateRequest",
    "ConditionalsResponse",
    "BranchesResponse",
    "ExpressionsResponse",
    "HoverRequest",
    "HoverResponse",
    "TranslationErrorResponse",
    "SessionCreateRequest",
    "PaneUpdateRequest",
    "SessionResponse",
    "PanelRequest",
    "PanelResponse",
]
