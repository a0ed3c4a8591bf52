"""Request and response models for API endpoints"""
from pydantic import BaseModel
from typing import Optional, List
from enum import Enum


class TranslationModeParam(str, Enum):
    """Failure policy for a batch translation"""
    STRICT = "strict"      # First failing declaration fails the request
    TOLERANT = "tolerant"  # Failing declarations become error comments


class SourceRequest(BaseModel):
    """Request carrying a block of source text"""
    source: str


class TranslateRequest(BaseModel):
    """Request to translate every declaration in a block of source text"""
    source: str
    mode: Optional[TranslationModeParam] = None  # Defaults to the configured mode


class ConditionalsResponse(BaseModel):
    """Type aliases holding a conditional type, verbatim"""
    declarations: List[str]


class BranchesResponse(BaseModel):
    """Branch-form translation, one entry per type alias"""
    results: List[str]


class ExpressionsResponse(BaseModel):
    """Conditional-type translation of every function"""
    result: str          # All results joined with a blank line
    results: List[str]   # One entry per function


class HoverRequest(BaseModel):
    """Request for the branch form of one type alias"""
    source: str
    word: str


class HoverResponse(BaseModel):
    markdown: Optional[str] = None


class TranslationErrorResponse(BaseModel):
    """Body of a 422 response for a failed strict translation"""
    error: str
    message: str
    line: Optional[int] = None
    declaration: Optional[str] = None


class SessionCreateRequest(BaseModel):
    mode: Optional[TranslationModeParam] = None
    expressionText: Optional[str] = None  # Initial left pane content


class PaneUpdateRequest(BaseModel):
    """New content of one pane"""
    text: str


class SessionResponse(BaseModel):
    """Current state of a dual-pane preview session"""
    sessionId: str
    expressionText: str
    branchText: str
    state: str
    applied: bool = True  # False when the edit arrived during a translation


class PanelRequest(BaseModel):
    """Document to render into a preview panel"""
    fileName: str
    text: str
    languageId: Optional[str] = None


class PanelResponse(BaseModel):
    kind: str
    title: str
    text: str
