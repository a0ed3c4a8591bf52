"""Translation API routes - conditional types <-> branch functions"""
from fastapi import APIRouter, Depends, HTTPException
from typing import Optional
import logging

from typeflip.config import settings
from typeflip.services import get_translator
from typeflip.services.preview import hover_preview
from typeflip.services.translator import TernaryTranslator, TranslationError, TranslationMode
from typeflip.api.models import (
    TranslationModeParam,
    SourceRequest,
    TranslateRequest,
    ConditionalsResponse,
    BranchesResponse,
    ExpressionsResponse,
    HoverRequest,
    HoverResponse,
    TranslationErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def check_source_size(source: str):
    """Reject sources over the configured size"""
    if len(source) > settings.MAX_SOURCE_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Source is {len(source)} characters; the limit is {settings.MAX_SOURCE_CHARS}"
        )


def resolve_mode(mode: Optional[TranslationModeParam]) -> TranslationMode:
    """Requested mode, or the configured default"""
    return TranslationMode(mode.value if mode else settings.DEFAULT_MODE)


def translation_error_detail(error: TranslationError) -> dict:
    return TranslationErrorResponse(
        error=error.kind,
        message=str(error),
        line=error.line,
        declaration=error.declaration
    ).model_dump()


@router.post("/conditionals", response_model=ConditionalsResponse)
async def get_conditionals(
    request: SourceRequest,
    translator: TernaryTranslator = Depends(get_translator)
):
    """List every type alias in the source that contains a conditional type."""
    check_source_size(request.source)
    declarations = translator.extract_conditional_declarations(request.source)
    return ConditionalsResponse(declarations=declarations)


@router.post("/to-branches", response_model=BranchesResponse)
async def to_branches(
    request: TranslateRequest,
    translator: TernaryTranslator = Depends(get_translator)
):
    """
    Translate conditional type aliases into function-like if/else code.
    
    In strict mode the first failing alias fails the request with 422.
    In tolerant mode it is replaced by an error comment.
    """
    check_source_size(request.source)
    mode = resolve_mode(request.mode)
    try:
        results = translator.expression_to_branches(request.source, mode)
        logger.info(f"Translated {len(results)} type alias(es) to branches ({mode.value})")
        return BranchesResponse(results=results)
    except TranslationError as e:
        logger.info(f"Strict translation failed: {e.kind} at line {e.line}")
        raise HTTPException(status_code=422, detail=translation_error_detail(e))
    except Exception as e:
        logger.error(f"Error translating to branches: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/to-expressions", response_model=ExpressionsResponse)
async def to_expressions(
    request: TranslateRequest,
    translator: TernaryTranslator = Depends(get_translator)
):
    """Translate function-like if/else code back into conditional type aliases."""
    check_source_size(request.source)
    mode = resolve_mode(request.mode)
    try:
        results = translator.branches_to_expression_list(request.source, mode)
        logger.info(f"Translated {len(results)} function(s) to expressions ({mode.value})")
        return ExpressionsResponse(result="\n\n".join(results), results=results)
    except TranslationError as e:
        logger.info(f"Strict translation failed: {e.kind} at line {e.line}")
        raise HTTPException(status_code=422, detail=translation_error_detail(e))
    except Exception as e:
        logger.error(f"Error translating to expressions: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/hover", response_model=HoverResponse)
async def hover(
    request: HoverRequest,
    translator: TernaryTranslator = Depends(get_translator)
):
    """Branch form of the type alias named by ``word``, as markdown."""
    check_source_size(request.source)
    return HoverResponse(markdown=hover_preview(translator, request.source, request.word))
