"""
Hosted-function style endpoints. They answer ``{"error": ...}`` bodies
instead of ``{"detail": ...}`` so the web client can read both the same way.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials

from animeforge import schemas
from animeforge.api.dependencies import bearer_scheme, get_variation_service
from animeforge.core.errors import AuthenticationError, VariationError
from animeforge.core.security import decode_access_token
from animeforge.services.variations import VariationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/generate-variations", response_model=schemas.GenerateVariationsResponse)
def generate_variations(
    request_in: schemas.GenerateVariationsRequest,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    variation_service: VariationService = Depends(get_variation_service),
):
    if credentials is None:
        return _error(401, "Missing authorization header")
    try:
        decode_access_token(credentials.credentials)
    except AuthenticationError as e:
        return _error(401, e.message)

    try:
        variations = variation_service.request_variations(
            panel_description=request_in.panelDescription,
            dialogue=request_in.dialogue,
            character_context=request_in.characterContext,
            style_preferences=request_in.stylePreferences,
        )
    except VariationError as e:
        logger.error("generate-variations failed: %s", e.message)
        return _error(e.status_code, e.message)

    return schemas.GenerateVariationsResponse(variations=variations)
