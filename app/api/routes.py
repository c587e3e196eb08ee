"""
API route aggregator: register endpoints; no logic, only delegate to the relay.
"""

import logging

from fastapi import APIRouter, Request

from app.core.config import ASK_PATH
from app.schemas.ask import AskRequest, AskResponse, ErrorResponse
from app.services.relay_service import answer

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Ask ---

@router.post(
    ASK_PATH,
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["ask"],
    summary="Ask the profile assistant",
    description="Send a question; receive the model's answer grounded on the profile. 400 on missing query, 500 when the model call fails.",
)
def post_ask(body: AskRequest, request: Request) -> AskResponse:
    logger.info("[api:post_ask] IN  query_len=%d", len(body.query or ""))
    text = answer(body.query, request.app.state.generator)
    logger.info("[api:post_ask] OUT text_len=%d", len(text))
    return AskResponse(text=text)
