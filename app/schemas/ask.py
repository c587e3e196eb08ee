"""Schemas for the ask endpoint."""

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Request body for POST /api/ask-ai. Empty or missing query is rejected by the relay with 400."""

    query: str | None = Field(None, description="Question about the profile, e.g. 'What projects has she built?'")


class AskResponse(BaseModel):
    """Response for POST /api/ask-ai."""

    text: str = Field(..., description="Answer text exactly as generated by the model.")

    model_config = {
        "json_schema_extra": {
            "examples": [{"text": "Nolin is an AI Engineer specializing in LLM development and predictive modeling."}]
        }
    }


class ErrorResponse(BaseModel):
    """Error body for 400 and 500 responses."""

    error: str = Field(..., description="User-facing error message.")
    details: str | None = Field(None, description="Provider message when the model call failed.")
