# moviehub/models/common.py

from typing import Any, Dict

from pydantic import BaseModel, Field

# Documents are schema-less; routes return them as plain mappings
Document = Dict[str, Any]


class MessageResponse(BaseModel):
    """Confirmation body for successful updates and deletions."""
    message: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""
    error: str


class InsertResult(BaseModel):
    """Outcome of a single-document insert, as reported by the database."""
    acknowledged: bool = Field(..., description="Whether the write was acknowledged by the server.")
    insertedId: str = Field(..., description="Server-generated ObjectId of the new document.")


# Shared OpenAPI entries for id-taking routes
ID_ROUTE_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid ID format"},
    404: {"model": ErrorResponse, "description": "Document not found"},
    500: {"model": ErrorResponse, "description": "Database error"},
    503: {"model": ErrorResponse, "description": "Database not connected"},
}
