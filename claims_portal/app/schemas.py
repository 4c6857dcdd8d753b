"""
API Layer - Response Schemas

The relay routes pass workflow payloads through untouched, so only the
error envelope has a fixed shape.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
