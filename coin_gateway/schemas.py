"""
Pydantic schemas for API responses.
"""
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body shared by every failing route."""
    error: str = Field(..., description="Human readable error message")

    model_config = {
        "json_schema_extra": {
            "example": {"error": "Coin 'dogecoinz' not found"}
        }
    }
