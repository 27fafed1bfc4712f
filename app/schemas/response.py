from pydantic import BaseModel, Field
from typing import Optional

class ErrorResponse(BaseModel):
    """Standardized error response model."""
    message: str = Field(..., description="Human-readable error message")
    field: Optional[str] = Field(None, description="First failing input field, for validation errors")
