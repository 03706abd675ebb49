from pydantic import BaseModel, Field
from typing import Optional


class AnalyzeRequest(BaseModel):
    """Body of POST /analyze"""
    url: Optional[str] = Field(default=None, description="Absolute http(s) URL of the page to inspect")


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
