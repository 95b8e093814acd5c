"""
Request bodies accepted by the API.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from extractly.extractor.candidates import is_http_url


class ExtractRequest(BaseModel):
    url: str = Field(..., description="URL of the page to extract")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not is_http_url(v):
            raise ValueError("Invalid URL format")
        return v


class LoginRequest(BaseModel):
    userId: Optional[str] = Field(default=None, description="Subject recorded in the token")
    expiresIn: Optional[Union[int, str]] = Field(default=None, description="Lifetime such as 7d, 1h, 30m")
