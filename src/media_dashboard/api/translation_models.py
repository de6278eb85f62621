"""Request models for the translation API."""

from pydantic import BaseModel, Field

LANGUAGE_PATTERN = r"^[A-Za-z0-9_-]{1,35}$"


class TranslationUpdate(BaseModel):
    language: str = Field(pattern=LANGUAGE_PATTERN)
    key: str
    value: str
