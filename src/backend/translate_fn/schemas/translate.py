from pydantic import BaseModel

class TranslationResponse(BaseModel):
    translation: str
    original: str

class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
