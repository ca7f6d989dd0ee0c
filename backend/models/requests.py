from pydantic import BaseModel, Field

from config import settings


class InterpretRequest(BaseModel):
    text: str = Field(..., max_length=settings.max_query_length, description="Free-text job query")


class ChatRequest(BaseModel):
    text: str = Field(..., max_length=settings.max_query_length, description="Message typed into the assistant box")
    worker_id: int | None = Field(None, description="Worker to personalise fallback recommendations for")
