"""Per-upload session: the processed résumé plus the chat history that edits it."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from near_resume.schemas.resume import Resume


class ChatMessage(BaseModel):
    """One chat turn; assistant turns carry the changes the edit applied."""

    role: str = Field(..., description="'user' or 'assistant'")
    content: str = Field(default="", description="Message text")
    changes: List[Dict[str, str]] = Field(default_factory=list, description="Applied changes (type, description)")
    created_at: datetime = Field(..., description="When the message was stored")


class ResumeSession(BaseModel):
    """State kept for one uploaded résumé until it expires."""

    id: str = Field(..., description="Session id (uuid4 hex)")
    original_filename: str = Field(default="", description="Uploaded file name")
    original_text: str = Field(default="", description="Text extracted from the upload")
    resume: Optional[Resume] = Field(default=None, description="Latest post-processed résumé")
    detailed_format: bool = Field(default=True, description="Render hint chosen at upload")
    messages: List[ChatMessage] = Field(default_factory=list, description="Chat history, oldest first")
    created_at: datetime = Field(..., description="Creation time")
    expires_at: datetime = Field(..., description="After this the session is dropped")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
