from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel


class ChatMessageIn(BaseModel):
    role: Literal["user", "assistant"]
    content: Optional[str] = None
    timestamp: Optional[datetime] = None


class ChatPayload(BaseModel):
    messages: List[ChatMessageIn]


class VocabularyOut(BaseModel):
    word: str
    translation: str
    pronunciation: str
