from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

DocumentType = Literal["academic", "news", "wikipedia", "text"]


class Document(BaseModel):
    """One ingested unit of source text.

    Extraction reads only `title` (recorded as the source of what it finds)
    and `content`.
    """

    id: str
    title: str
    content: str
    type: DocumentType = "text"
    url: str | None = None
    author: str | None = None
    date: datetime | None = None
