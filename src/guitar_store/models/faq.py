"""FAQ entry model."""

from pydantic import BaseModel


class FAQEntry(BaseModel):
    """One question/answer pair of the FAQ page."""

    q: str
    a: str
