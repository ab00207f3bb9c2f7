"""Write-only records submitted through the storefront forms."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DIYOrder:
    """A custom guitar configuration request."""

    type: str
    neck: str  # neck material
    body: str  # body material
    color: str
    engraving: int  # 0 or 1
    engraving_text: Optional[str]  # None unless engraving == 1


@dataclass(frozen=True)
class Feedback:
    """A shopper's feedback message."""

    name: str
    feedback: str
