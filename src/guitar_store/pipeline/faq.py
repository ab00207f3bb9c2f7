"""FAQ source loading.

The FAQ file alternates question and answer lines. It is read again on every
request so edits show up without a restart.
"""

import asyncio
import logging

from ..models import FAQEntry
from .steps import Continue, StepResult, server_error

logger = logging.getLogger(__name__)


def split_faq_lines(text: str) -> list[str]:
    """Split on "\\n" only, dropping a trailing "\\r" and one final empty line."""
    if not text:
        return []
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines[-1] == "":
        lines.pop()
    return lines


def pair_faq_lines(text: str) -> list[FAQEntry]:
    """Pair consecutive lines into question/answer entries.

    An odd trailing question gets an empty answer.
    """
    lines = split_faq_lines(text)
    entries = []
    for i in range(0, len(lines), 2):
        answer = lines[i + 1] if i + 1 < len(lines) else ""
        entries.append(FAQEntry(q=lines[i], a=answer))
    return entries


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def faq_loader(path: str):
    """Build the pipeline step that loads and pairs the FAQ file at ``path``."""

    async def load_faq(_: object) -> StepResult:
        try:
            text = await asyncio.to_thread(_read_text, path)
        except (OSError, UnicodeDecodeError):
            logger.exception(f"Could not read FAQ source {path}")
            return server_error()
        return Continue(pair_faq_lines(text))

    return load_faq
