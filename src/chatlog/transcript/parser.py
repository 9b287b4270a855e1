"""Conversation parser — markdown transcript text to Exchange records.

Transcripts exported from chat assistants look like::

    # you asked
    What is X?
    # assistant response
    X is Y.
    ---
    # you asked
    ...

Blocks are separated by a line holding only ``---``. Within a block the
response header splits question from answer. Blocks with no recognizable
headers fall back to answer-only, so parsing never fails.
"""

from __future__ import annotations

import re

from chatlog.core.models import Exchange

# Role labels that may precede "response" in an answer header
RESPONSE_ROLES = ("gemini", "assistant", "ai", "claude", "gpt", "chatgpt")

# Horizontal rule between exchanges: a line with exactly three hyphens
_BLOCK_DELIMITER = "\n---\n"

# "# assistant response" and friends, alone on their line
_RESPONSE_HEADER_RE = re.compile(
    r"^#[ \t]+(?:" + "|".join(RESPONSE_ROLES) + r")[ \t]+response[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

# "# you asked", alone on its line
_QUESTION_HEADER_RE = re.compile(
    r"^#[ \t]+you[ \t]+asked[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

# Markup dropped from preview text
_PREVIEW_MARKUP_RE = re.compile(r"[#*_`]")
_OUTLINE_MARKUP_RE = re.compile(r"[#*_`\[\]]")

NO_QUESTION_LABEL = "(no question)"


def parse_conversation(content: str) -> list[Exchange]:
    """Split transcript text into an ordered list of exchanges.

    Total over all strings: empty or whitespace-only content yields an
    empty list, content without delimiters yields at most one exchange.
    """
    content = content.replace("\r\n", "\n")
    exchanges: list[Exchange] = []

    for raw in content.split(_BLOCK_DELIMITER):
        block = raw.strip()
        if not block:
            continue

        exchange = _parse_block(block)
        if exchange.question or exchange.answer:
            exchanges.append(exchange)

    return exchanges


def _parse_block(block: str) -> Exchange:
    """Parse one delimited block.

    Precedence: response header, then question header alone, then the
    whole block as an answer.
    """
    response = _RESPONSE_HEADER_RE.search(block)
    if response:
        question = _strip_question_header(block[: response.start()])
        answer = block[response.end():].strip()
        return Exchange(question=question, answer=answer)

    if _QUESTION_HEADER_RE.search(block):
        return Exchange(question=_strip_question_header(block))

    return Exchange(answer=block)


def _strip_question_header(text: str) -> str:
    """Remove the first "you asked" header line and trim."""
    return _QUESTION_HEADER_RE.sub("", text.strip(), count=1).strip()


def count_exchanges(content: str) -> int:
    """Number of exchanges in a document."""
    return len(parse_conversation(content))


def first_question_preview(content: str, limit: int = 50) -> str:
    """Plain-text preview of the first question, truncated to ``limit`` chars.

    Returns an empty string when the first exchange has no question.
    """
    return question_preview(parse_conversation(content), limit)


def question_preview(exchanges: list[Exchange], limit: int = 50) -> str:
    """Same as :func:`first_question_preview`, for already-parsed exchanges."""
    if not exchanges or not exchanges[0].question:
        return ""
    text = _PREVIEW_MARKUP_RE.sub("", exchanges[0].question).strip()
    return text[:limit]


def outline(exchanges: list[Exchange], limit: int = 60) -> list[str]:
    """One short label per exchange, for jumping around a long transcript."""
    labels = []
    for exchange in exchanges:
        if not exchange.question:
            labels.append(NO_QUESTION_LABEL)
            continue
        text = _OUTLINE_MARKUP_RE.sub("", exchange.question).strip()
        label = text[:limit]
        if len(label) >= limit:
            label += "..."
        labels.append(label)
    return labels
