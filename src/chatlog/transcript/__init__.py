"""Transcript segmentation: raw markdown text to question/answer exchanges."""

from chatlog.transcript.parser import (
    count_exchanges,
    first_question_preview,
    outline,
    parse_conversation,
    question_preview,
)

__all__ = [
    "count_exchanges",
    "first_question_preview",
    "outline",
    "parse_conversation",
    "question_preview",
]
