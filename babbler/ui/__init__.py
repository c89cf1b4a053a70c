"""User interface layer."""

from .common import (
    APP_TITLE,
    USAGE_NOTE,
    append_transcript,
    help_transcript,
    submit_chat_line,
)

__all__ = [
    "APP_TITLE",
    "USAGE_NOTE",
    "append_transcript",
    "help_transcript",
    "submit_chat_line",
]
