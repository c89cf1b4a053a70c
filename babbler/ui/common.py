"""UI-neutral helpers shared by chat surfaces."""
from __future__ import annotations

from ..application.commands import ChatMessage, CommandInterpreter
from ..application.replies import BufferedReplySink

APP_TITLE = "Babbler"

USAGE_NOTE = (
    "Talk normally to teach the babbler how you speak.\n\n"
    "`<name> says [words...]` makes a babbler talk, optionally starting from your words.\n\n"
    "`initialize babbler for <name>` creates a babbler from stored quotes.\n\n"
    "`batch learn for <name> <text>` teaches a babbler several sentences at once.\n\n"
    "`merge babbler <a> and <b>` folds b's babbler into a's.\n"
)


def format_transcript_line(speaker: str, text: str) -> str:
    return f"{speaker}: {text}"


def append_transcript(transcript: str, lines: list[str]) -> str:
    existing = str(transcript or "").rstrip("\n")
    if not lines:
        return existing
    if existing:
        return existing + "\n" + "\n".join(lines)
    return "\n".join(lines)


def submit_chat_line(
    interpreter: CommandInterpreter,
    reply_sink: BufferedReplySink,
    *,
    user: str,
    channel: str,
    message: str,
    transcript: str,
    bot_name: str = "babbler",
) -> str:
    """Run one chat line and return the transcript with the exchange appended."""
    text = str(message or "").strip()
    if not text:
        return str(transcript or "")
    speaker = str(user or "").strip() or "anonymous"
    room = str(channel or "").strip() or "general"
    interpreter.handle(ChatMessage(channel=room, user=speaker, body=text))
    lines = [format_transcript_line(speaker, text)]
    lines.extend(format_transcript_line(bot_name, reply) for reply in reply_sink.drain(room))
    return append_transcript(transcript, lines)


def help_transcript(
    interpreter: CommandInterpreter,
    reply_sink: BufferedReplySink,
    *,
    channel: str,
    transcript: str,
    bot_name: str = "babbler",
) -> str:
    room = str(channel or "").strip() or "general"
    interpreter.help(room)
    lines = [format_transcript_line(bot_name, reply) for reply in reply_sink.drain(room)]
    return append_transcript(transcript, lines)
