"""Line-oriented console chat surface."""
from __future__ import annotations

import sys
from typing import TextIO

from ..application.commands import ChatMessage, CommandInterpreter

QUIT_COMMANDS = ("/quit", "/exit")


class ConsoleReplySink:
    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def send_reply(self, channel: str, text: str) -> None:
        print(f"[{channel}] {text}", file=self.stream, flush=True)


def run_console(
    interpreter: CommandInterpreter,
    *,
    user: str,
    channel: str = "console",
    input_stream: TextIO | None = None,
    output_stream: TextIO | None = None,
    prompt: str = "> ",
    logger=None,
) -> int:
    """Feed console lines to the interpreter until EOF or a quit command.

    ``/help`` prints usage and ``/user NAME`` switches the sending user.
    Returns the number of chat lines handled.
    """
    source = input_stream or sys.stdin
    sink = output_stream or sys.stdout
    current_user = user
    handled = 0
    if logger is not None:
        logger.info("Console chat started as %s on %s", current_user, channel)
    while True:
        if prompt:
            print(prompt, end="", file=sink, flush=True)
        line = source.readline()
        if not line:
            break
        text = line.rstrip("\n")
        command = text.strip().lower()
        if command in QUIT_COMMANDS:
            break
        if command == "/help":
            interpreter.help(channel)
            continue
        if command.startswith("/user "):
            current_user = text.strip()[len("/user "):].strip() or current_user
            print(f"now speaking as {current_user}", file=sink, flush=True)
            continue
        if not text.strip():
            continue
        interpreter.handle(ChatMessage(channel=channel, user=current_user, body=text))
        handled += 1
    if logger is not None:
        logger.info("Console chat finished: lines=%s", handled)
    return handled
