"""Chat command parsing and dispatch for the babbler."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..domain.errors import (
    BabblerError,
    MissingArcs,
    NeverSaid,
    NoUtterances,
    SpeakerNotFound,
)
from ..domain.tokens import split_batch_lines
from .generator import Generator
from .learner import Learner
from .merger import Merger
from .ports import ReplySink
from .speakers import SpeakerRegistry

logger = logging.getLogger(__name__)

HELP_TEXT = "initialize babbler for seabass\n\nseabass says"
MERGE_USAGE = "merge babbler [x] and [y]"

GENERATE = "generate"
INITIALIZE = "initialize"
BATCH_LEARN = "batch_learn"
MERGE = "merge"
LEARN = "learn"

_BATCH_LEARN_RE = re.compile(r"^\s*batch\s+learn\s+for\s+(\S+)(.*)$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class ChatMessage:
    channel: str
    user: str
    body: str


@dataclass(frozen=True)
class Command:
    kind: str
    speaker: str = ""
    args: tuple[str, ...] = field(default_factory=tuple)
    text: str = ""


def parse_command(message: ChatMessage) -> Command:
    """Classify a chat line; anything unrecognised is passive learning."""
    body = str(message.body or "")
    tokens = body.split()
    lowered = [token.lower() for token in tokens]

    if len(tokens) >= 2 and lowered[1] == "says":
        return Command(GENERATE, speaker=tokens[0], args=tuple(tokens[2:]))
    if len(tokens) == 4 and lowered[:3] == ["initialize", "babbler", "for"]:
        return Command(INITIALIZE, speaker=tokens[3])
    batch = _BATCH_LEARN_RE.match(body)
    if batch is not None:
        return Command(BATCH_LEARN, speaker=batch.group(1), text=batch.group(2))
    if len(tokens) == 5 and lowered[:2] == ["merge", "babbler"]:
        return Command(MERGE, speaker=tokens[2], args=(lowered[3], tokens[4]))
    return Command(LEARN, speaker=message.user, text=body)


class CommandInterpreter:
    def __init__(
        self,
        *,
        registry: SpeakerRegistry,
        learner: Learner,
        generator: Generator,
        merger: Merger,
        reply_sink: ReplySink,
        logger_instance=None,
    ) -> None:
        self.registry = registry
        self.learner = learner
        self.generator = generator
        self.merger = merger
        self.reply_sink = reply_sink
        self.logger = logger_instance or logger

    def handle(self, message: ChatMessage) -> str | None:
        """Run the command carried by ``message`` and deliver any reply."""
        command = parse_command(message)
        self.logger.debug(
            "Babbler command: kind=%s speaker=%s channel=%s",
            command.kind,
            command.speaker,
            message.channel,
        )
        if command.kind == GENERATE:
            reply = self._generate(command)
        elif command.kind == INITIALIZE:
            reply = self._initialize(command)
        elif command.kind == BATCH_LEARN:
            reply = self._batch_learn(command)
        elif command.kind == MERGE:
            reply = self._merge(command)
        else:
            reply = self._learn(command)
        if reply:
            self.reply_sink.send_reply(message.channel, reply)
        return reply

    def help(self, channel: str) -> None:
        self.reply_sink.send_reply(channel, HELP_TEXT)

    def _generate(self, command: Command) -> str | None:
        who = command.speaker
        try:
            return self.generator.generate(who, command.args) or None
        except SpeakerNotFound:
            return f"{who} babbler not found."
        except NoUtterances:
            return f"{who} hasn't said anything yet."
        except NeverSaid:
            return f"{who} never said '{' '.join(command.args)}'"
        except MissingArcs:
            self.logger.warning("Babbler for %s hit a node without transitions", who)
            return f"{who} ran out of things to say."
        except BabblerError:
            self.logger.exception("Babble failed for %s", who)
            return None

    def _initialize(self, command: Command) -> str:
        try:
            self.registry.get_or_create_speaker(command.speaker)
        except BabblerError:
            self.logger.exception("Babbler initialization failed for %s", command.speaker)
            return "babbler initialization failed."
        return "okay."

    def _batch_learn(self, command: Command) -> str:
        try:
            speaker = self.registry.get_or_create_speaker(command.speaker)
        except BabblerError:
            self.logger.exception("Batch learn failed for %s", command.speaker)
            return "babbler initialization failed."
        lines = split_batch_lines(command.text)
        learned = self.learner.learn_lines(speaker, lines)
        self.logger.info(
            "Batch learned for %s: learned=%s lines=%s",
            speaker.name,
            learned,
            len(lines),
        )
        return "phew that was tiring."

    def _merge(self, command: Command) -> str:
        connector, other = command.args
        if connector != "and":
            return MERGE_USAGE
        into = command.speaker
        try:
            self.merger.merge(into, other)
        except SpeakerNotFound as exc:
            return f"{exc.name} babbler not found."
        except BabblerError as exc:
            self.logger.exception("Merge of %s into %s failed", other, into)
            return f"could not merge {other} into {into}: {exc}"
        return "mooooiggged"

    def _learn(self, command: Command) -> None:
        if not command.speaker or not command.text.split():
            return None
        try:
            speaker = self.registry.get_or_create_speaker(command.speaker)
        except BabblerError:
            self.logger.exception("Failed to prepare babbler for %s", command.speaker)
            return None
        self.learner.learn(speaker, command.text)
        return None
