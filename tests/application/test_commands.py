import random

import pytest

from babbler.application import commands
from babbler.application.commands import ChatMessage, CommandInterpreter, parse_command
from babbler.application.generator import Generator
from babbler.application.learner import Learner
from babbler.application.merger import Merger
from babbler.application.speakers import SpeakerRegistry
from babbler.domain.errors import StorageError


class _Logger:
    def __init__(self):
        self.warning_messages = []
        self.exception_messages = []

    def debug(self, message, *args):
        return None

    def info(self, message, *args):
        return None

    def warning(self, message, *args):
        self.warning_messages.append(message % args if args else message)

    def exception(self, message, *args):
        self.exception_messages.append(message % args if args else message)


class _RecordingSink:
    def __init__(self):
        self.replies = []

    def send_reply(self, channel, text):
        self.replies.append((channel, text))


class _Quotes:
    def __init__(self, quotes=None):
        self.quotes = quotes or {}

    def quotes_for(self, speaker_name):
        return list(self.quotes.get(speaker_name, []))


def _interpreter(store, *, quotes=None, rng=None, logger=None):
    logger = logger or _Logger()
    sink = _RecordingSink()
    learner = Learner(store, logger_instance=logger)
    registry = SpeakerRegistry(store, learner, _Quotes(quotes), logger_instance=logger)
    interpreter = CommandInterpreter(
        registry=registry,
        learner=learner,
        generator=Generator(store, rng or random.Random(0), logger_instance=logger),
        merger=Merger(store, logger_instance=logger),
        reply_sink=sink,
        logger_instance=logger,
    )
    return interpreter, sink


def _say(interpreter, body, *, user="alice", channel="#chat"):
    return interpreter.handle(ChatMessage(channel=channel, user=user, body=body))


@pytest.mark.parametrize(
    ("body", "kind", "speaker", "args"),
    [
        ("seabass says", commands.GENERATE, "seabass", ()),
        ("seabass SAYS hello there", commands.GENERATE, "seabass", ("hello", "there")),
        ("Initialize Babbler for Seabass", commands.INITIALIZE, "Seabass", ()),
        ("merge babbler alice AND bob", commands.MERGE, "alice", ("and", "bob")),
        ("merge babbler alice with bob", commands.MERGE, "alice", ("with", "bob")),
        ("initialize babbler for", commands.LEARN, "carol", ()),
        ("just chatting", commands.LEARN, "carol", ()),
    ],
)
def test_parse_command_classifies_lines(body, kind, speaker, args):
    command = parse_command(ChatMessage(channel="#chat", user="carol", body=body))

    assert command.kind == kind
    assert command.speaker == speaker
    assert command.args == args


def test_parse_batch_learn_keeps_remaining_text():
    command = parse_command(
        ChatMessage(channel="#chat", user="carol", body="batch learn for bob hi there. bye!")
    )

    assert command.kind == commands.BATCH_LEARN
    assert command.speaker == "bob"
    assert command.text == " hi there. bye!"


def test_passive_learning_creates_speaker_without_reply(store):
    interpreter, sink = _interpreter(store)

    assert _say(interpreter, "hello world") is None

    alice = store.get_speaker("alice")
    assert store.get_node(alice, store.get_word("hello")).root_frequency == 1
    assert sink.replies == []


def test_generate_replies_in_the_same_channel(store):
    interpreter, sink = _interpreter(store)
    _say(interpreter, "the quick brown fox")

    reply = _say(interpreter, "alice says", user="bob", channel="#other")

    assert reply == "the quick brown fox"
    assert sink.replies == [("#other", "the quick brown fox")]


def test_generate_with_seed(store):
    interpreter, _sink = _interpreter(store)
    _say(interpreter, "the quick brown fox")

    assert _say(interpreter, "alice says quick", user="bob") == "quick brown fox"


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("nobody says", "nobody babbler not found."),
        ("alice says zebra", "alice never said 'zebra'"),
        ("alice says fox the", "alice never said 'fox the'"),
        ("Alice says", "Alice babbler not found."),
    ],
)
def test_generate_failure_replies(store, body, expected):
    interpreter, sink = _interpreter(store)
    _say(interpreter, "the quick brown fox")

    assert _say(interpreter, body, user="bob") == expected
    assert sink.replies[-1] == ("#chat", expected)


def test_generate_for_silent_speaker(store):
    interpreter, _sink = _interpreter(store)
    store.create_speaker("bob")

    assert _say(interpreter, "bob says") == "bob hasn't said anything yet."


def test_generate_dead_end_is_reported_and_logged(store):
    logger = _Logger()
    interpreter, _sink = _interpreter(store, logger=logger)
    bob = store.create_speaker("bob")
    store.increment_root(store.get_or_create_node(bob, store.get_or_create_word("lonely")))

    assert _say(interpreter, "bob says") == "bob ran out of things to say."
    assert logger.warning_messages


def test_initialize_backfills_from_quotes(store):
    interpreter, sink = _interpreter(store, quotes={"seabass": ["i like fish"]})

    assert _say(interpreter, "initialize babbler for seabass") == "okay."
    assert _say(interpreter, "seabass says") == "i like fish"
    assert sink.replies[0] == ("#chat", "okay.")


def test_initialize_failure_reply(store):
    logger = _Logger()
    interpreter, _sink = _interpreter(store, logger=logger)

    def fail(name):
        raise StorageError("locked")

    interpreter.registry.get_or_create_speaker = fail

    assert _say(interpreter, "initialize babbler for seabass") == "babbler initialization failed."
    assert logger.exception_messages


def test_batch_learn_splits_sentences(store):
    interpreter, _sink = _interpreter(store)

    reply = _say(interpreter, "batch learn for bob hello world. hello there!\nbye")

    assert reply == "phew that was tiring."
    bob = store.get_speaker("bob")
    assert store.get_node(bob, store.get_word("hello")).root_frequency == 2
    assert store.get_node(bob, store.get_word("bye")).root_frequency == 1


def test_merge_reply_and_effect(store):
    interpreter, _sink = _interpreter(store)
    _say(interpreter, "a b", user="alice")
    _say(interpreter, "a b", user="bob")

    assert _say(interpreter, "merge babbler alice and bob") == "mooooiggged"

    alice = store.get_speaker("alice")
    a_node = store.get_node(alice, store.get_word("a"))
    b_node = store.get_node(alice, store.get_word("b"))
    assert store.get_arc(a_node, b_node).frequency == 2


def test_merge_usage_and_missing_speakers(store):
    interpreter, _sink = _interpreter(store)
    _say(interpreter, "a b", user="alice")

    assert _say(interpreter, "merge babbler alice with bob") == commands.MERGE_USAGE
    assert _say(interpreter, "merge babbler alice and bob") == "bob babbler not found."
    assert _say(interpreter, "merge babbler carol and alice") == "carol babbler not found."


def test_merge_into_itself_reports_failure(store):
    logger = _Logger()
    interpreter, _sink = _interpreter(store, logger=logger)
    _say(interpreter, "a b", user="alice")

    reply = _say(interpreter, "merge babbler alice and alice")

    assert reply.startswith("could not merge alice into alice")
    assert logger.exception_messages


def test_help_sends_usage_text(store):
    interpreter, sink = _interpreter(store)

    interpreter.help("#chat")

    assert sink.replies == [("#chat", commands.HELP_TEXT)]
