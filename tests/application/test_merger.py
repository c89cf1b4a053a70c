import pytest

from babbler.application.learner import Learner
from babbler.application.merger import Merger
from babbler.domain.errors import BabblerError, NeverSaid, SpeakerNotFound
from babbler.domain.tokens import TERMINAL_WORD, boundary_word


class _Logger:
    def __init__(self):
        self.info_messages = []

    def info(self, message, *args):
        self.info_messages.append(message % args if args else message)

    def exception(self, message, *args):
        raise AssertionError(message % args if args else message)


def _teach(store, name, *lines):
    speaker = store.create_speaker(name)
    Learner(store, logger_instance=_Logger()).learn_lines(speaker, lines)
    return speaker


def _node(store, speaker, text):
    return store.get_node(speaker, store.get_word(text))


def _frequency(store, speaker, from_text, to_text):
    return store.get_arc(_node(store, speaker, from_text), _node(store, speaker, to_text)).frequency


def test_merge_into_empty_speaker_copies_weights(store):
    alice = store.create_speaker("alice")
    _teach(store, "bob", "a b", "a b", "a b", "a c")

    Merger(store, logger_instance=_Logger()).merge("alice", "bob")

    assert _frequency(store, alice, "a", "b") == 3
    assert _frequency(store, alice, "a", "c") == 1
    assert _frequency(store, alice, "b", TERMINAL_WORD) == 3
    assert _node(store, alice, "a").root_frequency == 4


def test_merge_sums_overlapping_transitions_and_roots(store):
    alice = _teach(store, "alice", "a b", "x y")
    _teach(store, "bob", "a b", "a b")

    Merger(store, logger_instance=_Logger()).merge("alice", "bob")

    assert _frequency(store, alice, "a", "b") == 3
    assert _node(store, alice, "a").root_frequency == 3
    assert _node(store, alice, "x").root_frequency == 1
    assert _node(store, alice, "x").is_root is True


def test_merge_leaves_other_speaker_untouched(store):
    _teach(store, "alice", "hello there")
    bob = _teach(store, "bob", "a b", "a b")

    Merger(store, logger_instance=_Logger()).merge("alice", "bob")

    assert _frequency(store, bob, "a", "b") == 2
    assert _node(store, bob, "a").root_frequency == 2
    with pytest.raises(NeverSaid):
        _node(store, bob, "hello")


def test_merge_redirects_boundary_marker_to_target(store):
    alice = store.create_speaker("alice")
    _teach(store, "bob", "hi")

    Merger(store, logger_instance=_Logger()).merge("alice", "bob")

    assert _node(store, alice, boundary_word("alice")).speaker_id == alice.id
    with pytest.raises(NeverSaid):
        _node(store, alice, boundary_word("bob"))


def test_merge_report_counts_replayed_graph(store):
    store.create_speaker("alice")
    _teach(store, "bob", "a b", "a b", "a b")
    logger = _Logger()

    report = Merger(store, logger_instance=logger).merge("alice", "bob")

    # a, b, the end marker and bob's boundary node
    assert report.nodes_merged == 4
    assert report.arcs_replayed == 2
    assert report.transitions_replayed == 6
    assert (report.into, report.other) == ("alice", "bob")
    assert any("Merged babbler bob into alice" in item for item in logger.info_messages)


def test_merge_requires_both_speakers(store):
    store.create_speaker("alice")
    merger = Merger(store, logger_instance=_Logger())

    with pytest.raises(SpeakerNotFound) as missing_other:
        merger.merge("alice", "bob")
    with pytest.raises(SpeakerNotFound) as missing_into:
        merger.merge("carol", "alice")

    assert missing_other.value.name == "bob"
    assert missing_into.value.name == "carol"


def test_merge_into_itself_is_rejected(store):
    _teach(store, "alice", "a b")

    with pytest.raises(BabblerError):
        Merger(store, logger_instance=_Logger()).merge("alice", "alice")

    assert _frequency(store, store.get_speaker("alice"), "a", "b") == 1
