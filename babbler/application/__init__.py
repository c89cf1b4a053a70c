"""Application layer orchestration."""

from .bootstrap import BabblerServices, initialize_services
from .commands import ChatMessage, Command, CommandInterpreter, parse_command
from .generator import Generator
from .learner import Learner
from .merger import MergeReport, Merger
from .ports import GraphStore, QuoteSource, ReplySink
from .replies import BufferedReplySink
from .speakers import SpeakerRegistry

__all__ = [
    "BabblerServices",
    "BufferedReplySink",
    "ChatMessage",
    "Command",
    "CommandInterpreter",
    "Generator",
    "GraphStore",
    "Learner",
    "MergeReport",
    "Merger",
    "QuoteSource",
    "ReplySink",
    "SpeakerRegistry",
    "initialize_services",
    "parse_command",
]
