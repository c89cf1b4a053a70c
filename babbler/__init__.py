"""Persistent per-speaker Markov-chain babbler."""

__version__ = "0.1.0"
