"""Matchmaking domain services: queue, rooms and win evaluation.

This package holds the session engine that socket handlers call into.
Nothing here touches Socket.IO directly; operations return an Outcome
carrying the notices the transport should deliver.
"""

from .evaluator import DRAW, evaluate
from .lobby import Lobby
from .outcome import Notice, Outcome
from .room import Room

__all__ = ['DRAW', 'evaluate', 'Lobby', 'Notice', 'Outcome', 'Room']
