import logging
from typing import Dict, List, Optional, Set, Tuple

from . import events
from .evaluator import DRAW, O, SYMBOLS, X, empty_board, evaluate, other
from .outcome import Notice, Outcome

logger = logging.getLogger(__name__)


def make_room_id(x_sid: str, o_sid: str) -> str:
    return f"room-{x_sid}-{o_sid}"


class Room:
    """Authoritative state for one two-player match.

    The first member always plays X and moves first. Score survives
    rematches; the board is left in its terminal configuration after a
    result until both members vote for a rematch.
    """

    def __init__(self, x_sid: str, o_sid: str, room_id: Optional[str] = None):
        self.room_id = room_id or make_room_id(x_sid, o_sid)
        self.members: Dict[str, str] = {x_sid: X, o_sid: O}
        self.board: List[Optional[str]] = empty_board()
        self.turn = X
        self.score: Dict[str, int] = {s: 0 for s in SYMBOLS}
        self.streak: Dict[str, int] = {s: 0 for s in SYMBOLS}
        self.rematch_votes: Set[str] = set()
        self.result: Optional[str] = None

    @property
    def sids(self) -> Tuple[str, ...]:
        return tuple(self.members)

    def symbol_of(self, sid: str) -> Optional[str]:
        return self.members.get(sid)

    def opponent_of(self, sid: str) -> Optional[str]:
        for member in self.members:
            if member != sid:
                return member
        return None

    def snapshot(self) -> dict:
        return {
            'roomId': self.room_id,
            'board': list(self.board),
            'turn': self.turn,
            'score': dict(self.score),
            'streak': dict(self.streak),
        }

    def _to_all(self, event: str, payload=None) -> Notice:
        return Notice(event, payload, self.sids)

    def opening_notices(self) -> List[Notice]:
        notices = []
        for sid, symbol in self.members.items():
            notices.append(Notice(events.MATCH_FOUND, {'roomId': self.room_id, 'symbol': symbol}, (sid,)))
            notices.append(Notice(events.MATCH_STARTED, None, (sid,)))
        notices.append(self._to_all(events.GAME_STATE, self.snapshot()))
        return notices

    def apply_move(self, sid: str, index) -> Outcome:
        symbol = self.symbol_of(sid)
        if symbol is None:
            return Outcome.rejected('not_a_member')
        if isinstance(index, float) and index.is_integer():
            index = int(index)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < 9:
            return Outcome.rejected('invalid_index')
        if self.result is not None:
            return Outcome.rejected('game_over')
        if self.board[index] is not None:
            return Outcome.rejected('cell_occupied')
        if self.turn != symbol:
            return Outcome.rejected('not_your_turn')

        self.board[index] = symbol
        self.turn = other(symbol)
        logger.debug(f"[move] room={self.room_id} symbol={symbol} index={index}")

        result = evaluate(self.board)
        if result is None:
            return Outcome.accepted([self._to_all(events.GAME_STATE, self.snapshot())])

        if result == DRAW:
            for s in SYMBOLS:
                self.streak[s] = 0
        else:
            self.score[result] += 1
            self.streak[result] += 1
            self.streak[other(result)] = 0
        self.result = result
        logger.info(f"[game-over] room={self.room_id} result={result} score={self.score}")
        # gameState must precede gameOver
        return Outcome.accepted([
            self._to_all(events.GAME_STATE, self.snapshot()),
            self._to_all(events.GAME_OVER, result),
        ])

    def request_rematch(self, sid: str) -> Outcome:
        if sid not in self.members:
            return Outcome.rejected('not_a_member')
        if self.result is None:
            return Outcome.ignored('game_in_progress')
        if sid in self.rematch_votes:
            return Outcome.ignored('already_voted')
        self.rematch_votes.add(sid)
        if len(self.rematch_votes) < len(self.members):
            return Outcome.accepted()

        self.board = empty_board()
        self.turn = X
        self.result = None
        self.rematch_votes.clear()
        logger.info(f"[rematch] room={self.room_id} score={self.score} streak={self.streak}")
        return Outcome.accepted([
            self._to_all(events.REMATCH_STARTED),
            self._to_all(events.GAME_STATE, self.snapshot()),
        ])

    def relay_message(self, sid: str, text) -> Outcome:
        symbol = self.symbol_of(sid)
        if symbol is None:
            return Outcome.rejected('not_a_member')
        if not isinstance(text, str) or not text.strip():
            return Outcome.rejected('empty_message')
        return Outcome.accepted([self._to_all(events.RECEIVE_MESSAGE, {'sender': symbol, 'text': text})])
