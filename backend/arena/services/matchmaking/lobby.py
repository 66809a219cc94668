import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Set

from . import events
from .outcome import Notice, Outcome
from .room import Room

logger = logging.getLogger(__name__)

QUEUED = 'queue'


class Lobby:
    """Process-wide matchmaking state.

    Owns the online set, the waiting queue, the room table and the
    sid -> location map ('queue' or a room id). Every public operation
    holds ``_lock`` for its whole duration and returns an Outcome. The
    caller delivers the notices, holding ``dispatch_lock`` around both
    steps so notices leave in the order the operations were applied.
    """

    def __init__(self, matchmaking_timeout: float = 0, clock: Callable[[], float] = time.monotonic):
        self.matchmaking_timeout = matchmaking_timeout
        self._clock = clock
        self._lock = threading.Lock()
        # Held by the transport across an operation and the delivery of its notices
        self.dispatch_lock = threading.Lock()
        self._online: Set[str] = set()
        self._queue: Deque[str] = deque()
        self._deadlines: Dict[str, float] = {}
        self._rooms: Dict[str, Room] = {}
        self._locations: Dict[str, str] = {}

    # ---- Introspection ----

    @property
    def online_count(self) -> int:
        return len(self._online)

    def queued(self) -> List[str]:
        with self._lock:
            return list(self._queue)

    def room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def location_of(self, sid: str) -> Optional[str]:
        return self._locations.get(sid)

    def waiting_deadline(self, sid: str) -> Optional[float]:
        return self._deadlines.get(sid)

    def stats(self) -> dict:
        with self._lock:
            return {
                'online': len(self._online),
                'waiting': len(self._queue),
                'rooms': len(self._rooms),
            }

    # ---- Presence ----

    def connect(self, sid: str) -> Outcome:
        with self._lock:
            self._online.add(sid)
            return Outcome.accepted([self._online_notice()])

    def disconnect(self, sid: str) -> Outcome:
        with self._lock:
            self._online.discard(sid)
            notices = [self._online_notice()]
            notices.extend(self._evict(sid))
            logger.info(f"[disconnect] sid={sid} online={len(self._online)}")
            return Outcome.accepted(notices)

    # ---- Matchmaking ----

    def seek_match(self, sid: str) -> Outcome:
        with self._lock:
            if sid not in self._online:
                return Outcome.rejected('not_connected')
            location = self._locations.get(sid)
            if location == QUEUED:
                return Outcome.ignored('already_queued')
            if location is not None:
                return Outcome.rejected('already_in_room')

            self._queue.append(sid)
            self._locations[sid] = QUEUED
            if self.matchmaking_timeout:
                self._deadlines[sid] = self._clock() + self.matchmaking_timeout

            notices: List[Notice] = []
            if len(self._queue) == 1:
                notices.append(Notice(events.WAITING, None, (sid,)))
            while len(self._queue) >= 2:
                x_sid = self._queue.popleft()
                o_sid = self._queue.popleft()
                notices.extend(self._open_room(x_sid, o_sid))
            return Outcome.accepted(notices)

    def cancel_search(self, sid: str) -> Outcome:
        with self._lock:
            if self._locations.get(sid) != QUEUED:
                return Outcome.ignored('not_queued')
            self._unqueue(sid)
            return Outcome.accepted()

    def expire_waiting(self, sid: str, deadline: float) -> Outcome:
        """Drop ``sid`` from the queue if it is still waiting on ``deadline``."""
        with self._lock:
            if self._locations.get(sid) != QUEUED or self._deadlines.get(sid) != deadline:
                return Outcome.ignored('not_waiting')
            self._unqueue(sid)
            logger.info(f"[queue-timeout] sid={sid}")
            return Outcome.accepted([Notice(events.MATCH_TIMEOUT, None, (sid,))])

    # ---- Room operations ----

    def make_move(self, sid: str, room_id: str, index) -> Outcome:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return Outcome.rejected('unknown_room')
            return room.apply_move(sid, index)

    def request_rematch(self, sid: str, room_id: str) -> Outcome:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return Outcome.rejected('unknown_room')
            return room.request_rematch(sid)

    def send_message(self, sid: str, room_id: str, text) -> Outcome:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return Outcome.rejected('unknown_room')
            return room.relay_message(sid, text)

    def leave_room(self, sid: str, room_id: str) -> Outcome:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return Outcome.rejected('unknown_room')
            if room.symbol_of(sid) is None:
                return Outcome.rejected('not_a_member')
            self._locations.pop(sid, None)
            return Outcome.accepted(self._dissolve(room, sid))

    # ---- Internals (call with _lock held) ----

    def _online_notice(self) -> Notice:
        return Notice(events.ONLINE_COUNT, len(self._online))

    def _unqueue(self, sid: str) -> None:
        try:
            self._queue.remove(sid)
        except ValueError:
            pass
        self._deadlines.pop(sid, None)
        if self._locations.get(sid) == QUEUED:
            del self._locations[sid]

    def _open_room(self, x_sid: str, o_sid: str) -> List[Notice]:
        room = Room(x_sid, o_sid)
        self._rooms[room.room_id] = room
        for sid in room.sids:
            self._locations[sid] = room.room_id
            self._deadlines.pop(sid, None)
        logger.info(f"[match] room={room.room_id} x={x_sid} o={o_sid}")
        return room.opening_notices()

    def _dissolve(self, room: Room, leaver: str) -> List[Notice]:
        self._rooms.pop(room.room_id, None)
        notices = []
        for sid in room.sids:
            if sid == leaver:
                continue
            if self._locations.get(sid) == room.room_id:
                del self._locations[sid]
            notices.append(Notice(events.OPPONENT_DISCONNECTED, None, (sid,)))
        logger.info(f"[room-closed] room={room.room_id} leaver={leaver} score={room.score}")
        return notices

    def _evict(self, sid: str) -> List[Notice]:
        if self._locations.get(sid) == QUEUED:
            self._unqueue(sid)
            return []
        self._locations.pop(sid, None)
        notices: List[Notice] = []
        # Every room holding sid, not only the mapped one
        for room in [r for r in self._rooms.values() if sid in r.members]:
            notices.extend(self._dissolve(room, sid))
        return notices
