from flask import current_app, request
from flask_socketio import emit
from typing import Any, Dict

from arena import get_lobby, socketio
from arena.services.matchmaking import Lobby, Outcome, events
from arena.services.matchmaking.outcome import REJECTED


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore

def _payload(data: Any) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}

def _deliver(outcome: Outcome, namespace: str) -> None:
    """Emit every notice an operation produced, in order."""
    for notice in outcome.notices:
        args = () if notice.payload is None else (notice.payload,)
        if notice.to is None:
            socketio.emit(notice.event, *args, namespace=namespace)
            continue
        for target in notice.to:
            socketio.emit(notice.event, *args, to=target, namespace=namespace)

def _finish(outcome: Outcome, action: str) -> None:
    if outcome.status != REJECTED:
        return
    current_app.logger.debug(f"[reject] sid={_get_sid()} action={action} reason={outcome.reason}")
    if current_app.config.get('EMIT_REJECTIONS'):
        emit(events.ERROR, {'action': action, 'message': outcome.reason})

def _run(action: str, operation, *args) -> Outcome:
    """Apply a lobby operation and deliver its notices under the dispatch lock."""
    lobby = get_lobby()
    with lobby.dispatch_lock:
        outcome = operation(*args)
        _deliver(outcome, request.namespace)
    _finish(outcome, action)
    return outcome


def handle_connect(auth=None):
    _run('connect', get_lobby().connect, _get_sid())


def handle_disconnect(reason=None):
    _run('disconnect', get_lobby().disconnect, _get_sid())


def handle_find_match(data=None):
    lobby = get_lobby()
    sid = _get_sid()
    outcome = _run(events.FIND_MATCH, lobby.seek_match, sid)
    deadline = lobby.waiting_deadline(sid)
    if outcome.ok and deadline is not None:
        socketio.start_background_task(_expire_after, lobby, sid, deadline, request.namespace)


def handle_cancel_search(data=None):
    _run(events.CANCEL_SEARCH, get_lobby().cancel_search, _get_sid())


def handle_make_move(data=None):
    data = _payload(data)
    _run(events.MAKE_MOVE, get_lobby().make_move, _get_sid(), data.get('roomId'), data.get('index'))


def handle_send_message(data=None):
    data = _payload(data)
    # The sender symbol comes from the room, never from the payload
    text = data.get('message', data.get('text'))
    _run(events.SEND_MESSAGE, get_lobby().send_message, _get_sid(), data.get('roomId'), text)


def handle_rematch(data=None):
    data = _payload(data)
    _run(events.REMATCH, get_lobby().request_rematch, _get_sid(), data.get('roomId'))


def handle_leave_room(data=None):
    data = _payload(data)
    _run(events.LEAVE_ROOM, get_lobby().leave_room, _get_sid(), data.get('roomId'))


# ---- Queue timeout ----

def _expire_after(lobby: Lobby, sid: str, deadline: float, namespace: str) -> None:
    socketio.sleep(lobby.matchmaking_timeout)
    with lobby.dispatch_lock:
        _deliver(lobby.expire_waiting(sid, deadline), namespace)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(events.FIND_MATCH, handle_find_match, namespace=namespace)
    socketio.on_event(events.CANCEL_SEARCH, handle_cancel_search, namespace=namespace)
    socketio.on_event(events.MAKE_MOVE, handle_make_move, namespace=namespace)
    socketio.on_event(events.SEND_MESSAGE, handle_send_message, namespace=namespace)
    socketio.on_event(events.REMATCH, handle_rematch, namespace=namespace)
    socketio.on_event(events.LEAVE_ROOM, handle_leave_room, namespace=namespace)
