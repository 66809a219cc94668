"""Socket.IO event names shared by the lobby and the transport."""

# Inbound
FIND_MATCH = 'findMatch'
CANCEL_SEARCH = 'cancelSearch'
MAKE_MOVE = 'makeMove'
SEND_MESSAGE = 'sendMessage'
REMATCH = 'rematch'
LEAVE_ROOM = 'leaveRoom'

# Outbound
ONLINE_COUNT = 'onlineCount'
WAITING = 'waiting'
MATCH_FOUND = 'matchFound'
MATCH_STARTED = 'matchStarted'
GAME_STATE = 'gameState'
GAME_OVER = 'gameOver'
REMATCH_STARTED = 'rematchStarted'
RECEIVE_MESSAGE = 'receiveMessage'
OPPONENT_DISCONNECTED = 'opponentDisconnected'
MATCH_TIMEOUT = 'matchTimeout'
ERROR = 'error'
