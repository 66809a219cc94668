from typing import List, Optional, Tuple

X = 'X'
O = 'O'
SYMBOLS: Tuple[str, str] = (X, O)
DRAW = 'draw'

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def other(symbol: str) -> str:
    return O if symbol == X else X


def empty_board() -> List[Optional[str]]:
    return [None] * 9


def evaluate(board: List[Optional[str]]) -> Optional[str]:
    """Return the winning symbol, DRAW for a full board, or None while in play."""
    for a, b, c in WINNING_LINES:
        mark = board[a]
        if mark is not None and mark == board[b] == board[c]:
            return mark
    if all(cell is not None for cell in board):
        return DRAW
    return None
