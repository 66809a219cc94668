from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

ACCEPTED = 'accepted'
IGNORED = 'ignored'
REJECTED = 'rejected'


@dataclass(frozen=True)
class Notice:
    """One outbound event.

    ``to`` lists the recipient sids; ``None`` means broadcast to everyone
    on the namespace.
    """
    event: str
    payload: Any = None
    to: Optional[Tuple[str, ...]] = None


@dataclass
class Outcome:
    status: str
    reason: Optional[str] = None
    notices: List[Notice] = field(default_factory=list)

    @classmethod
    def accepted(cls, notices: Optional[List[Notice]] = None) -> 'Outcome':
        return cls(ACCEPTED, notices=list(notices or []))

    @classmethod
    def ignored(cls, reason: Optional[str] = None) -> 'Outcome':
        return cls(IGNORED, reason=reason)

    @classmethod
    def rejected(cls, reason: str) -> 'Outcome':
        return cls(REJECTED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == ACCEPTED

    def events(self) -> List[str]:
        return [n.event for n in self.notices]
