"""Action identities for widget controls and the registry that activates them."""

from dataclasses import dataclass
from typing import Callable, NamedTuple

PREV = "prev"
NEXT = "next"
OPEN = "open"

KINDS = (PREV, NEXT, OPEN)


@dataclass(frozen=True)
class ActionRef:
    """One control on one widget instance.

    Two refs are equal only if both the kind and the instance match, so
    controls never share an identity across instances or directions.
    """

    kind: str
    instance_id: int

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ValueError(f"unknown action kind: {self.kind!r}")

    @property
    def token(self) -> str:
        return f"{self.kind}:{self.instance_id}"


class PendingAction(NamedTuple):
    request_code: int
    ref: ActionRef


class ActionRegistry:
    """Hands out pending actions and routes their activation to *handler*.

    Request codes are allocated in order of first use and never reused, so
    the same ref always gets the same code and different refs never collide.
    """

    def __init__(self, handler: Callable[[ActionRef], None]) -> None:
        self._handler = handler
        self._codes: dict[ActionRef, int] = {}
        self._by_code: dict[int, ActionRef] = {}

    def pending(self, ref: ActionRef) -> PendingAction:
        code = self._codes.get(ref)
        if code is None:
            code = len(self._codes)
            self._codes[ref] = code
            self._by_code[code] = ref
        return PendingAction(code, ref)

    def lookup(self, request_code: int) -> ActionRef:
        return self._by_code[request_code]

    def fire(self, action: "PendingAction | ActionRef") -> None:
        if isinstance(action, PendingAction):
            ref = self.lookup(action.request_code)
        else:
            ref = action
        self._handler(ref)
