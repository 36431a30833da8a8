"""Linear undo/redo history for editor snapshots."""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class History:
    """
    Undo/redo buffer as a pair of stacks around the present state.

    Every method returns a new History. Recording a state after an undo
    discards the redo branch. At most `limit` past states are kept.
    """

    present: Any
    past: tuple = ()
    future: tuple = ()
    limit: int = 100

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def record(self, state) -> "History":
        past = (self.past + (self.present,))[-self.limit :] if self.limit > 0 else ()
        return replace(self, present=state, past=past, future=())

    def undo(self) -> "History":
        if not self.past:
            return self
        return replace(
            self,
            present=self.past[-1],
            past=self.past[:-1],
            future=(self.present,) + self.future,
        )

    def redo(self) -> "History":
        if not self.future:
            return self
        return replace(
            self,
            present=self.future[0],
            past=self.past + (self.present,),
            future=self.future[1:],
        )
