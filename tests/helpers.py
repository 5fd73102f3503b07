"""Drop-instrumented value type for tests."""

import weakref
from dataclasses import dataclass


@dataclass
class Recorder:
    """Counts copies of a Tracked value and notes when any instance dies."""

    copies: int = 0
    dropped: bool = False


def _mark_dropped(recorder: Recorder) -> None:
    recorder.dropped = True


class Tracked:
    """Orderable value that reports copies and drops to its Recorder."""

    def __init__(self, label: str, recorder: Recorder | None = None):
        self.label = label
        self.recorder = recorder if recorder is not None else Recorder()
        weakref.finalize(self, _mark_dropped, self.recorder)

    def __lt__(self, other: "Tracked") -> bool:
        return self.label < other.label

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Tracked):
            return self.label == other.label
        return False

    def __hash__(self) -> int:
        return hash(self.label)

    def __copy__(self) -> "Tracked":
        self.recorder.copies += 1
        return Tracked(self.label, self.recorder)

    def __deepcopy__(self, memo: dict) -> "Tracked":
        return self.__copy__()

    def __repr__(self) -> str:
        return f"Tracked({self.label!r})"


def create_tracked(label: str = "tracked") -> tuple[Recorder, Tracked]:
    recorder = Recorder()
    return recorder, Tracked(label, recorder)
