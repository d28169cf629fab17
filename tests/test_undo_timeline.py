from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from edit_engine.buffer import UndoTimeline


@dataclass
class RecordingScrap:
    name: str
    journal: List[str]
    absorbs: bool = False
    merged: List[str] = field(default_factory=list)

    def undo(self) -> None:
        self.journal.append(f"undo:{self.name}")

    def redo(self) -> None:
        self.journal.append(f"redo:{self.name}")

    def merge(self, other) -> bool:
        if not self.absorbs:
            return False
        self.merged.append(other.name)
        return True


def make_timeline(count: int) -> tuple[UndoTimeline, List[str]]:
    journal: List[str] = []
    timeline = UndoTimeline()
    for idx in range(count):
        timeline.perform(lambda idx=idx: RecordingScrap(f"s{idx}", journal))
    return timeline, journal


def test_perform_records_scraps() -> None:
    timeline, _journal = make_timeline(3)

    assert len(timeline) == 3
    assert timeline.pointer == 3
    assert timeline.can_undo()
    assert not timeline.can_redo()


def test_actions_without_scrap_leave_history_alone() -> None:
    timeline, _journal = make_timeline(2)
    timeline.undo()

    assert timeline.perform(lambda: None) is None

    assert len(timeline) == 2
    assert timeline.can_redo()


def test_undo_and_redo_walk_the_pointer() -> None:
    timeline, journal = make_timeline(2)

    assert timeline.undo()
    assert timeline.undo()
    assert timeline.redo()

    assert journal == ["undo:s1", "undo:s0", "redo:s0"]
    assert timeline.pointer == 1


def test_boundaries_return_false() -> None:
    timeline, journal = make_timeline(1)

    assert not timeline.redo()
    assert timeline.undo()
    assert not timeline.undo()
    assert journal == ["undo:s0"]


def test_new_change_discards_redo_tail() -> None:
    timeline, journal = make_timeline(3)
    timeline.undo()
    timeline.undo()

    timeline.perform(lambda: RecordingScrap("fresh", journal))

    assert len(timeline) == 2
    assert timeline.pointer == 2
    assert not timeline.can_redo()
    timeline.undo()
    timeline.undo()
    assert journal[-2:] == ["undo:fresh", "undo:s0"]


def test_merge_absorbs_following_scrap() -> None:
    journal: List[str] = []
    timeline = UndoTimeline()
    head = RecordingScrap("head", journal, absorbs=True)
    timeline.perform(lambda: head)

    timeline.perform(lambda: RecordingScrap("tail", journal))

    assert len(timeline) == 1
    assert head.merged == ["tail"]


def test_merge_never_reaches_into_undone_scraps() -> None:
    journal: List[str] = []
    timeline = UndoTimeline()
    base = RecordingScrap("base", journal)
    absorber = RecordingScrap("absorber", journal, absorbs=True)
    timeline.perform(lambda: base)
    timeline.perform(lambda: absorber)
    timeline.undo()

    timeline.perform(lambda: RecordingScrap("next", journal))

    assert absorber.merged == []
    assert len(timeline) == 2


def test_reset_clears_everything() -> None:
    timeline, _journal = make_timeline(2)

    timeline.reset()

    assert len(timeline) == 0
    assert timeline.pointer == 0
    assert not timeline.undo()
