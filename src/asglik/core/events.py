"""
Event histories of the ancestral selection graph.

An event history is an immutable sequence of events ordered from the most
ancient event (the root coalescence, closest to the ultimate ancestor) to
the most recent one. Times are measured backward from the present, so they
strictly decrease along the sequence.

Reading a history forward in time, every structural event ends some
lineages and starts others:

- a coalescence ends ``parent`` and starts ``left`` and ``right``;
- a branching event ends ``continuing`` and ``incoming`` and starts
  ``lineage``;
- a mutation neither ends nor starts a lineage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, Tuple, Union

from ..exceptions import InconsistentHistoryError


class EventKind(Enum):
    """Tag identifying the kind of an event."""

    COALESCENCE = "coalescence"
    BRANCHING = "branching"
    MUTATION = "mutation"
    PRESENT = "present"


@dataclass(frozen=True)
class CoalescenceEvent:
    """
    Two lineages merge into one, looking backward in time.

    Attributes
    ----------
    time : float
        Time of the event before the present
    parent : int
        The new, more ancestral lineage
    left : int
        First merging lineage
    right : int
        Second merging lineage
    """

    time: float
    parent: int
    left: int
    right: int
    kind: ClassVar[EventKind] = EventKind.COALESCENCE

    @property
    def ends(self) -> Tuple[int, ...]:
        return (self.parent,)

    @property
    def starts(self) -> Tuple[int, ...]:
        return (self.left, self.right)


@dataclass(frozen=True)
class BranchingEvent:
    """
    One lineage splits into a continuing and an incoming branch, looking
    backward in time.

    Attributes
    ----------
    time : float
        Time of the event before the present
    lineage : int
        The lineage that splits
    continuing : int
        The continuing branch
    incoming : int
        The incoming branch
    """

    time: float
    lineage: int
    continuing: int
    incoming: int
    kind: ClassVar[EventKind] = EventKind.BRANCHING

    @property
    def ends(self) -> Tuple[int, ...]:
        return (self.continuing, self.incoming)

    @property
    def starts(self) -> Tuple[int, ...]:
        return (self.lineage,)


@dataclass(frozen=True)
class MutationEvent:
    """A neutral mutation that toggles the type carried by ``lineage``."""

    time: float
    lineage: int
    kind: ClassVar[EventKind] = EventKind.MUTATION

    @property
    def ends(self) -> Tuple[int, ...]:
        return ()

    @property
    def starts(self) -> Tuple[int, ...]:
        return ()


@dataclass(frozen=True)
class PresentEvent:
    """Sentinel marking the present; replays stop here."""

    time: float = 0.0
    kind: ClassVar[EventKind] = EventKind.PRESENT

    @property
    def ends(self) -> Tuple[int, ...]:
        return ()

    @property
    def starts(self) -> Tuple[int, ...]:
        return ()


Event = Union[CoalescenceEvent, BranchingEvent, MutationEvent, PresentEvent]
STRUCTURAL_KINDS = (EventKind.COALESCENCE, EventKind.BRANCHING)


@dataclass(frozen=True)
class EventHistory:
    """
    Immutable event history of an ancestral selection graph.

    Attributes
    ----------
    events : tuple of Event
        Events ordered from the root coalescence to the most recent event
    n_samples : int
        Number of sampled lineages; ids 1..n_samples are the samples

    Notes
    -----
    The ultimate ancestor is the parent of the root coalescence and holds the
    largest identifier ever issued. Every id strictly between ``n_samples``
    and the ancestor belongs to an internal lineage, so the number of internal
    lineages is ``ancestor - 1 - n_samples``.
    """

    events: Tuple[Event, ...]
    n_samples: int
    _ancestor: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        events = tuple(self.events)
        object.__setattr__(self, "events", events)

        if not events or events[0].kind is not EventKind.COALESCENCE:
            raise InconsistentHistoryError(
                "root event must be a coalescence", index=0
            )
        for i in range(1, len(events)):
            if not events[i].time < events[i - 1].time:
                raise InconsistentHistoryError(
                    f"time {events[i].time} does not precede time "
                    f"{events[i - 1].time} of the previous event",
                    index=i,
                )
            if events[i].kind is EventKind.PRESENT and i != len(events) - 1:
                raise InconsistentHistoryError(
                    "present sentinel must be the last event", index=i
                )
        if events[-1].time < 0:
            raise InconsistentHistoryError(
                "event times must be non-negative", index=len(events) - 1
            )
        object.__setattr__(self, "_ancestor", events[0].parent)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __getitem__(self, index):
        return self.events[index]

    @property
    def ancestor(self) -> int:
        """Identifier of the ultimate ancestor."""
        return self._ancestor

    @property
    def n_internal(self) -> int:
        """Number of internal lineages (neither sampled nor the ancestor)."""
        return self._ancestor - 1 - self.n_samples

    @property
    def n_coalescences(self) -> int:
        return sum(1 for e in self.events if e.kind is EventKind.COALESCENCE)

    @property
    def n_branchings(self) -> int:
        return sum(1 for e in self.events if e.kind is EventKind.BRANCHING)

    @property
    def n_mutations(self) -> int:
        return sum(1 for e in self.events if e.kind is EventKind.MUTATION)

    @property
    def is_annotated(self) -> bool:
        """True if the history carries mutation events."""
        return self.n_mutations > 0

    @property
    def root_time(self) -> float:
        """Time of the root coalescence before the present."""
        return self.events[0].time

    @property
    def times(self) -> Tuple[float, ...]:
        """Event times before the present (strictly decreasing)."""
        return tuple(e.time for e in self.events)

    @property
    def forward_times(self) -> Tuple[float, ...]:
        """Time elapsed since the root coalescence (strictly increasing)."""
        root = self.root_time
        return tuple(root - e.time for e in self.events)

    def lineages(self) -> range:
        """All lineage identifiers, samples through the ultimate ancestor."""
        return range(1, self._ancestor + 1)

    def structural(self) -> "EventHistory":
        """The history with mutation events removed."""
        return EventHistory(
            tuple(e for e in self.events if e.kind in STRUCTURAL_KINDS),
            self.n_samples,
        )

    def with_present(self) -> "EventHistory":
        """The history terminated by a :class:`PresentEvent` sentinel."""
        if self.events[-1].kind is EventKind.PRESENT:
            return self
        return EventHistory(self.events + (PresentEvent(),), self.n_samples)

    def without_present(self) -> "EventHistory":
        if self.events[-1].kind is not EventKind.PRESENT:
            return self
        return EventHistory(self.events[:-1], self.n_samples)

    def validate(self) -> "EventHistory":
        """
        Replay the whole history and check its lineage bookkeeping.

        Returns
        -------
        EventHistory
            ``self``, to allow chaining

        Raises
        ------
        InconsistentHistoryError
            If an event refers to an inactive lineage, an id is reused, or the
            replay does not end with exactly the sampled lineages active.
        """
        active = None
        for _, _, active in replay(self.with_present()):
            pass
        expected = set(range(1, self.n_samples + 1))
        if active != expected:
            raise InconsistentHistoryError(
                f"replay ends with lineages {sorted(active)}, expected the "
                f"samples 1..{self.n_samples}",
                index=len(self.events),
            )
        return self


def replay(history: EventHistory) -> Iterator[Tuple[int, Event, frozenset]]:
    """
    Walk a history from the ultimate ancestor to the present.

    Parameters
    ----------
    history : EventHistory
        History to replay (with or without mutations and sentinel)

    Yields
    ------
    index : int
        Position of the event in the history
    event : Event
        The event
    active : frozenset of int
        Lineages active in the interval just before the event

    Raises
    ------
    InconsistentHistoryError
        If an event refers to a lineage that is not active, starts a
        lineage that has already been seen, or ends a lineage whose id is
        not larger than every id active after it. The last rule keeps the
        ultimate ancestor's id the largest one issued.
    """
    active = {history.ancestor}
    seen = {history.ancestor}
    for index, event in enumerate(history.events):
        snapshot = frozenset(active)
        if event.kind is EventKind.MUTATION and event.lineage not in active:
            raise InconsistentHistoryError(
                f"mutation on inactive lineage {event.lineage}", index=index
            )
        for lineage in event.ends:
            if lineage not in active:
                raise InconsistentHistoryError(
                    f"{event.kind.value} refers to inactive lineage {lineage}",
                    index=index,
                )
        if len(set(event.ends)) != len(event.ends):
            raise InconsistentHistoryError(
                f"{event.kind.value} ends lineage {event.ends[0]} twice",
                index=index,
            )
        for lineage in event.starts:
            if lineage in seen or lineage < 1:
                raise InconsistentHistoryError(
                    f"{event.kind.value} reuses lineage id {lineage}", index=index
                )
        after = (active - set(event.ends)) | set(event.starts)
        # Ended lineages are the fresh ids of this event, looking backward
        if event.ends and after and min(event.ends) < max(after):
            raise InconsistentHistoryError(
                f"{event.kind.value} ends lineage {min(event.ends)}, which is "
                f"not larger than lineage {max(after)} active below it",
                index=index,
            )
        yield index, event, snapshot
        active = after
        seen.update(event.starts)
        if event.kind is EventKind.PRESENT:
            return
