"""
Conflict Detector

Finds bookings that overlap in time for the same assignee. Detection is
read-only and advisory: it reports conflicts as data, and whether a
conflict blocks a booking or only warns is the caller's decision.

Cancelled and no-show bookings take no part on either side of the
comparison. Multi-day bookings occupy every date from ``date`` to
``end_date``; overlapping on any one of them conflicts the whole booking.

Work is linear in the number of bookings supplied, so callers with large
collections should pre-filter by assignee and date range.
"""

from collections import defaultdict
from collections.abc import Iterable

from ....core.observability import get_logger, monitor_operation
from ...shared.base import ValueObject
from ..entities.booking import Booking
from ..value_objects.assignee import Assignee, TeamMembers
from ..value_objects.enums import AssigneeKind

logger = get_logger(__name__)

CANDIDATE_KEY = "__candidate__"


class ConflictSet(ValueObject):
    """
    Booking id to the ids of the other bookings it overlaps.

    Relations are symmetric: if ``a`` lists ``b`` then ``b`` lists ``a``.
    Bookings without an id are keyed by ``booking_key`` from their position
    in the checked collection.
    """

    conflicts: dict[str, frozenset[str]] = {}
    candidate_key: str | None = None

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def ids_for(self, booking_id: str) -> frozenset[str]:
        return self.conflicts.get(booking_id, frozenset())

    def conflicting_ids(self) -> list[str]:
        """Ids overlapping the candidate, or every conflicted id for a full map."""
        if self.candidate_key is not None:
            return sorted(self.ids_for(self.candidate_key))
        return sorted(self.conflicts)

    def __len__(self) -> int:
        return len(self.conflicts)

    def __contains__(self, booking_id: object) -> bool:
        return booking_id in self.conflicts


def booking_key(booking: Booking, position: int) -> str:
    """
    Identity used in conflict sets.

    Unsaved bookings are keyed by their position in the input and their
    start date, so two unsaved bookings never share a key.
    """
    return booking.id or f"new:{position}:{booking.date.isoformat()}"


def _resources(
    assignee: Assignee, team_members: TeamMembers | None
) -> frozenset[Assignee]:
    """
    Everything a booking for ``assignee`` occupies.

    With a membership map, a team booking also occupies each member.
    """
    resources = {assignee}
    if team_members and assignee.kind is AssigneeKind.TEAM:
        resources.update(
            Assignee.staff(member) for member in team_members.get(assignee.id, ())
        )
    return frozenset(resources)


def occupied_resources(
    booking: Booking, team_members: TeamMembers | None = None
) -> frozenset[Assignee]:
    """Staff members and teams whose time ``booking`` takes up."""
    assignee = booking.assignee
    if assignee is None:
        return frozenset()
    return _resources(assignee, team_members)


def _build(pairs: Iterable[tuple[str, str]], candidate_key: str | None) -> ConflictSet:
    conflicts: dict[str, set[str]] = defaultdict(set)
    for left, right in pairs:
        conflicts[left].add(right)
        conflicts[right].add(left)
    return ConflictSet(
        conflicts={key: frozenset(ids) for key, ids in conflicts.items()},
        candidate_key=candidate_key,
    )


@monitor_operation("find_conflicts")
def find_conflicts(
    assignee: Assignee,
    candidate: Booking,
    existing: Iterable[Booking],
    *,
    exclude_booking_id: str | None = None,
    team_members: TeamMembers | None = None,
) -> ConflictSet:
    """
    Return the existing bookings for ``assignee`` that overlap ``candidate``.

    Args:
        assignee: Staff member or team being booked
        candidate: Proposed booking
        existing: Bookings to compare against, in any status
        exclude_booking_id: Booking to ignore, such as the one being edited
        team_members: Team id to member staff ids; when given, team bookings
            also collide with their members' own bookings

    Returns:
        Conflict set keyed by the candidate's id (or ``CANDIDATE_KEY``)
    """
    candidate_key = candidate.id or CANDIDATE_KEY
    if not candidate.is_active:
        return ConflictSet(candidate_key=candidate_key)

    wanted = _resources(assignee, team_members)
    slot = candidate.slot
    pairs: list[tuple[str, str]] = []

    for position, booking in enumerate(existing):
        if booking.id is not None and booking.id in (exclude_booking_id, candidate.id):
            continue
        if not booking.is_active:
            continue
        if wanted.isdisjoint(occupied_resources(booking, team_members)):
            continue
        if slot.overlaps_with(booking.slot):
            pairs.append((candidate_key, booking_key(booking, position)))

    result = _build(pairs, candidate_key)
    if result.has_conflicts:
        logger.info(
            "Booking conflicts detected",
            assignee=str(assignee),
            date=candidate.date.isoformat(),
            conflicting_ids=result.conflicting_ids(),
        )
    return result


def build_conflict_map(
    bookings: Iterable[Booking], team_members: TeamMembers | None = None
) -> ConflictSet:
    """
    Conflicts among every booking in a collection, as shown on a calendar.

    Bookings are grouped by the staff members and teams they occupy and
    compared pairwise within a group, in start order, stopping once a later
    booking starts after the current one ends.
    """
    by_resource: dict[Assignee, list[tuple[str, Booking]]] = defaultdict(list)
    for position, booking in enumerate(bookings):
        if not booking.is_active:
            continue
        key = booking_key(booking, position)
        for resource in occupied_resources(booking, team_members):
            by_resource[resource].append((key, booking))

    pairs: set[tuple[str, str]] = set()
    for group in by_resource.values():
        group.sort(key=lambda entry: (entry[1].date, entry[1].start_time))
        for index, (key, booking) in enumerate(group):
            slot = booking.slot
            for other_key, other in group[index + 1 :]:
                if other.date > slot.last_date:
                    break
                # The same booking listed twice is not a conflict
                if key != other_key and slot.overlaps_with(other.slot):
                    pairs.add((key, other_key))

    return _build(pairs, None)
