"""Assignee value object: the staff member or team a booking is allocated to."""

from collections.abc import Iterable, Mapping

from ...shared.base import ValueObject
from .enums import AssigneeKind

# Team id to the staff ids of its members
TeamMembers = Mapping[str, Iterable[str]]


class Assignee(ValueObject):
    kind: AssigneeKind
    id: str

    @classmethod
    def staff(cls, staff_id: str) -> "Assignee":
        return cls(kind=AssigneeKind.STAFF, id=staff_id)

    @classmethod
    def team(cls, team_id: str) -> "Assignee":
        return cls(kind=AssigneeKind.TEAM, id=team_id)

    @classmethod
    def from_ids(cls, staff_id: str | None, team_id: str | None) -> "Assignee | None":
        """
        Build the assignee from a booking's two assignment columns.

        Blank strings count as unset. Returns None unless exactly one is set.
        """
        staff_id = (staff_id or "").strip() or None
        team_id = (team_id or "").strip() or None
        if staff_id and not team_id:
            return cls.staff(staff_id)
        if team_id and not staff_id:
            return cls.team(team_id)
        return None

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"
