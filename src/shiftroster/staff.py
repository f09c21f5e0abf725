from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shiftroster.errors import InvalidInput


class Role(str, Enum):
    """The two staffing categories a shift's requirements are expressed in."""

    A = "A"  # primary (e.g. nurse)
    B = "B"  # support (e.g. assistant)


@dataclass(slots=True)
class StaffMember:
    """
    Core data model representing a staff member of one department.
    """

    id: str
    name: str
    role: Role
    position: str = ""

    def __repr__(self) -> str:
        return (
            f"StaffMember(id='{self.id}', name='{self.name}', role={self.role.value}, "
            f"position='{self.position}')"
        )

    def __post_init__(self) -> None:
        self.id = str(self.id)
        if not self.id:
            raise InvalidInput("Staff id must be a non-empty string.")
        if not isinstance(self.role, Role):
            try:
                self.role = Role(str(self.role).upper())
            except ValueError as exc:
                raise InvalidInput(
                    f"Unknown role {self.role!r} for staff '{self.id}'."
                ) from exc


def split_by_role(staff: list[StaffMember]) -> dict[Role, list[StaffMember]]:
    """Partition a roster by role, preserving input order within each role."""
    out: dict[Role, list[StaffMember]] = {Role.A: [], Role.B: []}
    for member in staff:
        out[member.role].append(member)
    return out
