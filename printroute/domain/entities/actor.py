"""Actor — the authenticated caller as seen by the staff directory."""

from dataclasses import dataclass

from printroute.domain.value_objects.enums import StaffRole


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: StaffRole
    print_center_id: int | None = None

    def is_admin(self) -> bool:
        return self.role == StaffRole.ADMIN

    def is_staff_of(self, print_center_id: int) -> bool:
        return (
            self.role == StaffRole.PRINT_CENTER
            and self.print_center_id is not None
            and self.print_center_id == print_center_id
        )
