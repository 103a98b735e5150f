"""DTOs for identities resolved by the user repository."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """Resolved identity (creator or assignee of a task)."""

    user_id: int
    company_id: int
    screen_name: str
    first_name: str
    last_name: str
    email: str | None = None

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.screen_name
