"""Actor — who is performing an operation (admin user or supplier user)."""

from dataclasses import dataclass

from assignflow.domain.value_objects.enums import ActorRole


@dataclass(frozen=True)
class Actor:
    role: ActorRole
    user_id: str | None = None
    supplier_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN
