from dataclasses import dataclass
from typing import Optional

from gripe_logger.model.auth.role import Role


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str
    # None when no role row exists yet; treated as a student everywhere
    role: Optional[Role] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
