# bazar/session.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Session:
    """Who is driving the inventory; handed to InventorySync at construction."""

    user_email: Optional[str] = None
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


ANONYMOUS = Session()
