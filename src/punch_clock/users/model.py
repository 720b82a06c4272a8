from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access code). Credentials live with the
    external authentication layer.
    """

    user_id: str
    name: str
    email: str
    role: Role = Role.USER
