from typing import Optional

from kontaflow.models.user import UserRole
from kontaflow.schemas.common import CamelModel


class CurrentUser(CamelModel):
    """Usuario autenticado con su grupo activo (la primera membresía)"""
    id: int
    email: str
    name: str
    economic_group_id: Optional[int] = None
    role: Optional[UserRole] = None
