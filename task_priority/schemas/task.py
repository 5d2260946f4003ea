"""Pydantic schemas for the task list and task history documents."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional, Literal

# Les documents JSON utilisent des clés camelCase (createdDate, isTopPriority...)

class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow"
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Task(_Document):
    """Tâche active de la liste"""

    id: str
    description: str
    is_complete: Literal[False] = False  # toujours false dans la liste active
    created_date: datetime
    target_date: Optional[datetime] = None
    order: int
    is_top_priority: bool = False


class CompletedTask(_Document):
    """Entrée d'historique, immuable une fois créée"""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    is_complete: Literal[True] = True
    created_date: datetime
    completed_date: datetime
    order: int = 0  # inutilisé
