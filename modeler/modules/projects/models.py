# DynamoDB table: modeler_project

"""
Expected DynamoDB table structure:

modeler_project:
- id: S (partition key)
- team_id: S - owning team
- name: S
- description: S
- thumbnail_url: S (optional)
- x: S - canvas position
- y: S
"""

from pydantic import BaseModel
from typing import Any, ClassVar, Dict, Optional, Tuple


class Project(BaseModel):
    TABLE_NAME: ClassVar[str] = "modeler_project"
    KEY_SCHEMA: ClassVar[Tuple[str, ...]] = ("id",)

    id: str
    team_id: str
    name: str
    description: str
    thumbnail_url: Optional[str] = None
    x: str = "0"
    y: str = "0"

    def to_item(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Project":
        return cls(**item)
