# DynamoDB table: modeler_note

"""
Expected DynamoDB table structure:

modeler_note:
- id: S (partition key)
- project_id: S
- content: S
- x: S - canvas position
- y: S
"""

from pydantic import BaseModel
from typing import Any, ClassVar, Dict, Tuple


class Note(BaseModel):
    TABLE_NAME: ClassVar[str] = "modeler_note"
    KEY_SCHEMA: ClassVar[Tuple[str, ...]] = ("id",)

    id: str
    project_id: str
    content: str
    x: str = "0"
    y: str = "0"

    def to_item(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Note":
        return cls(**item)
