# DynamoDB table: modeler_entity
# Columns are stored as a single JSON string attribute so their order survives.

"""
Expected DynamoDB table structure:

modeler_entity:
- id: S (partition key)
- project_id: S
- logical_name: S
- physical_name: S
- comment: S
- columns: S - JSON array of Column objects
- x: S - canvas position
- y: S
"""

import json
from pydantic import BaseModel
from typing import Any, ClassVar, Dict, List, Tuple


class Column(BaseModel):
    id: str
    is_primary_key: bool = False
    logical_name: str
    physical_name: str
    data_type: str
    nullable: bool = True
    comment: str = ""


class Entity(BaseModel):
    TABLE_NAME: ClassVar[str] = "modeler_entity"
    KEY_SCHEMA: ClassVar[Tuple[str, ...]] = ("id",)

    id: str
    project_id: str
    logical_name: str
    physical_name: str
    comment: str = ""
    columns: List[Column] = []
    x: str = "0"
    y: str = "0"

    def to_item(self) -> Dict[str, Any]:
        item = self.model_dump(exclude={"columns"})
        item["columns"] = json.dumps([column.model_dump() for column in self.columns])
        return item

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Entity":
        data = dict(item)
        data["columns"] = json.loads(data.get("columns") or "[]")
        return cls(**data)
