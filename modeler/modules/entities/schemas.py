from pydantic import BaseModel
from modeler.modules.entities.models import Column
from typing import List


class CreateEntityRequest(BaseModel):
    project_id: str
    logical_name: str
    physical_name: str
    comment: str = ""
    columns: List[Column] = []
    x: str = "0"
    y: str = "0"


class CreateEntityResponse(BaseModel):
    success: bool = False
    entity_id: str = ""


class UpdateEntityRequest(BaseModel):
    logical_name: str
    physical_name: str
    comment: str = ""
    columns: List[Column] = []
    x: str = "0"
    y: str = "0"


class UpdateEntityResponse(BaseModel):
    success: bool = False


class EntityItem(BaseModel):
    id: str
    project_id: str
    logical_name: str
    physical_name: str
    comment: str = ""
    columns: List[Column] = []
    x: str = "0"
    y: str = "0"


class GetEntityResponse(BaseModel):
    data: EntityItem


class EntityListResponse(BaseModel):
    list: List[EntityItem]
