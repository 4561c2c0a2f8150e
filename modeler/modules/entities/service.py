from fastapi import HTTPException
from modeler.database.dynamo_client import scan_all
from modeler.modules.entities.models import Entity
from typing import List


class EntityService:
    def __init__(self, dynamo):
        self.table = dynamo.Table(Entity.TABLE_NAME)

    def create_entity(self, entity: Entity) -> str:
        """Upsert an entity by id; update is a re-create with the same id"""
        self.table.put_item(Item=entity.to_item())
        return entity.id

    def get_entity_by_id(self, entity_id: str) -> Entity:
        result = self.table.get_item(Key={"id": entity_id})
        if "Item" not in result:
            raise HTTPException(status_code=404, detail="Entity not found")
        return Entity.from_item(result["Item"])

    def delete_entity_by_id(self, entity_id: str) -> None:
        result = self.table.delete_item(Key={"id": entity_id}, ReturnValues="ALL_OLD")
        if "Attributes" not in result:
            raise HTTPException(status_code=404, detail="Entity not found")

    def list_entities_by_project_id(self, project_id: str) -> List[Entity]:
        return [Entity.from_item(item) for item in scan_all(self.table, "project_id", project_id)]
