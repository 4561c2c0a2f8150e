from fastapi import APIRouter, Depends
from modeler.core.dependencies import authorize_for_entity, authorize_for_project, get_current_user
from modeler.core.permissions import ensure_permission
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.entities.models import Entity
from modeler.modules.entities.schemas import (
    CreateEntityRequest, CreateEntityResponse, UpdateEntityRequest, UpdateEntityResponse,
    GetEntityResponse, EntityItem
)
from modeler.modules.entities.service import EntityService
from modeler.modules.users.models import User
import logging
import uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entity", tags=["entity"])


def get_entity_service(dynamo=Depends(get_dynamo)) -> EntityService:
    return EntityService(dynamo)


@router.post("", response_model=CreateEntityResponse)
async def create_entity(
    body: CreateEntityRequest,
    current_user: User = Depends(get_current_user),
    service: EntityService = Depends(get_entity_service),
    dynamo=Depends(get_dynamo)
):
    """Create an entity on a project canvas (WRITE or above)"""
    _, role = authorize_for_project(current_user.id, body.project_id, dynamo)
    ensure_permission(role, "entities:create")

    entity = Entity(id=str(uuid.uuid4()), **body.model_dump())
    entity_id = service.create_entity(entity)
    return CreateEntityResponse(success=True, entity_id=entity_id)


@router.get("/{entity_id}", response_model=GetEntityResponse)
async def get_entity(
    entity_id: str,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    entity, _ = authorize_for_entity(current_user.id, entity_id, dynamo)
    return GetEntityResponse(data=EntityItem(**entity.model_dump()))


@router.put("/{entity_id}", response_model=UpdateEntityResponse)
async def update_entity(
    entity_id: str,
    body: UpdateEntityRequest,
    current_user: User = Depends(get_current_user),
    service: EntityService = Depends(get_entity_service),
    dynamo=Depends(get_dynamo)
):
    """Replace the entity's fields and columns. The column list is stored as sent."""
    entity, role = authorize_for_entity(current_user.id, entity_id, dynamo)
    ensure_permission(role, "entities:update")

    service.create_entity(Entity(id=entity.id, project_id=entity.project_id, **body.model_dump()))
    return UpdateEntityResponse(success=True)


@router.delete("/{entity_id}", response_model=UpdateEntityResponse)
async def delete_entity(
    entity_id: str,
    current_user: User = Depends(get_current_user),
    service: EntityService = Depends(get_entity_service),
    dynamo=Depends(get_dynamo)
):
    _, role = authorize_for_entity(current_user.id, entity_id, dynamo)
    ensure_permission(role, "entities:delete")

    service.delete_entity_by_id(entity_id)
    logger.info("Entity %s deleted by %s", entity_id, current_user.id)
    return UpdateEntityResponse(success=True)
