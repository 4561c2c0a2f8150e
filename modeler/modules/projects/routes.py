from fastapi import APIRouter, Depends
from modeler.core.dependencies import authorize_for_project, authorize_for_team, get_current_user
from modeler.core.permissions import ensure_permission
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.entities.schemas import EntityItem, EntityListResponse
from modeler.modules.entities.service import EntityService
from modeler.modules.notes.schemas import NoteItem, NoteListResponse
from modeler.modules.notes.service import NoteService
from modeler.modules.projects.models import Project
from modeler.modules.projects.schemas import (
    CreateProjectRequest, CreateProjectWithTeamRequest, CreateProjectResponse,
    UpdateProjectRequest, UpdateProjectResponse,
    GetProjectResponse, ProjectItem, ProjectListResponse
)
from modeler.modules.projects.service import ProjectService
from modeler.modules.users.models import User
import logging
import uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/project", tags=["project"])

# Project routes nested under a team
team_router = APIRouter(prefix="/team", tags=["project"])


def get_project_service(dynamo=Depends(get_dynamo)) -> ProjectService:
    return ProjectService(dynamo)


def _create_project(team_id: str, body: CreateProjectRequest, current_user: User, dynamo) -> CreateProjectResponse:
    _, role = authorize_for_team(current_user.id, team_id, dynamo)
    ensure_permission(role, "projects:create")

    project = Project(
        id=str(uuid.uuid4()),
        team_id=team_id,
        name=body.name,
        description=body.description,
        thumbnail_url=body.thumbnail_url,
    )
    project_id = ProjectService(dynamo).create_project(project)
    logger.info("Project %s created in team %s", project_id, team_id)
    return CreateProjectResponse(success=True, project_id=project_id)


@router.post("", response_model=CreateProjectResponse)
async def create_project(
    body: CreateProjectWithTeamRequest,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    return _create_project(body.team_id, body, current_user, dynamo)


@team_router.post("/{team_id}/project", response_model=CreateProjectResponse)
async def create_team_project(
    team_id: str,
    body: CreateProjectRequest,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    return _create_project(team_id, body, current_user, dynamo)


@team_router.get("/{team_id}/project/list", response_model=ProjectListResponse)
async def get_team_project_list(
    team_id: str,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
    dynamo=Depends(get_dynamo)
):
    authorize_for_team(current_user.id, team_id, dynamo)

    projects = service.list_projects_by_team_id(team_id)
    return ProjectListResponse(list=[ProjectItem(**project.model_dump()) for project in projects])


@router.get("/{project_id}", response_model=GetProjectResponse)
async def get_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    project, _ = authorize_for_project(current_user.id, project_id, dynamo)
    return GetProjectResponse(data=ProjectItem(**project.model_dump()))


@router.put("/{project_id}", response_model=UpdateProjectResponse)
async def update_project(
    project_id: str,
    body: UpdateProjectRequest,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
    dynamo=Depends(get_dynamo)
):
    """Overwrite the project's fields; team_id never changes"""
    project, role = authorize_for_project(current_user.id, project_id, dynamo)
    ensure_permission(role, "projects:update")

    service.create_project(project.model_copy(update=body.model_dump()))
    return UpdateProjectResponse(success=True)


@router.delete("/{project_id}", response_model=UpdateProjectResponse)
async def delete_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
    dynamo=Depends(get_dynamo)
):
    _, role = authorize_for_project(current_user.id, project_id, dynamo)
    ensure_permission(role, "projects:delete")

    service.delete_project_by_id(project_id)
    logger.info("Project %s deleted by %s", project_id, current_user.id)
    return UpdateProjectResponse(success=True)


@router.get("/{project_id}/entity/list", response_model=EntityListResponse)
async def get_project_entity_list(
    project_id: str,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    authorize_for_project(current_user.id, project_id, dynamo)

    entities = EntityService(dynamo).list_entities_by_project_id(project_id)
    return EntityListResponse(list=[EntityItem(**entity.model_dump()) for entity in entities])


@router.get("/{project_id}/note/list", response_model=NoteListResponse)
async def get_project_note_list(
    project_id: str,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    authorize_for_project(current_user.id, project_id, dynamo)

    notes = NoteService(dynamo).list_notes_by_project_id(project_id)
    return NoteListResponse(list=[NoteItem(**note.model_dump()) for note in notes])
