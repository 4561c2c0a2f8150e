"""
Core dependencies for route protection and ownership-chain authorization
"""

from fastapi import Depends, HTTPException, Request, status
from modeler.core.session import CurrentUser
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.entities.models import Entity
from modeler.modules.entities.service import EntityService
from modeler.modules.notes.models import Note
from modeler.modules.notes.service import NoteService
from modeler.modules.projects.models import Project
from modeler.modules.projects.service import ProjectService
from modeler.modules.teams.models import Team, TeamRole
from modeler.modules.teams.service import TeamService
from modeler.modules.users.models import User
from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)


def get_session(request: Request) -> CurrentUser:
    """The CurrentUser attached by SessionMiddleware (unauthorized when absent)."""
    return getattr(request.state, "current_user", None) or CurrentUser()


def get_current_user(session: CurrentUser = Depends(get_session)) -> User:
    """Require an authenticated caller"""
    if not session.authorized or session.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return session.user


def resolve_role(user_id: str, team_id: str, dynamo=None) -> Optional[TeamRole]:
    """The caller's role in a team, or None when there is no membership row."""
    team_user = TeamService(dynamo or get_dynamo()).find_team_user(team_id, user_id)
    return team_user.authority if team_user else None


def _require_member(user_id: str, team_id: str, dynamo) -> TeamRole:
    role = resolve_role(user_id, team_id, dynamo)
    if role is None:
        logger.info("User %s is not a member of team %s", user_id, team_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be a member of this team"
        )
    return role


def authorize_for_team(user_id: str, team_id: str, dynamo=None) -> Tuple[Team, TeamRole]:
    """404 when the team is absent, 403 when the caller is not a member."""
    dynamo = dynamo or get_dynamo()
    team = TeamService(dynamo).get_team_by_id(team_id)
    return team, _require_member(user_id, team.id, dynamo)


def authorize_for_project(user_id: str, project_id: str, dynamo=None) -> Tuple[Project, TeamRole]:
    """Project -> Team -> membership. 404 when any link is absent."""
    dynamo = dynamo or get_dynamo()
    project = ProjectService(dynamo).get_project_by_id(project_id)
    _, role = authorize_for_team(user_id, project.team_id, dynamo)
    return project, role


def authorize_for_entity(user_id: str, entity_id: str, dynamo=None) -> Tuple[Entity, TeamRole]:
    dynamo = dynamo or get_dynamo()
    entity = EntityService(dynamo).get_entity_by_id(entity_id)
    _, role = authorize_for_project(user_id, entity.project_id, dynamo)
    return entity, role


def authorize_for_note(user_id: str, note_id: str, dynamo=None) -> Tuple[Note, TeamRole]:
    dynamo = dynamo or get_dynamo()
    note = NoteService(dynamo).get_note_by_id(note_id)
    _, role = authorize_for_project(user_id, note.project_id, dynamo)
    return note, role
