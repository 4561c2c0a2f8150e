from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from modeler.config import settings
from modeler.core.dependencies import authorize_for_team, get_current_user
from modeler.core.email import send_email
from modeler.core.fanout import gather_lookups
from modeler.core.permissions import can_invite, ensure_can_assign, ensure_permission, role_permissions
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.teams.models import Team, TeamInvite, TeamUser
from modeler.modules.teams.schemas import (
    CreateTeamRequest, CreateTeamResponse, UpdateTeamRequest, UpdateTeamResponse,
    GetTeamResponse, TeamItem, TeamListItem, TeamListResponse,
    TeamUserListItem, TeamUserListResponse,
    InviteUserRequest, ChangeAuthorityRequest, TransferOwnershipRequest
)
from modeler.modules.teams.service import TeamService
from modeler.modules.users.models import User
from modeler.modules.users.service import UserService
import logging
import uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/team", tags=["team"])


def get_team_service(dynamo=Depends(get_dynamo)) -> TeamService:
    return TeamService(dynamo)


def get_user_service(dynamo=Depends(get_dynamo)) -> UserService:
    return UserService(dynamo)


def _invite_email(team: Team, code: str) -> str:
    join_url = f"{settings.api_base_url}/team/{team.id}/user/invite/{code}/join"
    return (
        f"<p>You have been invited to join <b>{team.name}</b>.</p>"
        f"<p><a href=\"{join_url}\">Join the team</a></p>"
    )


@router.post("", response_model=CreateTeamResponse)
async def create_team(
    body: CreateTeamRequest,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service)
):
    """Create a team owned by the caller"""
    team = Team(
        id=str(uuid.uuid4()),
        name=body.name,
        description=body.description,
        owner_id=current_user.id,
        thumbnail_url=body.thumbnail_url,
    )
    team_id = service.create_team_with_owner(team)
    logger.info("Team %s created by %s", team_id, current_user.id)
    return CreateTeamResponse(success=True, team_id=team_id)


@router.get("/my/list", response_model=TeamListResponse)
async def get_my_team_list(
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service)
):
    """Teams the caller belongs to, with the caller's role in each"""
    def lookup(team_user: TeamUser):
        team = service.get_team_by_id(team_user.team_id)
        return TeamListItem(**team.model_dump(), authority=team_user.authority)

    memberships = service.list_team_users_by_user_id(current_user.id)
    items = await gather_lookups(memberships, lookup, label="team")
    return TeamListResponse(list=items)


@router.get("/{team_id}", response_model=GetTeamResponse)
async def get_team(
    team_id: str,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    team, role = authorize_for_team(current_user.id, team_id, dynamo)
    return GetTeamResponse(
        data=TeamItem(**team.model_dump(), authority=role, permissions=role_permissions(role))
    )


@router.put("/{team_id}", response_model=UpdateTeamResponse)
async def update_team(
    team_id: str,
    body: UpdateTeamRequest,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
    dynamo=Depends(get_dynamo)
):
    team, role = authorize_for_team(current_user.id, team_id, dynamo)
    ensure_permission(role, "teams:update")

    service.create_team(team.model_copy(update=body.model_dump()))
    return UpdateTeamResponse(success=True)


@router.delete("/{team_id}", response_model=UpdateTeamResponse)
async def delete_team(
    team_id: str,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
    dynamo=Depends(get_dynamo)
):
    """Delete the team row. Memberships, invites and projects are left in place."""
    _, role = authorize_for_team(current_user.id, team_id, dynamo)
    ensure_permission(role, "teams:delete")

    service.delete_team_by_id(team_id)
    logger.info("Team %s deleted by %s", team_id, current_user.id)
    return UpdateTeamResponse(success=True)


@router.get("/{team_id}/user/list", response_model=TeamUserListResponse)
async def get_team_user_list(
    team_id: str,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
    user_service: UserService = Depends(get_user_service),
    dynamo=Depends(get_dynamo)
):
    """Members of the team. Memberships whose user row is gone are skipped."""
    authorize_for_team(current_user.id, team_id, dynamo)

    def lookup(team_user: TeamUser):
        user = user_service.find_by_id(team_user.user_id)
        if user is None:
            return None
        return TeamUserListItem(
            id=user.id,
            nickname=user.nickname,
            email=user.email,
            thumbnail_url=user.thumbnail_url,
            authority=team_user.authority,
        )

    team_users = service.list_team_users_by_team_id(team_id)
    items = await gather_lookups(team_users, lookup, label="team member")
    return TeamUserListResponse(list=items)


@router.post("/{team_id}/user/invite", response_model=UpdateTeamResponse)
async def invite_team_user(
    team_id: str,
    body: InviteUserRequest,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
    user_service: UserService = Depends(get_user_service),
    dynamo=Depends(get_dynamo)
):
    """
    Invite a registered user into the team.

    Owners may invite as ADMIN, WRITE or READ; admins as WRITE or READ.
    The invitee receives an email with a single-use join link.
    """
    team, role = authorize_for_team(current_user.id, team_id, dynamo)
    ensure_can_assign(role, body.authority)

    if body.user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot invite yourself")

    invited_user = user_service.find_by_id(body.user_id)
    if invited_user is None:
        raise HTTPException(status_code=404, detail="User not found")

    if service.find_team_user(team_id, invited_user.id) is not None:
        raise HTTPException(status_code=400, detail="User is already a member of this team")

    code = service.create_team_invite(TeamInvite(
        code=str(uuid.uuid4()),
        team_id=team_id,
        user_id=invited_user.id,
        authority=body.authority,
    ))

    send_email(invited_user.email, f"[{team.name}] team invitation", _invite_email(team, code))
    logger.info("User %s invited to team %s as %s", invited_user.id, team_id, body.authority.value)
    return UpdateTeamResponse(success=True)


@router.get("/{team_id}/user/invite/{code}/join")
async def join_team(
    team_id: str,
    code: str,
    service: TeamService = Depends(get_team_service)
):
    """Consume an invite code and redirect to the front-end. Codes are single-use."""
    invite = service.get_team_invite_by_code(code)
    if invite.team_id != team_id:
        raise HTTPException(status_code=400, detail="Invite does not belong to this team")

    # Stale invite: never overwrite an existing membership
    if service.find_team_user(team_id, invite.user_id) is not None:
        service.delete_team_invite_by_code(code)
        raise HTTPException(status_code=400, detail="User is already a member of this team")

    service.create_team_user(TeamUser(
        team_id=invite.team_id,
        user_id=invite.user_id,
        authority=invite.authority,
    ))
    service.delete_team_invite_by_code(code)
    logger.info("User %s joined team %s as %s", invite.user_id, team_id, invite.authority.value)

    return RedirectResponse(url=settings.frontend_url, status_code=307)


@router.put("/{team_id}/user/authority", response_model=UpdateTeamResponse)
async def change_team_user_authority(
    team_id: str,
    body: ChangeAuthorityRequest,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
    dynamo=Depends(get_dynamo)
):
    """Change a member's role. Ownership moves only through /ownership/transfer."""
    _, role = authorize_for_team(current_user.id, team_id, dynamo)
    ensure_can_assign(role, body.authority)

    if body.user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot change your own role")

    target = service.find_team_user(team_id, body.user_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Team member not found")
    if not can_invite(role, target.authority):
        raise HTTPException(
            status_code=403,
            detail=f"{role.value} cannot change the role of a {target.authority.value} member"
        )

    service.create_team_user(target.model_copy(update={"authority": body.authority}))
    return UpdateTeamResponse(success=True)


@router.post("/{team_id}/ownership/transfer", response_model=UpdateTeamResponse)
async def transfer_team_ownership(
    team_id: str,
    body: TransferOwnershipRequest,
    current_user: User = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
    dynamo=Depends(get_dynamo)
):
    """Hand the team to another member; the caller stays on as ADMIN"""
    team, role = authorize_for_team(current_user.id, team_id, dynamo)
    ensure_permission(role, "teams:transfer")

    if body.user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You already own this team")
    if service.find_team_user(team_id, body.user_id) is None:
        raise HTTPException(status_code=400, detail="New owner must be a member of this team")

    service.transfer_ownership(team, current_user.id, body.user_id)
    logger.info("Team %s transferred from %s to %s", team_id, current_user.id, body.user_id)
    return UpdateTeamResponse(success=True)
