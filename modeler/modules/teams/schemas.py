from pydantic import BaseModel
from modeler.modules.teams.models import TeamRole
from typing import Optional, List


class CreateTeamRequest(BaseModel):
    name: str
    description: str = ""
    thumbnail_url: Optional[str] = None


class CreateTeamResponse(BaseModel):
    success: bool = False
    team_id: str = ""


class UpdateTeamRequest(BaseModel):
    name: str
    description: str = ""
    thumbnail_url: Optional[str] = None


class UpdateTeamResponse(BaseModel):
    success: bool = False


class TeamItem(BaseModel):
    id: str
    name: str
    description: str
    owner_id: str
    thumbnail_url: Optional[str] = None
    authority: TeamRole
    permissions: List[str] = []  # caller's permissions within this team


class GetTeamResponse(BaseModel):
    data: TeamItem


class TeamListItem(BaseModel):
    id: str
    name: str
    description: str
    owner_id: str
    thumbnail_url: Optional[str] = None
    authority: TeamRole


class TeamListResponse(BaseModel):
    list: List[TeamListItem]


class TeamUserListItem(BaseModel):
    id: str
    nickname: str
    email: str
    thumbnail_url: Optional[str] = None
    authority: TeamRole


class TeamUserListResponse(BaseModel):
    list: List[TeamUserListItem]


class InviteUserRequest(BaseModel):
    user_id: str
    authority: TeamRole


class ChangeAuthorityRequest(BaseModel):
    user_id: str
    authority: TeamRole


class TransferOwnershipRequest(BaseModel):
    user_id: str
