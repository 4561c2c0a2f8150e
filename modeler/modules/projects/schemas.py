from pydantic import BaseModel
from typing import Optional, List


class CreateProjectRequest(BaseModel):
    name: str
    description: str = ""
    thumbnail_url: Optional[str] = None


class CreateProjectWithTeamRequest(CreateProjectRequest):
    team_id: str


class CreateProjectResponse(BaseModel):
    success: bool = False
    project_id: str = ""


class UpdateProjectRequest(BaseModel):
    name: str
    description: str = ""
    thumbnail_url: Optional[str] = None
    x: str = "0"
    y: str = "0"


class UpdateProjectResponse(BaseModel):
    success: bool = False


class ProjectItem(BaseModel):
    id: str
    team_id: str
    name: str
    description: str
    thumbnail_url: Optional[str] = None
    x: str = "0"
    y: str = "0"


class GetProjectResponse(BaseModel):
    data: ProjectItem


class ProjectListResponse(BaseModel):
    list: List[ProjectItem]
