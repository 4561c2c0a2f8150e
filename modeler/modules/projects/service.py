from fastapi import HTTPException
from modeler.database.dynamo_client import scan_all
from modeler.modules.projects.models import Project
from typing import List


class ProjectService:
    def __init__(self, dynamo):
        self.table = dynamo.Table(Project.TABLE_NAME)

    def create_project(self, project: Project) -> str:
        """Upsert a project by id"""
        self.table.put_item(Item=project.to_item())
        return project.id

    def get_project_by_id(self, project_id: str) -> Project:
        result = self.table.get_item(Key={"id": project_id})
        if "Item" not in result:
            raise HTTPException(status_code=404, detail="Project not found")
        return Project.from_item(result["Item"])

    def delete_project_by_id(self, project_id: str) -> None:
        result = self.table.delete_item(Key={"id": project_id}, ReturnValues="ALL_OLD")
        if "Attributes" not in result:
            raise HTTPException(status_code=404, detail="Project not found")

    def list_projects_by_team_id(self, team_id: str) -> List[Project]:
        return [Project.from_item(item) for item in scan_all(self.table, "team_id", team_id)]
