import logging
from fastapi import HTTPException
from modeler.database.dynamo_client import scan_all
from modeler.modules.teams.models import Team, TeamInvite, TeamRole, TeamUser
from typing import List, Optional

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(self, dynamo):
        self.teams = dynamo.Table(Team.TABLE_NAME)
        self.team_users = dynamo.Table(TeamUser.TABLE_NAME)
        self.invites = dynamo.Table(TeamInvite.TABLE_NAME)

    # Teams

    def create_team(self, team: Team) -> str:
        """Upsert a team by id"""
        self.teams.put_item(Item=team.to_item())
        return team.id

    def get_team_by_id(self, team_id: str) -> Team:
        result = self.teams.get_item(Key={"id": team_id})
        if "Item" not in result:
            raise HTTPException(status_code=404, detail="Team not found")
        return Team.from_item(result["Item"])

    def delete_team_by_id(self, team_id: str) -> None:
        result = self.teams.delete_item(Key={"id": team_id}, ReturnValues="ALL_OLD")
        if "Attributes" not in result:
            raise HTTPException(status_code=404, detail="Team not found")

    def create_team_with_owner(self, team: Team) -> str:
        """Write the team, then its OWNER membership. Not atomic: a failed
        membership write removes the team row again before re-raising."""
        self.create_team(team)
        try:
            self.create_team_user(TeamUser(team_id=team.id, user_id=team.owner_id, authority=TeamRole.OWNER))
        except Exception:
            logger.error("Owner membership write failed for team %s, removing team", team.id)
            self.teams.delete_item(Key={"id": team.id})
            raise
        return team.id

    # Memberships

    def create_team_user(self, team_user: TeamUser) -> None:
        """Upsert a membership by (team_id, user_id)"""
        self.team_users.put_item(Item=team_user.to_item())

    def find_team_user(self, team_id: str, user_id: str) -> Optional[TeamUser]:
        result = self.team_users.get_item(Key={"team_id": team_id, "user_id": user_id})
        item = result.get("Item")
        return TeamUser.from_item(item) if item else None

    def list_team_users_by_team_id(self, team_id: str) -> List[TeamUser]:
        return [TeamUser.from_item(item) for item in scan_all(self.team_users, "team_id", team_id)]

    def list_team_users_by_user_id(self, user_id: str) -> List[TeamUser]:
        return [TeamUser.from_item(item) for item in scan_all(self.team_users, "user_id", user_id)]

    def transfer_ownership(self, team: Team, current_owner_id: str, new_owner_id: str) -> None:
        """Demote current_owner_id to ADMIN, promote new_owner_id to OWNER and
        point the team at the new owner. Three independent writes; earlier
        membership rows are restored if a later write fails."""
        previous = self.find_team_user(team.id, new_owner_id)
        undo = []
        try:
            self.create_team_user(TeamUser(team_id=team.id, user_id=current_owner_id, authority=TeamRole.ADMIN))
            undo.append(lambda: self.create_team_user(
                TeamUser(team_id=team.id, user_id=current_owner_id, authority=TeamRole.OWNER)
            ))
            self.create_team_user(TeamUser(team_id=team.id, user_id=new_owner_id, authority=TeamRole.OWNER))
            if previous is not None:
                undo.append(lambda: self.create_team_user(previous))
            else:
                undo.append(lambda: self.team_users.delete_item(Key={"team_id": team.id, "user_id": new_owner_id}))
            self.create_team(team.model_copy(update={"owner_id": new_owner_id}))
        except Exception:
            logger.error("Ownership transfer of team %s failed, restoring memberships", team.id)
            for step in reversed(undo):
                try:
                    step()
                except Exception:
                    logger.exception("Could not restore membership rows of team %s", team.id)
            raise

    # Invites

    def create_team_invite(self, invite: TeamInvite) -> str:
        self.invites.put_item(Item=invite.to_item())
        return invite.code

    def get_team_invite_by_code(self, code: str) -> TeamInvite:
        result = self.invites.get_item(Key={"code": code})
        if "Item" not in result:
            raise HTTPException(status_code=404, detail="Invite not found")
        return TeamInvite.from_item(result["Item"])

    def delete_team_invite_by_code(self, code: str) -> None:
        result = self.invites.delete_item(Key={"code": code}, ReturnValues="ALL_OLD")
        if "Attributes" not in result:
            raise HTTPException(status_code=404, detail="Invite not found")
