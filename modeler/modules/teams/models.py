# DynamoDB tables: modeler_team, modeler_team_user, modeler_team_invite
# Items are plain string attributes; see to_item/from_item below.

"""
Expected DynamoDB table structure:

modeler_team:
- id: S (partition key)
- name: S
- description: S
- owner_id: S - user id holding the OWNER membership
- thumbnail_url: S (optional)

modeler_team_user:
- team_id: S (partition key)
- user_id: S (sort key)
- authority: S - values: OWNER, ADMIN, WRITE, READ

modeler_team_invite:
- code: S (partition key) - single-use invite code
- team_id: S
- user_id: S - invited user
- authority: S - role granted on join
"""

from enum import Enum
from pydantic import BaseModel
from typing import Any, ClassVar, Dict, Optional, Tuple


class TeamRole(str, Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    WRITE = "WRITE"
    READ = "READ"

    @classmethod
    def decode(cls, value: str) -> "TeamRole":
        """Decode a stored authority string; unknown values raise ValueError."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown team authority: {value!r}")


class Team(BaseModel):
    TABLE_NAME: ClassVar[str] = "modeler_team"
    KEY_SCHEMA: ClassVar[Tuple[str, ...]] = ("id",)

    id: str
    name: str
    description: str
    owner_id: str
    thumbnail_url: Optional[str] = None

    def to_item(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Team":
        return cls(**item)


class TeamUser(BaseModel):
    TABLE_NAME: ClassVar[str] = "modeler_team_user"
    KEY_SCHEMA: ClassVar[Tuple[str, ...]] = ("team_id", "user_id")

    team_id: str
    user_id: str
    authority: TeamRole

    def to_item(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "user_id": self.user_id,
            "authority": self.authority.value,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "TeamUser":
        return cls(
            team_id=item["team_id"],
            user_id=item["user_id"],
            authority=TeamRole.decode(item["authority"]),
        )


class TeamInvite(BaseModel):
    TABLE_NAME: ClassVar[str] = "modeler_team_invite"
    KEY_SCHEMA: ClassVar[Tuple[str, ...]] = ("code",)

    code: str
    team_id: str
    user_id: str
    authority: TeamRole

    def to_item(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "team_id": self.team_id,
            "user_id": self.user_id,
            "authority": self.authority.value,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "TeamInvite":
        return cls(
            code=item["code"],
            team_id=item["team_id"],
            user_id=item["user_id"],
            authority=TeamRole.decode(item["authority"]),
        )
