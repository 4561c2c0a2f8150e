# DynamoDB table: modeler_user
# Email uniqueness is enforced by the signup handler (scan-then-write),
# not by the table.

"""
Expected DynamoDB table structure:

modeler_user:
- id: S (partition key)
- nickname: S
- email: S (unique by convention)
- password: S - hex SHA-256 of password + password_salt
- password_salt: S
- github_id: S (optional) - numeric GitHub account id as a string
- thumbnail_url: S (optional)
"""

from pydantic import BaseModel
from typing import Any, ClassVar, Dict, Optional, Tuple


class User(BaseModel):
    TABLE_NAME: ClassVar[str] = "modeler_user"
    KEY_SCHEMA: ClassVar[Tuple[str, ...]] = ("id",)

    id: str
    nickname: str
    email: str
    password: str
    password_salt: str
    github_id: Optional[str] = None
    thumbnail_url: Optional[str] = None

    def to_item(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "User":
        return cls(**item)
