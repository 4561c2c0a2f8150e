from modeler.database.dynamo_client import scan_all
from modeler.modules.users.models import User
from typing import Optional


class UserService:
    def __init__(self, dynamo):
        self.table = dynamo.Table(User.TABLE_NAME)

    def create_user(self, user: User) -> str:
        """Put a user item; an existing id is overwritten"""
        self.table.put_item(Item=user.to_item())
        return user.id

    def find_by_id(self, user_id: str) -> Optional[User]:
        result = self.table.get_item(Key={"id": user_id})
        item = result.get("Item")
        return User.from_item(item) if item else None

    def find_by_email(self, email: str) -> Optional[User]:
        items = scan_all(self.table, "email", email)
        return User.from_item(items[0]) if items else None

    def find_by_github_id(self, github_id: str) -> Optional[User]:
        items = scan_all(self.table, "github_id", github_id)
        return User.from_item(items[0]) if items else None

    def exists_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None
