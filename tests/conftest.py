# tests/conftest.py
import copy
import os
import uuid

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("JWT_SECRET", "TEST_JWT_SECRET")
os.environ.setdefault("ENVIRONMENT", "test")

from modeler.core.security import generate_salt, hash_password, issue_access_token  # noqa: E402
from modeler.database.dynamo_client import DynamoClient  # noqa: E402
from modeler.modules.entities.models import Entity  # noqa: E402
from modeler.modules.notes.models import Note  # noqa: E402
from modeler.modules.projects.models import Project  # noqa: E402
from modeler.modules.teams.models import Team, TeamInvite, TeamRole, TeamUser  # noqa: E402
from modeler.modules.users.models import User  # noqa: E402

MODELS = [User, Team, TeamUser, TeamInvite, Project, Entity, Note]
TEST_PASSWORD = "correct horse"


# ---- In-memory stand-in for a boto3 DynamoDB resource
class FakeTable:
    """Honours put/get/delete by key and paginated scans with an equality filter."""

    def __init__(self, name, key_schema, page_size=2):
        self.name = name
        self.key_schema = key_schema
        self.page_size = page_size
        self.items = {}
        self.scan_calls = 0

    def _key(self, data):
        return tuple(data[name] for name in self.key_schema)

    def put_item(self, Item):
        self.items[self._key(Item)] = copy.deepcopy(Item)
        return {}

    def get_item(self, Key):
        item = self.items.get(self._key(Key))
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def delete_item(self, Key, ReturnValues="NONE"):
        old = self.items.pop(self._key(Key), None)
        if ReturnValues == "ALL_OLD" and old is not None:
            return {"Attributes": old}
        return {}

    @staticmethod
    def _matches(item, condition):
        if condition is None:
            return True
        attr, value = condition.get_expression()["values"]
        return item.get(attr.name) == value

    def scan(self, FilterExpression=None, ExclusiveStartKey=None):
        self.scan_calls += 1
        keys = list(self.items)
        start = 0
        if ExclusiveStartKey is not None:
            start = keys.index(self._key(ExclusiveStartKey)) + 1

        page = [self.items[key] for key in keys[start:start + self.page_size]]
        result = {"Items": [copy.deepcopy(item) for item in page if self._matches(item, FilterExpression)]}
        if start + self.page_size < len(keys):
            result["LastEvaluatedKey"] = {name: page[-1][name] for name in self.key_schema}
        return result


class FakeDynamo:
    def __init__(self):
        self.tables = {model.TABLE_NAME: FakeTable(model.TABLE_NAME, model.KEY_SCHEMA) for model in MODELS}

    def Table(self, name):
        return self.tables[name]


@pytest.fixture
def dynamo():
    fake = FakeDynamo()
    DynamoClient._resource = fake
    yield fake
    DynamoClient.reset_resource()


@pytest.fixture
def client(dynamo):
    from modeler.main import app
    return TestClient(app)


@pytest.fixture
def lenient_client(dynamo):
    """Client that returns 500 responses instead of re-raising server errors"""
    from modeler.main import app
    return TestClient(app, raise_server_exceptions=False)


# ---- Seeding helpers
class Seed:
    def __init__(self, dynamo):
        self.dynamo = dynamo

    def user(self, nickname="tester", email=None, github_id=None) -> User:
        salt = generate_salt()
        user = User(
            id=str(uuid.uuid4()),
            nickname=nickname,
            email=email or f"{uuid.uuid4().hex[:8]}@example.com",
            password=hash_password(TEST_PASSWORD, salt),
            password_salt=salt,
            github_id=github_id,
        )
        self.dynamo.Table(User.TABLE_NAME).put_item(Item=user.to_item())
        return user

    def team(self, owner: User, name="team") -> Team:
        team = Team(id=str(uuid.uuid4()), name=name, description="", owner_id=owner.id)
        self.dynamo.Table(Team.TABLE_NAME).put_item(Item=team.to_item())
        self.member(team, owner, TeamRole.OWNER)
        return team

    def member(self, team: Team, user: User, role: TeamRole) -> TeamUser:
        team_user = TeamUser(team_id=team.id, user_id=user.id, authority=role)
        self.dynamo.Table(TeamUser.TABLE_NAME).put_item(Item=team_user.to_item())
        return team_user

    def project(self, team: Team, name="project") -> Project:
        project = Project(id=str(uuid.uuid4()), team_id=team.id, name=name, description="")
        self.dynamo.Table(Project.TABLE_NAME).put_item(Item=project.to_item())
        return project

    def entity(self, project: Project, name="users") -> Entity:
        entity = Entity(
            id=str(uuid.uuid4()),
            project_id=project.id,
            logical_name=name,
            physical_name=name,
        )
        self.dynamo.Table(Entity.TABLE_NAME).put_item(Item=entity.to_item())
        return entity

    def note(self, project: Project, content="remember") -> Note:
        note = Note(id=str(uuid.uuid4()), project_id=project.id, content=content)
        self.dynamo.Table(Note.TABLE_NAME).put_item(Item=note.to_item())
        return note

    def invite(self, team: Team, user: User, role: TeamRole) -> TeamInvite:
        invite = TeamInvite(code=str(uuid.uuid4()), team_id=team.id, user_id=user.id, authority=role)
        self.dynamo.Table(TeamInvite.TABLE_NAME).put_item(Item=invite.to_item())
        return invite


@pytest.fixture
def seed(dynamo):
    return Seed(dynamo)


def headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {issue_access_token(user.id)}"}


@pytest.fixture
def auth_headers():
    return headers_for
