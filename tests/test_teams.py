import pytest

from modeler.config import settings
from modeler.modules.teams import routes as team_routes
from modeler.modules.teams.models import Team, TeamInvite, TeamRole, TeamUser
from modeler.modules.teams.service import TeamService
from modeler.modules.users.models import User


@pytest.fixture
def sent_emails(monkeypatch):
    sent = []
    monkeypatch.setattr(team_routes, "send_email", lambda target, title, content: sent.append((target, title, content)))
    return sent


def _membership(dynamo, team_id, user_id):
    return TeamService(dynamo).find_team_user(team_id, user_id)


# ---- create / read / update / delete

def test_create_team_makes_caller_owner(client, seed, dynamo, auth_headers):
    owner = seed.user()
    r = client.post("/team", json={"name": "core", "description": "d"}, headers=auth_headers(owner))
    assert r.status_code == 200
    team_id = r.json()["team_id"]
    assert r.json()["success"] is True

    team = TeamService(dynamo).get_team_by_id(team_id)
    assert team.owner_id == owner.id
    assert _membership(dynamo, team_id, owner.id).authority == TeamRole.OWNER


def test_create_team_requires_session(client):
    assert client.post("/team", json={"name": "core"}).status_code == 401


def test_failed_owner_membership_leaves_no_team(lenient_client, seed, dynamo, auth_headers):
    owner = seed.user()

    def broken_put(Item):
        raise RuntimeError("store unavailable")
    dynamo.Table(TeamUser.TABLE_NAME).put_item = broken_put

    r = lenient_client.post("/team", json={"name": "core"}, headers=auth_headers(owner))
    assert r.status_code == 500
    assert dynamo.Table(Team.TABLE_NAME).items == {}


def test_get_team_returns_callers_authority(client, seed, auth_headers):
    owner, writer = seed.user(), seed.user()
    team = seed.team(owner, name="core")
    seed.member(team, writer, TeamRole.WRITE)

    r = client.get(f"/team/{team.id}", headers=auth_headers(writer))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "core"
    assert data["authority"] == "WRITE"
    assert "entities:create" in data["permissions"]
    assert "projects:create" not in data["permissions"]


def test_get_team_not_member_is_forbidden(client, seed, auth_headers):
    team = seed.team(seed.user())
    assert client.get(f"/team/{team.id}", headers=auth_headers(seed.user())).status_code == 403


def test_get_missing_team_is_not_found(client, seed, auth_headers):
    assert client.get("/team/nope", headers=auth_headers(seed.user())).status_code == 404


def test_update_team_admin_only(client, seed, dynamo, auth_headers):
    owner, admin, writer = seed.user(), seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, admin, TeamRole.ADMIN)
    seed.member(team, writer, TeamRole.WRITE)

    body = {"name": "renamed", "description": "new"}
    assert client.put(f"/team/{team.id}", json=body, headers=auth_headers(writer)).status_code == 403
    assert client.put(f"/team/{team.id}", json=body, headers=auth_headers(admin)).status_code == 200

    updated = TeamService(dynamo).get_team_by_id(team.id)
    assert updated.name == "renamed"
    assert updated.owner_id == owner.id


def test_delete_team_owner_only(client, seed, auth_headers):
    owner, admin = seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, admin, TeamRole.ADMIN)

    assert client.delete(f"/team/{team.id}", headers=auth_headers(admin)).status_code == 403
    assert client.delete(f"/team/{team.id}", headers=auth_headers(owner)).status_code == 200
    assert client.delete(f"/team/{team.id}", headers=auth_headers(owner)).status_code == 404


# ---- listings

def test_team_user_list(client, seed, auth_headers):
    owner, reader = seed.user(nickname="owner"), seed.user(nickname="reader")
    team = seed.team(owner)
    seed.member(team, reader, TeamRole.READ)

    r = client.get(f"/team/{team.id}/user/list", headers=auth_headers(reader))
    assert r.status_code == 200
    members = {item["nickname"]: item["authority"] for item in r.json()["list"]}
    assert members == {"owner": "OWNER", "reader": "READ"}


def test_team_user_list_drops_members_without_user_row(client, seed, dynamo, auth_headers):
    owner, gone = seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, gone, TeamRole.WRITE)
    dynamo.Table(User.TABLE_NAME).delete_item(Key={"id": gone.id})

    r = client.get(f"/team/{team.id}/user/list", headers=auth_headers(owner))
    assert r.status_code == 200
    assert [item["id"] for item in r.json()["list"]] == [owner.id]


def test_team_user_list_requires_membership(client, seed, auth_headers):
    team = seed.team(seed.user())
    assert client.get(f"/team/{team.id}/user/list", headers=auth_headers(seed.user())).status_code == 403


def test_my_team_list(client, seed, auth_headers):
    me, other = seed.user(), seed.user()
    mine = seed.team(me, name="mine")
    joined = seed.team(other, name="joined")
    seed.member(joined, me, TeamRole.READ)
    seed.team(other, name="foreign")

    r = client.get("/team/my/list", headers=auth_headers(me))
    assert r.status_code == 200
    teams = {item["name"]: item["authority"] for item in r.json()["list"]}
    assert teams == {"mine": "OWNER", "joined": "READ"}
    assert mine.id in {item["id"] for item in r.json()["list"]}


def test_my_team_list_skips_deleted_teams(client, seed, auth_headers):
    me = seed.user()
    kept = seed.team(me, name="kept")
    dropped = seed.team(me, name="dropped")
    client.delete(f"/team/{dropped.id}", headers=auth_headers(me))

    r = client.get("/team/my/list", headers=auth_headers(me))
    assert [item["id"] for item in r.json()["list"]] == [kept.id]


# ---- invites

def test_invite_lifecycle(client, seed, dynamo, auth_headers, sent_emails):
    owner, invitee = seed.user(), seed.user(email="u3@example.com")
    team = seed.team(owner, name="core")

    r = client.post(
        f"/team/{team.id}/user/invite",
        json={"user_id": invitee.id, "authority": "READ"},
        headers=auth_headers(owner),
    )
    assert r.status_code == 200
    assert r.json() == {"success": True}

    invites = list(dynamo.Table(TeamInvite.TABLE_NAME).items.values())
    assert len(invites) == 1
    code = invites[0]["code"]

    target, title, content = sent_emails[0]
    assert target == "u3@example.com"
    assert title == "[core] team invitation"
    assert f"/team/{team.id}/user/invite/{code}/join" in content

    r = client.get(f"/team/{team.id}/user/invite/{code}/join", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == settings.frontend_url
    assert _membership(dynamo, team.id, invitee.id).authority == TeamRole.READ
    assert dynamo.Table(TeamInvite.TABLE_NAME).items == {}

    r = client.get(f"/team/{team.id}/user/invite/{code}/join", follow_redirects=False)
    assert r.status_code == 404


def test_join_with_code_for_another_team(client, seed, dynamo):
    owner, invitee = seed.user(), seed.user()
    team, other = seed.team(owner), seed.team(owner)
    invite = seed.invite(team, invitee, TeamRole.WRITE)

    r = client.get(f"/team/{other.id}/user/invite/{invite.code}/join", follow_redirects=False)
    assert r.status_code == 400
    assert _membership(dynamo, other.id, invitee.id) is None


@pytest.mark.parametrize("inviter_role,invited_role,expected", [
    (TeamRole.ADMIN, "ADMIN", 400),
    (TeamRole.ADMIN, "OWNER", 400),
    (TeamRole.ADMIN, "WRITE", 200),
    (TeamRole.WRITE, "READ", 403),
    (TeamRole.READ, "READ", 403),
])
def test_invite_role_policy(client, seed, auth_headers, sent_emails, inviter_role, invited_role, expected):
    owner, inviter, invitee = seed.user(), seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, inviter, inviter_role)

    r = client.post(
        f"/team/{team.id}/user/invite",
        json={"user_id": invitee.id, "authority": invited_role},
        headers=auth_headers(inviter),
    )
    assert r.status_code == expected


def test_owner_cannot_invite_owner(client, seed, auth_headers, sent_emails):
    owner, invitee = seed.user(), seed.user()
    team = seed.team(owner)
    r = client.post(
        f"/team/{team.id}/user/invite",
        json={"user_id": invitee.id, "authority": "OWNER"},
        headers=auth_headers(owner),
    )
    assert r.status_code == 400
    assert sent_emails == []


def test_invite_rejects_self_and_existing_members(client, seed, auth_headers, sent_emails):
    owner, member = seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, member, TeamRole.READ)

    for user_id in (owner.id, member.id):
        r = client.post(
            f"/team/{team.id}/user/invite",
            json={"user_id": user_id, "authority": "WRITE"},
            headers=auth_headers(owner),
        )
        assert r.status_code == 400


def test_invite_unknown_user(client, seed, auth_headers, sent_emails):
    owner = seed.user()
    team = seed.team(owner)
    r = client.post(
        f"/team/{team.id}/user/invite",
        json={"user_id": "ghost", "authority": "WRITE"},
        headers=auth_headers(owner),
    )
    assert r.status_code == 404


def test_invite_unknown_role_is_bad_request(client, seed, auth_headers, sent_emails):
    owner, invitee = seed.user(), seed.user()
    team = seed.team(owner)
    r = client.post(
        f"/team/{team.id}/user/invite",
        json={"user_id": invitee.id, "authority": "SUPERUSER"},
        headers=auth_headers(owner),
    )
    assert r.status_code == 400


# ---- role changes and ownership

def test_admin_changes_writer_to_reader(client, seed, dynamo, auth_headers):
    owner, admin, writer = seed.user(), seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, admin, TeamRole.ADMIN)
    seed.member(team, writer, TeamRole.WRITE)

    r = client.put(
        f"/team/{team.id}/user/authority",
        json={"user_id": writer.id, "authority": "READ"},
        headers=auth_headers(admin),
    )
    assert r.status_code == 200
    assert _membership(dynamo, team.id, writer.id).authority == TeamRole.READ


def test_admin_cannot_change_other_admin_or_owner(client, seed, auth_headers):
    owner, admin, other_admin = seed.user(), seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, admin, TeamRole.ADMIN)
    seed.member(team, other_admin, TeamRole.ADMIN)

    for target in (other_admin, owner):
        r = client.put(
            f"/team/{team.id}/user/authority",
            json={"user_id": target.id, "authority": "READ"},
            headers=auth_headers(admin),
        )
        assert r.status_code == 403


def test_change_authority_of_non_member(client, seed, auth_headers):
    owner = seed.user()
    team = seed.team(owner)
    r = client.put(
        f"/team/{team.id}/user/authority",
        json={"user_id": seed.user().id, "authority": "READ"},
        headers=auth_headers(owner),
    )
    assert r.status_code == 404


def test_transfer_ownership(client, seed, dynamo, auth_headers):
    owner, admin = seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, admin, TeamRole.ADMIN)

    r = client.post(f"/team/{team.id}/ownership/transfer", json={"user_id": admin.id}, headers=auth_headers(owner))
    assert r.status_code == 200
    assert _membership(dynamo, team.id, owner.id).authority == TeamRole.ADMIN
    assert _membership(dynamo, team.id, admin.id).authority == TeamRole.OWNER
    assert TeamService(dynamo).get_team_by_id(team.id).owner_id == admin.id


def test_transfer_requires_owner(client, seed, auth_headers):
    owner, admin, writer = seed.user(), seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, admin, TeamRole.ADMIN)
    seed.member(team, writer, TeamRole.WRITE)

    r = client.post(f"/team/{team.id}/ownership/transfer", json={"user_id": writer.id}, headers=auth_headers(admin))
    assert r.status_code == 403


def test_transfer_to_non_member(client, seed, auth_headers):
    owner = seed.user()
    team = seed.team(owner)
    r = client.post(
        f"/team/{team.id}/ownership/transfer",
        json={"user_id": seed.user().id},
        headers=auth_headers(owner),
    )
    assert r.status_code == 400


def test_failed_transfer_restores_memberships(lenient_client, seed, dynamo, auth_headers):
    owner, admin = seed.user(), seed.user()
    team = seed.team(owner)
    seed.member(team, admin, TeamRole.ADMIN)

    def broken_put(Item):
        raise RuntimeError("store unavailable")
    dynamo.Table(Team.TABLE_NAME).put_item = broken_put

    r = lenient_client.post(
        f"/team/{team.id}/ownership/transfer",
        json={"user_id": admin.id},
        headers=auth_headers(owner),
    )
    assert r.status_code == 500
    assert _membership(dynamo, team.id, owner.id).authority == TeamRole.OWNER
    assert _membership(dynamo, team.id, admin.id).authority == TeamRole.ADMIN


def test_stale_invite_cannot_demote_new_owner(client, seed, dynamo, auth_headers):
    owner, invitee = seed.user(), seed.user()
    team = seed.team(owner)
    first = seed.invite(team, invitee, TeamRole.READ)
    second = seed.invite(team, invitee, TeamRole.READ)

    client.get(f"/team/{team.id}/user/invite/{first.code}/join", follow_redirects=False)
    r = client.post(f"/team/{team.id}/ownership/transfer", json={"user_id": invitee.id}, headers=auth_headers(owner))
    assert r.status_code == 200

    r = client.get(f"/team/{team.id}/user/invite/{second.code}/join", follow_redirects=False)
    assert r.status_code == 400
    assert _membership(dynamo, team.id, invitee.id).authority == TeamRole.OWNER
    assert _membership(dynamo, team.id, owner.id).authority == TeamRole.ADMIN
    assert dynamo.Table(TeamInvite.TABLE_NAME).items == {}
