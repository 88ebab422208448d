import jwt
from django.conf import settings
from django.contrib.auth import get_user_model

from rest_framework.test import APITestCase, APIClient
from rest_framework import status

from teams.models import Team, TeamInvite, TeamStatus


User = get_user_model()


def make_token(email):
    return jwt.encode({"email": email}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


class TeamApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()

        # ---- Users ----
        self.leader = User.objects.create_user(email="leader@example.com", password="pass1234")
        self.alice = User.objects.create_user(email="alice@example.com", password="pass1234")
        self.bob = User.objects.create_user(email="bob@example.com", password="pass1234")
        self.director = User.objects.create_user(
            email="director@example.com",
            password="pass1234",
            role=["director"],
        )

    def post(self, route, user, payload=None):
        body = {"auth_email": user.email, "auth_token": make_token(user.email)}
        body.update(payload or {})
        return self.client.post(f"/api/teams/{route}/", body, format="json")

    def create_team(self, members=()):
        resp = self.post("create", self.leader, {"team_name": "Alpha Team", "members": list(members)})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        return resp.data["team_id"]

    # ---- Auth ----

    def test_missing_credentials(self):
        resp = self.client.post("/api/teams/create/", {"team_name": "Alpha"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED, resp.content)
        self.assertEqual(resp.data["statusCode"], 401)

    def test_token_for_other_email_rejected(self):
        body = {
            "auth_email": self.leader.email,
            "auth_token": make_token(self.alice.email),
            "team_name": "Alpha",
        }
        resp = self.client.post("/api/teams/create/", body, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED, resp.content)
        self.assertEqual(resp.data["message"], "Unauthorized - Invalid token")
        self.assertFalse(Team.objects.exists())

    def test_bearer_header_accepted(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token(self.leader.email)}")
        resp = self.client.post(
            "/api/teams/create/",
            {"auth_email": self.leader.email, "team_name": "Header Team"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)

    def test_unknown_auth_user(self):
        body = {"auth_email": "ghost@example.com", "auth_token": make_token("ghost@example.com"), "team_id": "x"}
        resp = self.client.post("/api/teams/join/", body, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND, resp.content)

    # ---- Flow ----

    def test_full_team_flow(self):
        team_id = self.create_team([self.alice.email])

        resp = self.post("invite", self.leader, {"team_id": team_id, "emails": [self.bob.email, "nobody@example.com"]})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["invited"], [self.bob.email])
        self.assertEqual(resp.data["failed"], [{"email": "nobody@example.com", "reason": "User does not exist"}])

        resp = self.post("join", self.alice, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["team_id"], team_id)

        resp = self.post("decline-invite", self.bob, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)

        resp = self.post("decline-invite", self.bob, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.content)
        self.assertEqual(resp.data["message"], "No pending invitation found for this team")

        resp = self.post("read", self.alice, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["team"]["members"], [self.alice.email])
        self.assertEqual(resp.data["team"]["leader_email"], self.leader.email)

        resp = self.post("leave", self.alice, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["message"], "Successfully left team")

        resp = self.post("leave", self.leader, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.content)
        self.assertEqual(resp.data["message"], "Empty team member list")

        resp = self.post("disband", self.leader, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(Team.objects.get(team_id=team_id).status, TeamStatus.DISBANDED)

    def test_create_errors_carry_detail(self):
        resp = self.post("create", self.leader, {"team_name": "Alpha", "members": ["nobody@example.com"]})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND, resp.content)
        self.assertEqual(resp.data["statusCode"], 404)
        self.assertEqual(resp.data["invalid_emails"], ["nobody@example.com"])

        resp = self.post("create", self.leader, {"team_name": "Bad!Name"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.content)

    def test_schema_errors_are_wrapped(self):
        resp = self.post("invite", self.leader, {"emails": "not-a-list"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.content)
        self.assertEqual(resp.data["message"], "Bad request")
        self.assertIn("team_id", resp.data["errors"])

    def test_invite_by_non_leader(self):
        team_id = self.create_team()
        resp = self.post("invite", self.alice, {"team_id": team_id, "emails": [self.bob.email]})
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN, resp.content)

    def test_disband_by_director(self):
        team_id = self.create_team()

        resp = self.post("disband", self.alice, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN, resp.content)

        resp = self.post("disband", self.director, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)

        resp = self.post("disband", self.director, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.content)

    def test_member_removal(self):
        team_id = self.create_team([self.alice.email, self.bob.email])
        self.post("join", self.alice, {"team_id": team_id})

        resp = self.post("member-removal", self.leader, {"team_id": team_id, "member_emails": [self.alice.email, self.bob.email]})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["members_affected"], 2)
        self.assertFalse(TeamInvite.objects.exists())

        resp = self.post("member-removal", self.leader, {"team_id": team_id, "member_emails": [self.leader.email]})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.content)

    def test_read_requires_membership(self):
        team_id = self.create_team()

        resp = self.post("read", self.bob, {"team_id": team_id})
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED, resp.content)

        resp = self.post("read", self.director, {"member_email": self.leader.email})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["team"]["team_id"], team_id)
