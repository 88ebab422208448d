from unittest import mock

import jwt
from django.db import DatabaseError
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import mail

from rest_framework.test import APITestCase, APIClient
from rest_framework import status


User = get_user_model()


def make_token(email):
    return jwt.encode({"email": email}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


class RegistrationApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()

        # ---- Users ----
        self.hacker = User.objects.create_user(
            email="hacker@example.com",
            password="pass1234",
            first_name="Ada",
            last_name="Lovelace",
            phone_number="555-0100",
            date_of_birth="2004-12-10",
            gender="female",
            ethnicity="prefer not to say",
            level_of_study="university",
            school="Rutgers University",
            major="Computer Science",
            grad_year="2027",
        )
        self.director = User.objects.create_user(
            email="director@example.com",
            password="pass1234",
            role=["director"],
        )

    def post(self, route, user, payload):
        body = {"auth_email": user.email, "auth_token": make_token(user.email)}
        body.update(payload)
        return self.client.post(f"/api/users/{route}/", body, format="json")

    def test_register_sends_status_email(self):
        resp = self.post("update", self.hacker, {
            "user_email": self.hacker.email,
            "updates": {"$set": {"registration_status": "registered"}},
        })

        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)
        self.assertEqual(resp.data["user"]["registration_status"], "registered")
        self.assertIsNotNone(resp.data["user"]["registered_at"])
        self.assertEqual(resp.data["user"]["team_info"], {"team_id": None, "role": None, "pending_invites": []})

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, [self.hacker.email])
        self.assertEqual(mail.outbox[0].subject, "Registration Received")
        self.assertIn("Dear Ada Lovelace", mail.outbox[0].body)

    def test_locked_field(self):
        resp = self.post("update", self.director, {
            "user_email": self.hacker.email,
            "updates": {"$set": {"email_verified": True}},
        })
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, resp.content)
        self.assertEqual(resp.data["statusCode"], 400)
        self.assertEqual(resp.data["locked_fields"], ["email_verified"])

    def test_hacker_cannot_update_others(self):
        resp = self.post("update", self.hacker, {
            "user_email": self.director.email,
            "updates": {"$set": {"school": "Elsewhere"}},
        })
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED, resp.content)

    def test_same_status_is_conflict(self):
        resp = self.post("update", self.director, {
            "user_email": self.hacker.email,
            "updates": {"$set": {"registration_status": "unregistered"}},
        })
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT, resp.content)

    def test_target_missing(self):
        resp = self.post("update", self.director, {
            "user_email": "ghost@example.com",
            "updates": {"$set": {"school": "X"}},
        })
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND, resp.content)
        self.assertEqual(resp.data["message"], "User to be updated not found.")

    def test_store_error_is_500(self):
        with mock.patch("users.state_machine.User.objects.find_by_email", side_effect=DatabaseError("connection reset")):
            resp = self.post("update", self.director, {
                "user_email": self.hacker.email,
                "updates": {"$set": {"school": "X"}},
            })
        self.assertEqual(resp.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR, resp.content)
        self.assertEqual(resp.data["message"], "Internal server error")

    def test_exists(self):
        resp = self.post("exists", self.hacker, {"email": "Director@example.com"})
        self.assertEqual(resp.status_code, status.HTTP_200_OK, resp.content)

        resp = self.post("exists", self.hacker, {"email": "ghost@example.com"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND, resp.content)
