from datetime import datetime, timedelta, timezone as dt_timezone

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIRequestFactory
from rest_framework.request import Request
from rest_framework.parsers import JSONParser

from core.auth import AuthGateway, BodyTokenAuthentication
from core.exceptions import AuthenticationError, NotFoundError


User = get_user_model()


def make_token(claims, secret=None):
    return jwt.encode(claims, secret or settings.JWT_SECRET, algorithm="HS256")


class AuthGatewayTests(TestCase):
    def setUp(self):
        self.gateway = AuthGateway()

    def test_matching_email(self):
        token = make_token({"email": "ada@example.com"})
        self.assertTrue(self.gateway.verify(token, "ADA@example.com"))

    def test_email_mismatch(self):
        token = make_token({"email": "ada@example.com"})
        self.assertFalse(self.gateway.verify(token, "eve@example.com"))

    def test_wrong_secret(self):
        token = make_token({"email": "ada@example.com"}, secret="some-other-secret-that-is-long-enough")
        self.assertFalse(self.gateway.verify(token, "ada@example.com"))

    def test_expired(self):
        expired = datetime.now(dt_timezone.utc) - timedelta(minutes=5)
        token = make_token({"email": "ada@example.com", "exp": expired})
        self.assertFalse(self.gateway.verify(token, "ada@example.com"))

    def test_missing_parts(self):
        self.assertFalse(self.gateway.verify("", "ada@example.com"))
        self.assertFalse(self.gateway.verify(make_token({"email": "ada@example.com"}), ""))
        self.assertFalse(self.gateway.verify("not.a.jwt", "ada@example.com"))


class BodyTokenAuthenticationTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.auth = BodyTokenAuthentication()
        self.user = User.objects.create_user(email="ada@example.com", password="pass1234")

    def request(self, body, **extra):
        django_request = self.factory.post("/api/teams/join/", body, format="json", **extra)
        return Request(django_request, parsers=[JSONParser()])

    def test_no_credentials(self):
        self.assertIsNone(self.auth.authenticate(self.request({"team_id": "x"})))

    def test_body_token(self):
        token = make_token({"email": "ada@example.com"})
        user, returned = self.auth.authenticate(self.request({"auth_email": "Ada@example.com", "auth_token": token}))
        self.assertEqual(user, self.user)
        self.assertEqual(returned, token)

    def test_header_token(self):
        token = make_token({"email": "ada@example.com"})
        request = self.request({"auth_email": "ada@example.com"}, HTTP_AUTHORIZATION=f"Bearer {token}")
        user, _ = self.auth.authenticate(request)
        self.assertEqual(user, self.user)

    def test_bad_token(self):
        with self.assertRaises(AuthenticationError):
            self.auth.authenticate(self.request({"auth_email": "ada@example.com", "auth_token": "junk"}))

    def test_unknown_user(self):
        token = make_token({"email": "ghost@example.com"})
        with self.assertRaises(NotFoundError):
            self.auth.authenticate(self.request({"auth_email": "ghost@example.com", "auth_token": token}))


class AuthSettingsTests(TestCase):

    def test_body_token_authentication_is_the_default(self):
        from django.apps import apps
        from rest_framework.settings import api_settings

        self.assertTrue(apps.ready)
        self.assertIn(BodyTokenAuthentication, api_settings.DEFAULT_AUTHENTICATION_CLASSES)

    def test_exceptions_module_loads_before_drf_views(self):
        import core.exceptions

        # rest_framework.views resolves the authentication classes on import
        self.assertFalse(hasattr(core.exceptions, "drf_exception_handler"))
