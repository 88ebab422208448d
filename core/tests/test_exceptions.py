from django.db import OperationalError
from django.test import SimpleTestCase
from rest_framework import exceptions as drf_exceptions

from core.exceptions import (
    CapacityError,
    ConflictError,
    NotFoundError,
    custom_exception_handler,
)


class ExceptionHandlerTests(SimpleTestCase):

    def test_hackathon_error_body(self):
        resp = custom_exception_handler(
            NotFoundError("Some users do not exist", invalid_emails=["x@example.com"]), {}
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(
            resp.data,
            {"statusCode": 404, "message": "Some users do not exist", "invalid_emails": ["x@example.com"]},
        )

    def test_status_override(self):
        resp = custom_exception_handler(ConflictError("User is already registered", status_code=409), {})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.data["statusCode"], 409)

    def test_default_message(self):
        resp = custom_exception_handler(CapacityError(), {})
        self.assertEqual(resp.data["message"], "Team is at maximum capacity")

    def test_drf_detail_error(self):
        resp = custom_exception_handler(drf_exceptions.NotAuthenticated(), {})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.data["statusCode"], 401)
        self.assertIn("credentials", resp.data["message"])

    def test_drf_validation_error(self):
        resp = custom_exception_handler(drf_exceptions.ValidationError({"team_id": ["This field is required."]}), {})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["message"], "Bad request")
        self.assertIn("team_id", resp.data["errors"])

    def test_database_error(self):
        with self.assertLogs("hackathon.core", level="ERROR"):
            resp = custom_exception_handler(OperationalError("connection refused"), {})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data, {"statusCode": 500, "message": "Internal server error"})

    def test_unexpected_error(self):
        with self.assertLogs("hackathon.core", level="ERROR"):
            resp = custom_exception_handler(RuntimeError("boom"), {})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data["message"], "Internal server error")
