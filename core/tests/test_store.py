from unittest import mock

from django.db import OperationalError
from django.test import TestCase

from core import store as store_module
from core.exceptions import DependencyError
from core.store import DocumentStore, get_store


class DocumentStoreTests(TestCase):

    def test_get_store_is_shared(self):
        self.assertIs(get_store(), get_store())

    def test_health_check(self):
        self.assertTrue(DocumentStore().health_check())

    def test_health_check_failure(self):
        store = DocumentStore()
        connection = mock.Mock()
        connection.cursor.side_effect = OperationalError("no route to host")
        with mock.patch.object(DocumentStore, "connection", new_callable=mock.PropertyMock, return_value=connection):
            self.assertFalse(store.health_check())

    def test_ensure_healthy_unreachable(self):
        store = DocumentStore()
        connection = mock.Mock()
        connection.ensure_connection.side_effect = OperationalError("no route to host")
        with mock.patch.object(DocumentStore, "connection", new_callable=mock.PropertyMock, return_value=connection):
            with self.assertRaises(DependencyError):
                store.ensure_healthy()

    def test_closed_store_is_replaced(self):
        connection = mock.Mock()
        with mock.patch.object(DocumentStore, "connection", new_callable=mock.PropertyMock, return_value=connection):
            original = get_store()
            store_module.close_store()

            connection.close.assert_called_once()
            self.assertTrue(original.closed)
            with self.assertRaises(DependencyError):
                original.ensure_healthy()

            replacement = get_store()
        self.assertIsNot(replacement, original)
        self.assertFalse(replacement.closed)
