import threading
import unittest
from unittest.mock import patch

from pydantic import ValidationError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from prakritipath.auth import service
from prakritipath.auth.revocation import DatabaseRevocationRegistry, InMemoryRevocationRegistry, token_id
from prakritipath.core.settings import Settings
from prakritipath.models.RevokedToken import RevokedToken


class TestInMemoryRevocationRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = InMemoryRevocationRegistry()

    def test_starts_empty(self):
        self.assertEqual(len(self.registry), 0)
        self.assertFalse(self.registry.is_revoked("token"))

    def test_revoke_keeps_first_timestamp(self):
        self.registry.revoke("token")
        first = self.registry.revoked_at("token")
        self.registry.revoke("token")
        self.assertEqual(self.registry.revoked_at("token"), first)
        self.assertTrue(self.registry.is_revoked("token"))
        self.assertFalse(self.registry.is_revoked("other"))

    def test_concurrent_revocations_are_not_lost(self):
        tokens = [f"token-{i}" for i in range(2000)]

        def worker(chunk):
            for token in chunk:
                self.registry.revoke(token)

        threads = [threading.Thread(target=worker, args=(tokens[i::8],)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(self.registry), len(tokens))
        self.assertTrue(all(self.registry.is_revoked(t) for t in tokens))


class TestDatabaseRevocationRegistry(unittest.TestCase):

    def setUp(self):
        self.engine = create_engine(
            "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
        SQLModel.metadata.create_all(self.engine)
        self.registry = DatabaseRevocationRegistry(self.engine)

    def test_revoke_and_lookup(self):
        self.assertFalse(self.registry.is_revoked("token"))
        self.registry.revoke("token")
        self.assertTrue(self.registry.is_revoked("token"))
        self.assertFalse(self.registry.is_revoked("other"))

    def test_double_revoke_stores_one_row(self):
        self.registry.revoke("token")
        self.registry.revoke("token")
        with Session(self.engine) as session:
            rows = session.query(RevokedToken).all()
        self.assertEqual([r.token_id for r in rows], [token_id("token")])

    def test_shared_between_registry_instances(self):
        DatabaseRevocationRegistry(self.engine).revoke("token")
        self.assertTrue(DatabaseRevocationRegistry(self.engine).is_revoked("token"))

    def test_raw_token_is_not_stored(self):
        self.registry.revoke("secret.jwt.value")
        with Session(self.engine) as session:
            stored = session.get(RevokedToken, token_id("secret.jwt.value"))
        self.assertIsNotNone(stored)
        self.assertNotIn("secret", stored.token_id)


class TestRegistrySelection(unittest.TestCase):

    def setUp(self):
        service._authenticator = None

    def tearDown(self):
        service._authenticator = None

    def test_memory_backend_is_shared_by_the_process(self):
        with patch.object(service.settings, "REVOCATION_BACKEND", "memory"):
            first = service.get_authenticator()
            second = service.get_authenticator()
        self.assertIs(first, second)
        self.assertIsInstance(first.registry, InMemoryRevocationRegistry)

    def test_database_backend(self):
        with patch.object(service.settings, "REVOCATION_BACKEND", "database"):
            authenticator = service.get_authenticator()
        self.assertIsInstance(authenticator.registry, DatabaseRevocationRegistry)

    def test_unknown_backend_is_rejected_by_settings(self):
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="unit-test-secret", REVOCATION_BACKEND="redis")

    def test_known_backends_are_accepted(self):
        for backend in ("memory", "database"):
            with self.subTest(backend=backend):
                loaded = Settings(JWT_SECRET="unit-test-secret", REVOCATION_BACKEND=backend)
                self.assertEqual(loaded.REVOCATION_BACKEND, backend)
