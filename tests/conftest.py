"""
Pytest configuration and shared fixtures.
"""

import copy

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.crs.engine import ApplicantInput, LanguageAbility
from app.crs.profiles import default_inputs
from app.crs.tables import EducationLevel
from app.store import ProfileStore


class FakeCollection:
    """In-memory stand-in for the few motor collection calls the store makes."""

    def __init__(self):
        self.docs = {}

    async def find_one(self, flt):
        doc = self.docs.get(flt["_id"])
        return copy.deepcopy(doc) if doc is not None else None

    async def replace_one(self, flt, doc, upsert=False):
        if flt["_id"] in self.docs or upsert:
            self.docs[flt["_id"]] = copy.deepcopy(doc)

    async def delete_one(self, flt):
        self.docs.pop(flt["_id"], None)


class FailingCollection:
    """Collection whose every call fails like an unreachable server."""

    async def find_one(self, flt):
        raise ServerSelectionTimeoutError("mongo down")

    async def replace_one(self, flt, doc, upsert=False):
        raise ServerSelectionTimeoutError("mongo down")

    async def delete_one(self, flt):
        raise ServerSelectionTimeoutError("mongo down")


class FakeDatabase:
    def __init__(self, collection):
        self.collection = collection

    def __getitem__(self, name):
        return self.collection


@pytest.fixture
def default_applicant() -> ApplicantInput:
    """Documented default: single, 30, bachelors, CLB 10 everywhere in the first language."""
    return default_inputs()


@pytest.fixture
def strong_applicant() -> ApplicantInput:
    """Bachelors, CLB 9, 2 years Canadian and 3 years foreign experience."""
    return ApplicantInput(
        age=29,
        education=EducationLevel.BACHELORS,
        first_language=LanguageAbility(speaking=9, listening=9, reading=9, writing=9),
        canadian_work_years=2,
        foreign_work_years=3,
    )


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def store(fake_collection) -> ProfileStore:
    return ProfileStore(FakeDatabase(fake_collection))


@pytest.fixture
def failing_store() -> ProfileStore:
    return ProfileStore(FakeDatabase(FailingCollection()))


@pytest.fixture
def client(store):
    """API client with the profile store backed by an in-memory collection."""
    from app.main import app
    from routes.profiles import get_profile_store

    app.dependency_overrides[get_profile_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(failing_store):
    from app.main import app
    from routes.profiles import get_profile_store

    app.dependency_overrides[get_profile_store] = lambda: failing_store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
