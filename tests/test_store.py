"""
Tests for app/store.py - MongoDB-backed profile persistence.
"""

import asyncio

import pytest
from pymongo.errors import PyMongoError

from app.crs.profiles import Profile, apply_changes, default_profiles
from app.store import DEFAULT_SET_KEY


class TestLoad:
    """Test loading the comparison set."""

    def test_empty_store_returns_defaults(self, store):
        profiles = asyncio.run(store.load())
        assert [p.name for p in profiles] == ["Profile 1", "Profile 2", "Profile 3"]
        assert all(p.total == 411 for p in profiles)

    def test_load_returns_saved_set(self, store):
        first, second, third = default_profiles()
        edited = apply_changes(second, {"provincial_nomination": True}, name="With PNP")
        asyncio.run(store.save([first, edited]))

        loaded = asyncio.run(store.load())
        assert [p.name for p in loaded] == ["Profile 1", "With PNP"]
        assert loaded[1].total == 1011

    def test_scores_derived_on_load(self, store, fake_collection):
        fake_collection.docs[DEFAULT_SET_KEY] = {
            "_id": DEFAULT_SET_KEY,
            "profiles": [{"name": "Legacy", "inputs": {"age": 20, "educationLevel": "phd"}}],
        }
        loaded = asyncio.run(store.load())
        assert loaded[0].scores.age == 110
        assert loaded[0].scores.education == 150

    def test_malformed_inputs_load_blank(self, store, fake_collection):
        fake_collection.docs[DEFAULT_SET_KEY] = {
            "_id": DEFAULT_SET_KEY,
            "profiles": [{"name": "X", "inputs": "oops"}, "not a profile"],
        }
        loaded = asyncio.run(store.load())
        assert [p.name for p in loaded] == ["X", "Profile"]
        assert [p.total for p in loaded] == [0, 0]


class TestSave:
    """Test saving the comparison set."""

    def test_document_shape(self, store, fake_collection):
        asyncio.run(store.save(default_profiles()))
        doc = fake_collection.docs[DEFAULT_SET_KEY]
        assert len(doc["profiles"]) == 3
        assert doc["profiles"][0]["inputs"]["education"] == "bachelors"
        assert "scores" not in doc["profiles"][0]
        assert doc["updated_at"] is not None

    def test_rejects_oversized_set(self, store, default_applicant):
        profiles = [Profile.create(f"P{i}", default_applicant) for i in range(4)]
        with pytest.raises(ValueError):
            asyncio.run(store.save(profiles))


class TestReset:
    """Test reset to defaults."""

    def test_reset_clears_and_restores_defaults(self, store, fake_collection):
        edited = apply_changes(default_profiles()[0], {"age": 44})
        asyncio.run(store.save([edited]))

        profiles = asyncio.run(store.reset())
        assert DEFAULT_SET_KEY not in fake_collection.docs
        assert [p.total for p in profiles] == [411, 411, 411]
        assert [p.total for p in asyncio.run(store.load())] == [411, 411, 411]


class TestFailures:
    """Test that storage errors reach the caller."""

    def test_load_failure_propagates(self, failing_store):
        with pytest.raises(PyMongoError):
            asyncio.run(failing_store.load())

    def test_save_failure_propagates(self, failing_store):
        with pytest.raises(PyMongoError):
            asyncio.run(failing_store.save(default_profiles()))
