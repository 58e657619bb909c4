"""
Pytest Configuration File

This module provides fixtures and configuration for all tests.
"""

import pytest
import os
import sys
from fastapi.testclient import TestClient
from datetime import datetime, timedelta
from bson import ObjectId
from pymongo.errors import PyMongoError

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from annotation_tracker.main import app
from annotation_tracker.features.entries.store import EntryStore, get_entry_store

class FakeInsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id

class FakeDeleteResult:
    def __init__(self, deleted_count):
        self.deleted_count = deleted_count

class FakeCursor:
    """Mimics the chained Motor cursor API used by EntryStore."""

    def __init__(self, docs):
        self.docs = list(docs)

    def sort(self, key_or_list, direction=None):
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction)]
        # stable sorts applied from the last key to the first
        for key, key_direction in reversed(keys):
            self.docs.sort(
                key=lambda doc: (doc.get(key) is None, doc.get(key)),
                reverse=key_direction < 0
            )
        return self

    def skip(self, count):
        self.docs = self.docs[count:]
        return self

    def limit(self, count):
        if count:
            self.docs = self.docs[:count]
        return self

    async def to_list(self, length=None):
        return [dict(doc) for doc in self.docs]

class FakeCollection:
    """In-memory stand-in for an AsyncIOMotorCollection."""

    def __init__(self):
        self.docs = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise PyMongoError("connection refused")

    async def insert_one(self, document):
        self._check()
        document = dict(document)
        document.setdefault("_id", ObjectId())
        self.docs.append(document)
        return FakeInsertResult(document["_id"])

    def find(self, query=None):
        self._check()
        query = query or {}
        return FakeCursor(
            doc for doc in self.docs
            if all(doc.get(key) == value for key, value in query.items())
        )

    async def delete_many(self, query):
        self._check()
        deleted = len(self.docs)
        self.docs = []
        return FakeDeleteResult(deleted)

    async def count_documents(self, query):
        self._check()
        return len(self.docs)

@pytest.fixture
def fake_collection():
    """Fixture for an empty in-memory entries collection"""
    return FakeCollection()

@pytest.fixture
def entry_store(fake_collection):
    return EntryStore(fake_collection)

@pytest.fixture
def test_client(entry_store):
    """Fixture for FastAPI test client backed by the in-memory store"""
    app.dependency_overrides[get_entry_store] = lambda: entry_store
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def make_entry():
    """Factory for stored-entry dicts with sensible defaults"""
    base_time = datetime(2024, 1, 1, 9, 0, 0)
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        entry = {
            "userName": "alice",
            "qaName": "QA1",
            "annotationCount": 40,
            "anticipatedCount": 40,
            "timeSlot": "9-10",
            "location": "vyom",
            "date": "2024-01-01",
            "timestamp": base_time + timedelta(minutes=counter["n"]),
        }
        entry.update(overrides)
        return entry

    return _make

@pytest.fixture
def entry_payload():
    """Valid POST /entries body"""
    return {
        "userName": "alice",
        "qaName": "QA1",
        "annotationCount": 42,
        "anticipatedCount": 40,
        "timeSlot": "9-10",
        "location": "vyom",
        "date": "2024-01-01"
    }
