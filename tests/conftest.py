"""
Shared fixtures: an app wired to an in-memory stand-in for the Motor
database, so the suite runs without a MongoDB server.

The lifespan is never entered (TestClient is not used as a context
manager), so nothing tries to connect; tests put the fake straight on
app.state.db, where the real get_db dependency picks it up.
"""
import copy
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from moviehub.core.config import Settings
from moviehub.server import create_app


def _matches(doc: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
    return all(doc.get(key) == value for key, value in (query or {}).items())


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length=None):
        docs = [copy.deepcopy(doc) for doc in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    """Implements the slice of AsyncIOMotorCollection the services use."""

    def __init__(self, name: str, calls: List[str]):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.calls = calls

    def find(self, query=None):
        self.calls.append(f"{self.name}.find")
        return FakeCursor([doc for doc in self.docs if _matches(doc, query)])

    async def find_one(self, query):
        self.calls.append(f"{self.name}.find_one")
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document):
        self.calls.append(f"{self.name}.insert_one")
        # Like the driver, mutate the given dict to carry the new _id
        document.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(document))
        return InsertOneResult(document["_id"], True)

    async def update_one(self, query, update):
        self.calls.append(f"{self.name}.update_one")
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(copy.deepcopy(update["$set"]))
                return UpdateResult({"n": 1, "nModified": 1}, True)
        return UpdateResult({"n": 0, "nModified": 0}, True)

    async def delete_one(self, query):
        self.calls.append(f"{self.name}.delete_one")
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return DeleteResult({"n": 1}, True)
        return DeleteResult({"n": 0}, True)

    async def count_documents(self, query, limit=None):
        self.calls.append(f"{self.name}.count_documents")
        count = sum(1 for doc in self.docs if _matches(doc, query))
        return min(count, limit) if limit else count


class FakeDatabase:
    def __init__(self):
        self.calls: List[str] = []
        self._collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name, self.calls)
        return self._collections[name]

    async def command(self, name):
        self.calls.append(f"command.{name}")
        return {"ok": 1.0}


class BrokenCursor:
    async def to_list(self, length=None):
        raise ServerSelectionTimeoutError("no servers available")


class BrokenCollection:
    """Every operation fails the way an unreachable cluster does."""

    def find(self, query=None):
        return BrokenCursor()

    async def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")

    find_one = insert_one = update_one = delete_one = count_documents = _fail


class BrokenDatabase:
    def __getitem__(self, name: str) -> BrokenCollection:
        return BrokenCollection()

    async def command(self, name):
        raise ServerSelectionTimeoutError("no servers available")


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def app(settings, fake_db):
    application = create_app(settings)
    application.state.db = fake_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def broken_client(settings):
    application = create_app(settings)
    application.state.db = BrokenDatabase()
    return TestClient(application)


@pytest.fixture
def disconnected_client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def movies(fake_db, settings):
    return fake_db[settings.MOVIE_COLLECTION]


@pytest.fixture
def favorites(fake_db, settings):
    return fake_db[settings.FAVORITES_COLLECTION]
