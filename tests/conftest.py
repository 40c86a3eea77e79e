import pytest
from fastapi.testclient import TestClient

from assistant_tools.core.config import Settings
from assistant_tools.db.base import Base
from assistant_tools.db.session import build_engine, build_session_factory
from assistant_tools.forwarder.client import QuestionForwarder
from assistant_tools.main import create_app
from assistant_tools.reminders import models  # noqa: F401  registers the reminders table
from assistant_tools.reminders.store import ReminderStore

TEST_PERPLEXITY_URL = "https://perplexity.test/chat/completions"


@pytest.fixture
def session_factory():
    # In-memory SQLite on a StaticPool: one connection shared by every session
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> ReminderStore:
    return ReminderStore(session_factory)


@pytest.fixture
def forwarder() -> QuestionForwarder:
    return QuestionForwarder(
        api_key="test-key",
        url=TEST_PERPLEXITY_URL,
        model="test-model",
        system_prompt="Be precise and concise.",
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(PERPLEXITY_API_KEY="test-key", METRICS_ENABLED=False)


@pytest.fixture
def client(test_settings, store, forwarder):
    app = create_app(test_settings, store=store, forwarder=forwarder)
    with TestClient(app) as test_client:
        yield test_client


def tool_call(call_id, name, arguments):
    return {"id": call_id, "function": {"name": name, "arguments": arguments}}


def envelope(*calls):
    return {"message": {"toolCalls": list(calls)}}
