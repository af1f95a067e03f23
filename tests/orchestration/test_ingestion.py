"""
Unit Tests for RepositoryIngestor

MindsDB is replaced by FakeMindsDB behind httpx.MockTransport, and sleeps are
recorded instead of waited.
"""

import asyncio

import httpx
import pytest

from conftest import FakeMindsDB
from app.exceptions import ConfigurationError, ProvisioningError
from app.models.repository import parse_repository
from app.services.ingestion import RepositoryIngestor

REPOSITORY = parse_repository("octo-org/Hello-World")

EXPECTED_DROPS = [
    "DROP AGENT agent_octo_org_hello_world;",
    "DROP KNOWLEDGE_BASE kb_octo_org_hello_world;",
    "DROP DATABASE github_octo_org_hello_world;",
]


def _ingest(settings, fake, sleep):
    ingestor = RepositoryIngestor(settings=settings, transport=fake.transport, sleep=sleep)
    return asyncio.run(ingestor.ingest(REPOSITORY))


def test_ingest_success_runs_steps_in_order(settings, sleep):
    fake = FakeMindsDB()
    result = _ingest(settings, fake, sleep)

    assert result.kb_name == "kb_octo_org_hello_world"
    assert result.github_db == "github_octo_org_hello_world"
    assert result.agent_name == "agent_octo_org_hello_world"
    assert result.already_provisioned is False

    calls = [(method, path) for method, path, _ in fake.requests]
    assert calls == [
        ("GET", "/api/projects/mindsdb/agents/agent_octo_org_hello_world"),
        ("POST", "/api/sql/query"),
        ("GET", "/api/databases/github_octo_org_hello_world"),
        ("POST", "/api/projects/mindsdb/knowledge_bases"),
        ("PUT", "/api/projects/mindsdb/knowledge_bases/kb_octo_org_hello_world"),
        ("POST", "/api/projects/mindsdb/agents"),
    ]
    # Database reported ready at once, so only the knowledge base delay remains
    assert sleep.delays == [3.0]
    assert fake.drops == []


def test_ingest_request_bodies(settings, sleep):
    fake = FakeMindsDB()
    _ingest(settings, fake, sleep)

    create_db = fake.sql[0]
    assert create_db.startswith("CREATE DATABASE github_octo_org_hello_world WITH ENGINE='github'")
    assert '"repository": "octo-org/Hello-World"' in create_db
    assert "token" not in create_db

    bodies = {(method, path): body for method, path, body in fake.requests}
    assert bodies[("POST", "/api/projects/mindsdb/knowledge_bases")] == {
        "knowledge_base": {"name": "kb_octo_org_hello_world"}
    }
    assert bodies[
        ("PUT", "/api/projects/mindsdb/knowledge_bases/kb_octo_org_hello_world")
    ] == {
        "knowledge_base": {
            "urls": ["https://github.com/octo-org/Hello-World"],
            "crawl_depth": 2,
        }
    }

    agent = bodies[("POST", "/api/projects/mindsdb/agents")]["agent"]
    assert agent["name"] == "agent_octo_org_hello_world"
    assert agent["model"] == {
        "provider": "openai",
        "model_name": "gpt-4.1",
        "api_key": "sk-test",
    }
    assert agent["data"]["knowledge_bases"] == ["mindsdb.kb_octo_org_hello_world"]
    assert len(agent["data"]["tables"]) == 9
    assert "github_octo_org_hello_world.pull_requests" in agent["data"]["tables"]
    for resource in ["mindsdb.kb_octo_org_hello_world", *agent["data"]["tables"]]:
        assert resource in agent["prompt_template"]


def test_ingest_passes_github_token(settings, sleep):
    settings.github_token = "ghp_secret"
    fake = FakeMindsDB()
    _ingest(settings, fake, sleep)

    assert '"token": "ghp_secret"' in fake.sql[0]


def test_ingest_requires_openai_key(settings, sleep):
    """Missing credential fails before any outbound call."""
    settings.openai_api_key = ""
    fake = FakeMindsDB()

    with pytest.raises(ConfigurationError) as exc_info:
        _ingest(settings, fake, sleep)

    assert "OPENAI_API_KEY" in exc_info.value.message
    assert fake.requests == []


def test_ingest_short_circuits_when_agent_exists(settings, sleep):
    fake = FakeMindsDB(agent_exists=True)
    result = _ingest(settings, fake, sleep)

    assert result.already_provisioned is True
    assert result.agent_name == "agent_octo_org_hello_world"
    assert len(fake.requests) == 1
    assert sleep.delays == []


def test_ingest_skips_agent_check_when_disabled(settings, sleep):
    settings.check_existing_agent = False
    fake = FakeMindsDB(agent_exists=True)
    result = _ingest(settings, fake, sleep)

    assert result.already_provisioned is False
    assert fake.requests[0][0:2] == ("POST", "/api/sql/query")


def test_ingest_treats_already_exists_as_success(settings, sleep):
    fake = FakeMindsDB(already_exists={"database", "knowledge_base", "agent"})
    result = _ingest(settings, fake, sleep)

    assert result.agent_name == "agent_octo_org_hello_world"
    assert fake.drops == []


@pytest.mark.parametrize(
    "step, message",
    [
        ("database", "Failed to create GitHub database"),
        ("knowledge_base", "Failed to create knowledge base"),
        ("insert", "Failed to insert data into knowledge base"),
        ("agent", "Failed to create agent"),
    ],
)
def test_ingest_failure_cleans_up_once_per_resource(settings, sleep, step, message):
    fake = FakeMindsDB(fail_on={step})

    with pytest.raises(ProvisioningError) as exc_info:
        _ingest(settings, fake, sleep)

    assert exc_info.value.message.startswith(message)
    assert f"{step} exploded" in exc_info.value.message
    assert fake.drops == EXPECTED_DROPS


def test_ingest_cleanup_errors_do_not_mask_original(settings, sleep):
    fake = FakeMindsDB(fail_on={"agent", "drop"})

    with pytest.raises(ProvisioningError) as exc_info:
        _ingest(settings, fake, sleep)

    assert exc_info.value.step == "create agent"
    assert fake.drops == EXPECTED_DROPS


def test_ingest_insert_already_exists_is_a_failure(settings, sleep):
    """Only create steps accept existing resources."""
    fake = FakeMindsDB(already_exists={"insert"})

    with pytest.raises(ProvisioningError):
        _ingest(settings, fake, sleep)

    assert fake.drops == EXPECTED_DROPS


def test_ingest_polls_database_until_bound(settings, sleep):
    """Database never reported ready: poll for at most the settle time, then continue."""
    fake = FakeMindsDB(database_ready=False)
    result = _ingest(settings, fake, sleep)

    polls = [path for _, path, _ in fake.requests if path.startswith("/api/databases/")]
    assert len(polls) == 4
    assert sleep.delays == [0.5, 0.5, 0.5, 0.5, 3.0]
    assert result.agent_name == "agent_octo_org_hello_world"


def test_ingest_fixed_delay_without_polling(settings, sleep):
    settings.readiness_poll_interval = 0
    fake = FakeMindsDB()
    _ingest(settings, fake, sleep)

    assert sleep.delays == [2.0, 3.0]
    assert not any(path.startswith("/api/databases/") for _, path, _ in fake.requests)


def test_ingest_transport_error_is_provisioning_error(settings, sleep):
    def handler(request):
        if request.url.path == "/api/sql/query" and b"CREATE" in request.content:
            raise httpx.ConnectError("connection refused")
        return FakeMindsDB()(request)

    ingestor = RepositoryIngestor(
        settings=settings, transport=httpx.MockTransport(handler), sleep=sleep
    )

    with pytest.raises(ProvisioningError) as exc_info:
        asyncio.run(ingestor.ingest(REPOSITORY))

    assert exc_info.value.step == "create GitHub database"
    assert "connection refused" in exc_info.value.message
