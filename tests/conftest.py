import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from rodbot.config import BotSettings, get_settings, set_settings
from rodbot.models.event import IssueCommentEvent

fixture_issue_comment = Path(__file__).parent / "fixtures" / "issue_comment.json"


def load_fixture(path: Path) -> dict[str, Any]:
    """Load a JSON fixture file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def payload() -> dict[str, Any]:
    """Raw issue_comment payload (a fresh copy per test)."""
    return load_fixture(fixture_issue_comment)


@pytest.fixture
def make_payload(payload: dict[str, Any]) -> Callable[..., dict[str, Any]]:
    """Factory for raw payloads with the fields rules look at overridden."""

    def _make(
        body: str = "/test\n",
        association: str = "OWNER",
        login: str = "octocat",
        is_pr: bool = True,
    ) -> dict[str, Any]:
        data = copy.deepcopy(payload)
        data["comment"]["body"] = body
        data["comment"]["author_association"] = association
        data["comment"]["user"]["login"] = login
        if not is_pr:
            del data["issue"]["pull_request"]
        return data

    return _make


@pytest.fixture
def make_event(make_payload: Callable[..., dict[str, Any]]) -> Callable[..., IssueCommentEvent]:
    """Factory for parsed issue comment events."""

    def _make(**kwargs: Any) -> IssueCommentEvent:
        return IssueCommentEvent.model_validate(make_payload(**kwargs))

    return _make


@pytest.fixture
def event_file(tmp_path: Path, payload: dict[str, Any]) -> Path:
    """Write the issue_comment payload to a file."""
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def rules_file(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing a rule file with the given YAML content."""

    def _write(content: str) -> Path:
        path = tmp_path / "rodbot.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Run each test with settings built from a clean environment."""
    for name in (
        "GITHUB_EVENT_NAME",
        "GITHUB_EVENT_PATH",
        "RODBOT_CONFIG",
        "RODBOT_SHELL",
        "RODBOT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    original_settings = get_settings()
    set_settings(BotSettings())

    yield

    set_settings(original_settings)
