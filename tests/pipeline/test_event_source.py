"""Tests for loading the event payload."""

import json

import pytest

from rodbot.errors import EventSourceError
from rodbot.models.event import AuthorAssociation, IssueCommentEvent
from rodbot.pipeline.event_source import (
    build_context,
    check_event_name,
    load_event,
    load_raw_payload,
    parse_event,
)


class TestLoadEvent:
    """Tests for load_event function."""

    def test_load_issue_comment(self, event_file):
        """Test loading an issue_comment event."""
        event = load_event("issue_comment", event_file)

        assert isinstance(event, IssueCommentEvent)
        assert event.action == "created"
        assert event.sender.login == "octocat"
        assert event.comment.author_association == AuthorAssociation.OWNER
        assert event.comment.body == "/test\n"
        assert event.issue.number == 42
        assert event.issue.is_pr
        assert [label.name for label in event.issue.labels] == ["bug", "area/core"]

    def test_load_plain_issue(self, tmp_path, make_payload):
        """Test that a comment on a plain issue has no pull request marker."""
        path = tmp_path / "event.json"
        path.write_text(json.dumps(make_payload(is_pr=False)), encoding="utf-8")

        event = load_event("issue_comment", path)
        assert event.issue.pull_request is None
        assert not event.issue.is_pr

    def test_unsupported_event(self, tmp_path):
        """Test that an unsupported event fails before the payload is read."""
        with pytest.raises(EventSourceError, match="Unknown or unsupported event type: push"):
            load_event("push", tmp_path / "does-not-exist.json")

    def test_missing_event_name(self, event_file):
        """Test that a missing event name raises EventSourceError."""
        with pytest.raises(EventSourceError, match="Missing GITHUB_EVENT_NAME"):
            load_event(None, event_file)

    def test_missing_event_path(self):
        """Test that a missing event path raises EventSourceError."""
        with pytest.raises(EventSourceError, match="Missing GITHUB_EVENT_PATH"):
            load_event("issue_comment", None)

    def test_missing_file(self, tmp_path):
        """Test that a missing payload file raises EventSourceError."""
        with pytest.raises(EventSourceError, match="Failed to read event payload"):
            load_event("issue_comment", tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Test that invalid JSON raises EventSourceError."""
        path = tmp_path / "event.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(EventSourceError, match="Invalid JSON"):
            load_event("issue_comment", path)

    def test_invalid_payload(self, tmp_path, payload):
        """Test that a payload missing required fields raises EventSourceError."""
        del payload["comment"]
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(EventSourceError, match="Failed to parse event payload"):
            load_event("issue_comment", path)

    def test_unknown_association(self, tmp_path, payload):
        """Test that an unknown author association raises EventSourceError."""
        payload["comment"]["author_association"] = "ADMIN"
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(EventSourceError):
            load_event("issue_comment", path)


class TestCheckEventName:
    """Tests for check_event_name and parse_event functions."""

    def test_supported_name(self):
        """Test that a supported name is returned as is."""
        assert check_event_name("issue_comment") == "issue_comment"

    @pytest.mark.parametrize("name", [None, ""])
    def test_missing_name(self, name):
        """Test that an empty name raises EventSourceError."""
        with pytest.raises(EventSourceError, match="Missing GITHUB_EVENT_NAME"):
            check_event_name(name)

    def test_unsupported_name(self):
        """Test that an unsupported name raises EventSourceError."""
        with pytest.raises(EventSourceError, match="Unknown or unsupported event type: push"):
            check_event_name("push")

    def test_parse_loaded_payload(self, payload):
        """Test parsing a payload that was already read."""
        event = parse_event("issue_comment", payload)
        assert event.issue.number == 42


class TestContext:
    """Tests for the template context."""

    def test_build_context(self, event_file, payload):
        """Test the raw payload is nested under github.event."""
        context = build_context(load_raw_payload(event_file))
        assert context == {"github": {"event": payload}}
        assert context["github"]["event"]["repository"]["full_name"] == "octo-org/octo-repo"
