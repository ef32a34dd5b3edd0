"""Load the event payload handed over by the GitHub Actions runner."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rodbot.errors import EventSourceError
from rodbot.models.event import Event, IssueCommentEvent

logger = logging.getLogger(__name__)

EVENT_MODELS: dict[str, type[Event]] = {
    "issue_comment": IssueCommentEvent,
}


def load_raw_payload(event_path: Path | str | None) -> Any:
    """Read the untyped JSON payload.

    Raises:
        EventSourceError: If the path is missing or the file is not valid JSON
    """
    if event_path is None:
        raise EventSourceError("Missing GITHUB_EVENT_PATH")

    path = Path(event_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise EventSourceError(f"Failed to read event payload {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise EventSourceError(f"Invalid JSON in event payload {path}: {e}") from e


def parse_event(event_name: str, payload: Any) -> Event:
    """Validate a raw payload as the model for ``event_name``."""
    model = EVENT_MODELS.get(event_name)
    if model is None:
        raise EventSourceError(f"Unknown or unsupported event type: {event_name}")

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise EventSourceError(f"Failed to parse event payload: {e}") from e


def check_event_name(event_name: str | None) -> str:
    """Check that the event name is set and supported.

    Raises:
        EventSourceError: If the name is missing or has no event model
    """
    if not event_name:
        raise EventSourceError("Missing GITHUB_EVENT_NAME")
    if event_name not in EVENT_MODELS:
        raise EventSourceError(f"Unknown or unsupported event type: {event_name}")

    logger.info("Event: %s", event_name)
    return event_name


def load_event(event_name: str | None, event_path: Path | str | None) -> Event:
    """
    Load and validate the event.

    The event name is checked before the payload is read, so an unsupported
    event fails without touching the file.

    Args:
        event_name: Value of GITHUB_EVENT_NAME
        event_path: Value of GITHUB_EVENT_PATH

    Returns:
        The parsed event

    Raises:
        EventSourceError: If the event is unsupported, missing or malformed
    """
    event_name = check_event_name(event_name)
    return parse_event(event_name, load_raw_payload(event_path))


def build_context(payload: Any) -> dict[str, Any]:
    """Build the template context from the raw payload."""
    return {"github": {"event": payload}}
