"""Evaluate condition trees against an issue comment event."""

import logging
from typing import Iterable

from rodbot.models.event import IssueCommentEvent

from .models import And, Command, Condition, IsPr, Not, Or, UserIn, UserIs

logger = logging.getLogger(__name__)


def is_command(name: str, body: str) -> bool:
    """Check if the first line of ``body`` starts with ``/<name>``.

    This is a prefix match: ``/testing`` is a ``test`` command. Only a newline
    ends the first line.
    """
    if not body:
        return False
    return body.split("\n", 1)[0].strip().startswith(f"/{name}")


def _all_hold(conditions: Iterable[Condition], event: IssueCommentEvent) -> bool:
    """True if the list is non-empty and every condition holds."""
    conditions = tuple(conditions)
    return bool(conditions) and all(evaluate(c, event) for c in conditions)


def _any_holds(conditions: Iterable[Condition], event: IssueCommentEvent) -> bool:
    return any(evaluate(c, event) for c in conditions)


def _evaluate(condition: Condition, event: IssueCommentEvent) -> bool:
    if isinstance(condition, Not):
        return not evaluate(condition.condition, event)
    if isinstance(condition, And):
        return _all_hold(condition.conditions, event)
    if isinstance(condition, Or):
        return _any_holds(condition.conditions, event)
    if isinstance(condition, IsPr):
        return event.issue.is_pr
    if isinstance(condition, UserIs):
        return event.comment.author_association in condition.associations
    if isinstance(condition, UserIn):
        return event.comment.user.login in condition.logins
    if isinstance(condition, Command):
        return is_command(condition.name, event.comment.body)
    raise TypeError(f"Unknown condition: {condition!r}")


def evaluate(condition: Condition, event: IssueCommentEvent) -> bool:
    """Evaluate a condition tree against an event.

    Args:
        condition: The condition to evaluate
        event: The issue comment event

    Returns:
        True if the condition holds
    """
    result = _evaluate(condition, event)
    logger.debug("%s => %s", condition, result)
    return result


def evaluate_all(conditions: Iterable[Condition], event: IssueCommentEvent) -> bool:
    """Evaluate the top-level ``if`` list of a rule block.

    The list is combined with AND. An empty list never holds.
    """
    return _all_hold(conditions, event)
