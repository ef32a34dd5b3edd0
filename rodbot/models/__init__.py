"""Data models for rodbot."""

from rodbot.models.event import (
    AuthorAssociation,
    Comment,
    Event,
    Issue,
    IssueCommentEvent,
    Label,
    PullRequest,
    Sender,
    User,
)

__all__ = [
    "AuthorAssociation",
    "Comment",
    "Event",
    "Issue",
    "IssueCommentEvent",
    "Label",
    "PullRequest",
    "Sender",
    "User",
]
