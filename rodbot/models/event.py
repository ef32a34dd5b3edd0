"""Models for GitHub event payloads.

Only the fields the rule evaluator reads are modelled. Anything else in the
payload is still reachable from command templates through the raw JSON
context.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthorAssociation(str, Enum):
    """Relationship of a comment author to the repository."""

    COLLABORATOR = "COLLABORATOR"
    CONTRIBUTOR = "CONTRIBUTOR"
    FIRST_TIMER = "FIRST_TIMER"
    FIRST_TIME_CONTRIBUTOR = "FIRST_TIME_CONTRIBUTOR"
    MANNEQUIN = "MANNEQUIN"
    MEMBER = "MEMBER"
    NONE = "NONE"
    OWNER = "OWNER"


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True)


class User(_Payload):
    login: str = Field(description="GitHub user handle")


class Sender(_Payload):
    login: str = Field(description="GitHub user handle of the event sender")


class Label(_Payload):
    color: str
    default: bool
    description: Optional[str] = None
    id: int
    name: str
    node_id: str
    url: str


class PullRequest(_Payload):
    """Marker present on issues that are pull requests."""

    diff_url: str
    html_url: str
    patch_url: str
    url: str


class Comment(_Payload):
    author_association: AuthorAssociation
    body: str
    id: int
    user: User


class Issue(_Payload):
    author_association: AuthorAssociation
    body: Optional[str] = None
    comments: int = 0
    id: int
    labels: list[Label] = Field(default_factory=list)
    locked: bool
    number: int
    pull_request: Optional[PullRequest] = None
    url: str

    @property
    def is_pr(self) -> bool:
        """True if this issue is a pull request."""
        return self.pull_request is not None


class IssueCommentEvent(_Payload):
    """Payload of an ``issue_comment`` event."""

    action: str
    sender: Sender
    comment: Comment
    issue: Issue


# Supported event kinds. Extend this union when adding a new trigger.
Event = IssueCommentEvent
