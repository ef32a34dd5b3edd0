"""Data models for the rule file."""

from dataclasses import dataclass
from typing import Union

from rodbot.models.event import AuthorAssociation


@dataclass(frozen=True)
class Not:
    """Negates a single condition."""

    condition: "Condition"

    def __str__(self) -> str:
        return f"not({self.condition})"


@dataclass(frozen=True)
class And:
    """Holds if every condition holds. An empty list never holds."""

    conditions: tuple["Condition", ...]

    def __str__(self) -> str:
        return f"and({', '.join(str(c) for c in self.conditions)})"


@dataclass(frozen=True)
class Or:
    """Holds if any condition holds. An empty list never holds."""

    conditions: tuple["Condition", ...]

    def __str__(self) -> str:
        return f"or({', '.join(str(c) for c in self.conditions)})"


@dataclass(frozen=True)
class IsPr:
    """Holds if the comment was made on a pull request."""

    def __str__(self) -> str:
        return "is_pr"


@dataclass(frozen=True)
class UserIs:
    """Holds if the comment author's association is one of ``associations``."""

    associations: tuple[AuthorAssociation, ...]

    def __str__(self) -> str:
        return f"user_is({', '.join(a.value for a in self.associations)})"


@dataclass(frozen=True)
class UserIn:
    """Holds if the comment author's login is one of ``logins``."""

    logins: tuple[str, ...]

    def __str__(self) -> str:
        return f"user_in({', '.join(self.logins)})"


@dataclass(frozen=True)
class Command:
    """Holds if the first line of the comment starts with ``/<name>``."""

    name: str

    def __str__(self) -> str:
        return f"command(/{self.name})"


Condition = Union[Not, And, Or, IsPr, UserIs, UserIn, Command]


@dataclass(frozen=True)
class Run:
    """Render ``template`` and run it as a shell command."""

    template: str

    def __str__(self) -> str:
        first_line = self.template.strip().splitlines()[0] if self.template.strip() else ""
        return f"run({first_line})"


Step = Run


@dataclass(frozen=True)
class IssueCommentRule:
    """A rule block for ``issue_comment`` events."""

    conditions: tuple[Condition, ...]
    steps: tuple[Step, ...]


@dataclass(frozen=True)
class RuleFile:
    """Parsed rule file: rule blocks per trigger kind."""

    issue_comment: tuple[IssueCommentRule, ...] = ()

    @property
    def rule_count(self) -> int:
        """Total number of rule blocks."""
        return len(self.issue_comment)
