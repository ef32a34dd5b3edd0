"""Exceptions raised by rodbot.

Every error aborts the current run. The CLI catches ``RodbotError`` at the
process boundary and turns it into a non-zero exit status.
"""

from typing import Optional


class RodbotError(Exception):
    """Base class for all rodbot errors."""

    pass


class EventSourceError(RodbotError):
    """Raised when the event payload is missing, malformed or of an unsupported kind."""

    pass


class RuleFileError(RodbotError):
    """Raised when the rule file is missing, unreadable or malformed."""

    pass


class ConditionEvalError(RodbotError):
    """Raised when a condition cannot be evaluated.

    None of the current conditions can fail; this is kept for leaves that
    need to look things up outside the event.
    """

    pass


class TemplateError(RodbotError):
    """Raised when a command template cannot be rendered.

    When several expressions in one template fail, a single ``TemplateError``
    is raised with every individual failure in ``errors``.
    """

    def __init__(self, message: str, errors: Optional[list["TemplateError"]] = None):
        super().__init__(message)
        self.errors: list[TemplateError] = errors if errors is not None else [self]


class PathCompileError(TemplateError):
    """Raised when a path expression has invalid syntax."""

    def __init__(self, expression: str, reason: str):
        super().__init__(f"Invalid path expression '{expression}': {reason}")
        self.expression = expression


class AmbiguousPathError(TemplateError):
    """Raised when a path expression matches more than one value."""

    def __init__(self, expression: str, values: list[str]):
        super().__init__(f"More than one item found for '{expression}': {values!r}")
        self.expression = expression
        self.values = values


class StepExecutionError(RodbotError):
    """Raised when a step's command cannot be started or exits non-zero."""

    def __init__(self, message: str, index: int, command: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.index = index
        self.command = command
        self.returncode = returncode
