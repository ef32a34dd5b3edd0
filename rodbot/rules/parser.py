"""Parser for the YAML rule file."""

import logging
from pathlib import Path
from typing import Any, Callable

import yaml  # type: ignore[import-untyped]

from rodbot.errors import RuleFileError
from rodbot.models.event import AuthorAssociation

from .models import (
    And,
    Command,
    Condition,
    IsPr,
    IssueCommentRule,
    Not,
    Or,
    RuleFile,
    Run,
    Step,
    UserIn,
    UserIs,
)

logger = logging.getLogger(__name__)

SUPPORTED_TRIGGERS = ("issue_comment",)


def _expect_list(value: Any, where: str) -> list[Any]:
    """Check that a value is a list."""
    if not isinstance(value, list):
        raise RuleFileError(f"{where}: expected a list, got {type(value).__name__}")
    return value


def _expect_string(value: Any, where: str) -> str:
    """Check that a value is a string."""
    if not isinstance(value, str):
        raise RuleFileError(f"{where}: expected a string, got {type(value).__name__}")
    return value


def _parse_association(value: Any, where: str) -> AuthorAssociation:
    """Parse an author association name (case-insensitive)."""
    name = _expect_string(value, where)
    try:
        return AuthorAssociation(name.upper())
    except ValueError:
        valid = [a.value for a in AuthorAssociation]
        raise RuleFileError(
            f"{where}: invalid author association '{name}'. Valid associations: {', '.join(valid)}"
        )


def _parse_not(value: Any, where: str) -> Condition:
    return Not(parse_condition(value, f"{where}.not"))


def _parse_and(value: Any, where: str) -> Condition:
    return And(parse_conditions(value, f"{where}.and"))


def _parse_or(value: Any, where: str) -> Condition:
    return Or(parse_conditions(value, f"{where}.or"))


def _parse_is_pr(value: Any, where: str) -> Condition:
    if value is not None:
        raise RuleFileError(f"{where}: 'is_pr' takes no argument")
    return IsPr()


def _parse_user_is(value: Any, where: str) -> Condition:
    items = _expect_list(value, f"{where}.user_is")
    return UserIs(
        tuple(_parse_association(item, f"{where}.user_is[{i}]") for i, item in enumerate(items))
    )


def _parse_user_in(value: Any, where: str) -> Condition:
    items = _expect_list(value, f"{where}.user_in")
    return UserIn(
        tuple(_expect_string(item, f"{where}.user_in[{i}]") for i, item in enumerate(items))
    )


def _parse_command(value: Any, where: str) -> Condition:
    return Command(_expect_string(value, f"{where}.command"))


_CONDITION_PARSERS: dict[str, Callable[[Any, str], Condition]] = {
    "not": _parse_not,
    "and": _parse_and,
    "or": _parse_or,
    "is_pr": _parse_is_pr,
    "user_is": _parse_user_is,
    "user_in": _parse_user_in,
    "command": _parse_command,
}


def _split_tagged(value: Any, where: str, kind: str) -> tuple[str, Any]:
    """Split an externally tagged value into (tag, argument).

    A bare string is a tag without argument, a single-key mapping is a tag
    with its argument.
    """
    if isinstance(value, str):
        return value, None
    if isinstance(value, dict) and len(value) == 1:
        ((tag, argument),) = value.items()
        return str(tag), argument
    raise RuleFileError(
        f"{where}: expected a {kind} name or a single-key mapping, got {value!r}"
    )


def parse_condition(value: Any, where: str = "condition") -> Condition:
    """Parse a single condition.

    Args:
        value: Deserialized YAML value, e.g. ``"is_pr"`` or ``{"command": "test"}``
        where: Position of the value, used in error messages

    Returns:
        The parsed condition tree

    Raises:
        RuleFileError: If the condition is unknown or malformed
    """
    tag, argument = _split_tagged(value, where, "condition")
    parser = _CONDITION_PARSERS.get(tag)
    if parser is None:
        raise RuleFileError(
            f"{where}: invalid condition '{tag}'. Valid conditions: {', '.join(_CONDITION_PARSERS)}"
        )
    return parser(argument, where)


def parse_conditions(value: Any, where: str) -> tuple[Condition, ...]:
    """Parse a list of conditions."""
    items = _expect_list(value, where)
    return tuple(parse_condition(item, f"{where}[{i}]") for i, item in enumerate(items))


def parse_step(value: Any, where: str = "step") -> Step:
    """Parse a single step."""
    tag, argument = _split_tagged(value, where, "step")
    if tag != "run":
        raise RuleFileError(f"{where}: invalid step '{tag}'. Valid steps: run")
    return Run(_expect_string(argument, f"{where}.run"))


def _parse_issue_comment_rule(value: Any, where: str) -> IssueCommentRule:
    """Parse one ``issue_comment`` rule block."""
    if not isinstance(value, dict):
        raise RuleFileError(f"{where}: expected a mapping with 'if' and 'steps'")

    for required in ("if", "steps"):
        if required not in value:
            raise RuleFileError(f"{where}: missing required '{required}' field")

    unknown = set(value) - {"if", "steps"}
    if unknown:
        raise RuleFileError(f"{where}: unknown field(s): {', '.join(sorted(map(str, unknown)))}")

    conditions = parse_conditions(value["if"], f"{where}.if")
    if not conditions:
        logger.warning("%s.if is empty, this rule block will never run", where)

    steps = tuple(
        parse_step(step, f"{where}.steps[{i}]")
        for i, step in enumerate(_expect_list(value["steps"], f"{where}.steps"))
    )
    return IssueCommentRule(conditions=conditions, steps=steps)


def parse_rule_file(data: Any) -> RuleFile:
    """
    Parse a deserialized rule file.

    Args:
        data: The YAML document as loaded by ``yaml.safe_load``

    Returns:
        The parsed RuleFile

    Raises:
        RuleFileError: If the document structure is invalid
    """
    if not isinstance(data, dict):
        raise RuleFileError("Rule file must contain a mapping")

    # YAML 1.1 reads a bare 'on' key as boolean True
    triggers = data.get("on", data.get(True))
    if triggers is None:
        raise RuleFileError("Rule file missing 'on' key")
    if not isinstance(triggers, dict):
        raise RuleFileError("'on' must be a mapping of trigger kind to rule blocks")

    for trigger in triggers:
        if trigger not in SUPPORTED_TRIGGERS:
            logger.warning("Ignoring unsupported trigger '%s'", trigger)

    blocks = triggers.get("issue_comment")
    if blocks is None:
        return RuleFile()

    where = "on.issue_comment"
    return RuleFile(
        issue_comment=tuple(
            _parse_issue_comment_rule(block, f"{where}[{i}]")
            for i, block in enumerate(_expect_list(blocks, where))
        )
    )


def _load_yaml_file(file_path: Path) -> Any:
    """Load a YAML file."""
    if not file_path.exists():
        raise RuleFileError(f"Rule file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as e:
        raise RuleFileError(f"Failed to read rule file {file_path}: {e}") from e
    except yaml.YAMLError as e:
        raise RuleFileError(f"Invalid YAML in {file_path}: {e}") from e


def load_rule_file(file_path: Path | str) -> RuleFile:
    """
    Load and parse a YAML rule file.

    Args:
        file_path: Path to the rule file

    Returns:
        The parsed RuleFile

    Raises:
        RuleFileError: If the file is missing, unreadable or invalid
    """
    path = Path(file_path)
    logger.info("Loading rules from file: %s", path)
    rule_file = parse_rule_file(_load_yaml_file(path))
    logger.info("Loaded %d rule block(s) from %s", rule_file.rule_count, path)
    return rule_file
