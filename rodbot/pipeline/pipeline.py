"""Top-level run orchestration.

Load event → Load rules → For each rule block: evaluate conditions → Run steps
"""

import logging
from typing import Any

from rodbot.config import get_settings
from rodbot.errors import EventSourceError
from rodbot.models.event import Event, IssueCommentEvent
from rodbot.pipeline.event_source import build_context, check_event_name, load_raw_payload, parse_event
from rodbot.pipeline.steps import run_in_order, run_steps
from rodbot.rules import IssueCommentRule, RuleFile, evaluate_all, load_rule_file

logger = logging.getLogger(__name__)


def _run_issue_comment_rules(
    rules: tuple[IssueCommentRule, ...], event: IssueCommentEvent, context: Any
) -> int:
    """Run every matching issue comment rule block.

    Returns:
        Number of rule blocks whose steps ran
    """
    matched = 0

    def run_block(index: int, rule: IssueCommentRule) -> None:
        nonlocal matched
        if not evaluate_all(rule.conditions, event):
            logger.debug("Rule block %d: conditions rejected, skipping", index + 1)
            return
        logger.info("Rule block %d: conditions matched, running %d step(s)", index + 1, len(rule.steps))
        run_steps(rule.steps, context)
        matched += 1

    run_in_order(rules, run_block)
    return matched


def run_rules(event: Event, rule_file: RuleFile, context: Any) -> int:
    """
    Run the rule blocks configured for the event's kind.

    Args:
        event: The parsed event
        rule_file: The parsed rule file
        context: Template context for step commands

    Returns:
        Number of rule blocks whose steps ran

    Raises:
        EventSourceError: If the event kind is not supported
        TemplateError: If a step's template cannot be rendered
        StepExecutionError: If a step's command fails
    """
    if not isinstance(event, IssueCommentEvent):
        raise EventSourceError(f"Unsupported event: {type(event).__name__}")

    if not rule_file.issue_comment:
        logger.info("No issue_comment rules configured, nothing to do")
        return 0

    matched = _run_issue_comment_rules(rule_file.issue_comment, event, context)
    logger.info("%d of %d rule block(s) matched", matched, len(rule_file.issue_comment))
    return matched


def _log_rule_file(rule_file: RuleFile) -> None:
    """Log the parsed rule file for debugging."""
    for index, rule in enumerate(rule_file.issue_comment):
        logger.debug(
            "  issue_comment[%d]: if=[%s] steps=[%s]",
            index,
            ", ".join(str(c) for c in rule.conditions),
            ", ".join(str(s) for s in rule.steps),
        )


def run_bot() -> int:
    """Load the event and the rule file, then run the matching rules.

    Uses the global settings, see ``rodbot.config.set_settings``.

    Returns:
        Number of rule blocks whose steps ran
    """
    settings = get_settings()
    github = settings.github

    event_name = check_event_name(github.event_name)
    payload = load_raw_payload(github.event_path)
    event = parse_event(event_name, payload)
    logger.debug("Event payload: %r", event)

    rule_file = load_rule_file(settings.config)
    _log_rule_file(rule_file)

    context = build_context(payload)
    return run_rules(event, rule_file, context)
