"""Rule file models, parsing and condition evaluation."""

from .evaluator import evaluate, evaluate_all, is_command
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
from .parser import load_rule_file, parse_condition, parse_rule_file, parse_step

__all__ = [
    "And",
    "Command",
    "Condition",
    "IsPr",
    "IssueCommentRule",
    "Not",
    "Or",
    "RuleFile",
    "Run",
    "Step",
    "UserIn",
    "UserIs",
    "evaluate",
    "evaluate_all",
    "is_command",
    "load_rule_file",
    "parse_condition",
    "parse_rule_file",
    "parse_step",
]
