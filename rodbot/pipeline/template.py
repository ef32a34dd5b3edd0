"""Render ``${{ ... }}`` expressions in command templates.

Each expression is a JSONPath relative to the root of the context, so
``${{ github.event.issue.number }}`` reads ``context["github"]["event"]["issue"]["number"]``.
"""

import json
import logging
import re
from typing import Any, Iterator, Optional

from jsonpath_ng.exceptions import JSONPathError  # type: ignore[import-untyped]
from jsonpath_ng.ext import parse as parse_path  # type: ignore[import-untyped]

from rodbot.errors import AmbiguousPathError, PathCompileError, TemplateError

logger = logging.getLogger(__name__)

EXPRESSION_PATTERN = re.compile(r"\$\{\{(.*?)\}\}")


def _segments(template: str) -> Iterator[tuple[str, Optional[str]]]:
    """Split a template into (literal text, expression) pairs.

    The expression is None for trailing text after the last match.
    """
    position = 0
    for match in EXPRESSION_PATTERN.finditer(template):
        yield template[position : match.start()], match.group(1)
        position = match.end()
    yield template[position:], None


def _to_text(value: Any) -> Optional[str]:
    """Text form of a scalar JSON value, None for anything else.

    Numbers and booleans are written as JSON. Large floats keep the explicit
    exponent sign, so 1e20 renders as ``1e+20``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return None


def resolve(expression: str, context: Any) -> str:
    """Resolve a single path expression against the context.

    Args:
        expression: Path relative to the context root, e.g. ``foo.value``
        context: JSON-shaped value

    Returns:
        The matched scalar as text, or "" if nothing matched

    Raises:
        PathCompileError: If the expression is not a valid path, or one of its
            filters holds an invalid regular expression
        AmbiguousPathError: If more than one scalar matched
    """
    expression = expression.strip()
    path = f"$.{expression}"
    try:
        compiled = parse_path(path)
    except JSONPathError as e:
        logger.debug("Failed to compile: '%s' -> %s", expression, e)
        raise PathCompileError(expression, str(e)) from e

    try:
        matches = compiled.find(context)
    except (JSONPathError, re.error) as e:
        logger.debug("Failed to evaluate: '%s' -> %s", expression, e)
        raise PathCompileError(expression, str(e)) from e

    values = [text for text in (_to_text(match.value) for match in matches) if text is not None]
    logger.debug("%s (%s) => %r", expression, path, values)

    if not values:
        return ""
    if len(values) == 1:
        return values[0]
    raise AmbiguousPathError(expression, values)


def render(template: str, context: Any) -> str:
    """Substitute every ``${{ ... }}`` expression in ``template``.

    All expressions are evaluated even after one fails, so the error reports
    every problem in the template at once.

    Raises:
        TemplateError: The single failing expression's error, or an aggregate
            listing every failure
    """
    parts: list[str] = []
    errors: list[TemplateError] = []

    for literal, expression in _segments(template):
        parts.append(literal)
        if expression is None:
            continue
        try:
            parts.append(resolve(expression, context))
        except TemplateError as e:
            errors.append(e)

    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise TemplateError(
            f"Failed with multiple errors: {'; '.join(str(e) for e in errors)}", errors
        )
    return "".join(parts)
