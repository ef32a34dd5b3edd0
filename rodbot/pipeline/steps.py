"""Run the steps of a matched rule block."""

import logging
import subprocess
from typing import Any, Callable, Iterable, TypeVar

from rodbot.config import get_settings
from rodbot.errors import StepExecutionError
from rodbot.pipeline.template import render
from rodbot.rules.models import Run, Step

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_order(items: Iterable[T], action: Callable[[int, T], None]) -> int:
    """Apply ``action`` to each item in order, stopping at the first error.

    Returns:
        Number of items processed
    """
    count = 0
    for index, item in enumerate(items):
        action(index, item)
        count += 1
    return count


def shell_command(command: str, shell: str) -> list[str]:
    """Build the argument list that runs ``command`` in a strict, non-interactive shell."""
    return [shell, "--noprofile", "--norc", "-e", "-o", "pipefail", "-c", command]


def run_command(command: str, index: int = 0, shell: str | None = None) -> None:
    """
    Run a rendered command.

    Args:
        command: The command line handed to the shell
        index: Position of the step, used in error messages
        shell: Shell executable (default: from settings)

    Raises:
        StepExecutionError: If the shell cannot be started or the command exits non-zero
    """
    shell = shell or get_settings().runner.shell
    args = shell_command(command, shell)
    logger.info("Running: %s", command)

    try:
        completed = subprocess.run(args, check=False)
    except OSError as e:
        raise StepExecutionError(
            f"Step {index + 1}: failed to start '{shell}': {e}", index, command
        ) from e

    if completed.returncode != 0:
        raise StepExecutionError(
            f"Step {index + 1}: command exited with status {completed.returncode}",
            index,
            command,
            completed.returncode,
        )
    logger.info("Step %d succeeded", index + 1)


def run_step(index: int, step: Step, context: Any) -> None:
    """Render and run a single step."""
    if isinstance(step, Run):
        run_command(render(step.template, context), index)
    else:
        raise TypeError(f"Unknown step: {step!r}")


def run_steps(steps: Iterable[Step], context: Any) -> int:
    """Run steps in order, stopping at the first failure.

    Args:
        steps: Steps of a rule block
        context: Template context shared by every step

    Returns:
        Number of steps run

    Raises:
        TemplateError: If a step's template cannot be rendered
        StepExecutionError: If a step's command fails
    """
    count = run_in_order(steps, lambda index, step: run_step(index, step, context))
    logger.info("Ran %d step(s)", count)
    return count
