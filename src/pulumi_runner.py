"""
Pulumi Automation API wrapper.

Drives the Pulumi engine against the program in the project directory
(``Pulumi.yaml`` + ``__main__.py``), the same way an operator would run
``pulumi preview`` / ``pulumi up`` / ``pulumi destroy`` by hand.

Usage:
    from src.pulumi_runner import PulumiRunner

    runner = PulumiRunner(work_dir="/path/to/ruhe-infra", stack_name="prod")
    runner.set_config({"resourceGroup": "ruhe-prod", "pguser": "ruheadmin"})
    runner.set_config({"pgpass": "..."}, secrets={"pgpass"})
    runner.preview()
    runner.up()
    outputs = runner.outputs()
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, TypeVar

from pulumi import automation as auto

from src.core.exceptions import PulumiError

logger = logging.getLogger(__name__)

PROJECT_FILE = "Pulumi.yaml"
SECRET_MASK = "[secret]"

T = TypeVar("T")


class PulumiRunner:
    """
    Runs Pulumi engine commands for one stack of the local program.

    Attributes:
        work_dir: Directory holding ``Pulumi.yaml``
        stack_name: Name of the stack to select (created if missing)
    """

    def __init__(self, work_dir: str, stack_name: str):
        """
        Initialize the runner.

        Args:
            work_dir: Path to the Pulumi project directory
            stack_name: Stack name, e.g. "prod" or "org/ruhe-infra/prod"

        Raises:
            ValueError: If work_dir or stack_name is empty, or work_dir has no Pulumi.yaml
        """
        if not work_dir:
            raise ValueError("work_dir is required")
        if not stack_name:
            raise ValueError("stack_name is required")

        self.work_dir = Path(work_dir)
        self.stack_name = stack_name

        if not self.work_dir.exists():
            raise ValueError(f"Pulumi project directory does not exist: {work_dir}")
        if not (self.work_dir / PROJECT_FILE).exists():
            raise ValueError(f"No {PROJECT_FILE} found in {work_dir}")

        self._stack: Optional[auto.Stack] = None

    @property
    def stack(self) -> auto.Stack:
        """Select (or create) the stack lazily so constructing the runner never touches the engine."""
        if self._stack is None:
            logger.info(f"Selecting stack '{self.stack_name}' in {self.work_dir}")
            self._stack = self._run(
                "select",
                lambda: auto.create_or_select_stack(
                    stack_name=self.stack_name,
                    work_dir=str(self.work_dir),
                ),
            )
        return self._stack

    def _on_output(self, line: str) -> None:
        line = line.rstrip()
        if line:
            logger.info(line)

    def _run(self, command: str, action: Callable[[], T]) -> T:
        """
        Run an engine command, translating Automation API errors.

        Raises:
            PulumiError: If the engine reports a failure
        """
        try:
            return action()
        except auto.CommandError as e:
            stderr = getattr(e, "stderr", None) or str(e)
            return_code = getattr(e, "exit_code", None)
            if return_code is None:
                return_code = 1
            logger.error(f"Pulumi {command} failed: {stderr}")
            raise PulumiError(command, return_code, stderr) from e

    # ==========================================
    # Configuration
    # ==========================================

    def set_config(self, values: Dict[str, str], secrets: Optional[Iterable[str]] = None) -> None:
        """
        Write stack configuration values.

        Args:
            values: Mapping of config key to value (project namespace)
            secrets: Keys whose values are stored encrypted

        Raises:
            PulumiError: If writing the configuration fails
        """
        secret_keys = set(secrets or ())
        config = {
            key: auto.ConfigValue(value=value, secret=key in secret_keys)
            for key, value in values.items()
        }
        logger.info(f"Setting stack config: {', '.join(sorted(config))}")
        self._run("config", lambda: self.stack.set_all_config(config))

    def get_config(self) -> Dict[str, Any]:
        """Current stack configuration with secret values masked."""
        config = self._run("config", lambda: self.stack.get_all_config())
        return {
            key: SECRET_MASK if item.secret else item.value
            for key, item in config.items()
        }

    # ==========================================
    # Engine Commands
    # ==========================================

    def preview(self) -> Dict[str, int]:
        """
        Preview changes.

        Returns:
            Change summary, e.g. ``{"create": 12}``
        """
        logger.info("Previewing changes...")
        result = self._run("preview", lambda: self.stack.preview(on_output=self._on_output))
        summary = _summary_counts(result.change_summary)
        logger.info(f"✓ Preview complete: {summary}")
        return summary

    def up(self) -> Dict[str, int]:
        """
        Create or update all resources.

        Returns:
            Resource change counts from the update summary
        """
        logger.info("Applying stack...")
        result = self._run("up", lambda: self.stack.up(on_output=self._on_output))
        summary = _summary_counts(result.summary.resource_changes)
        logger.info(f"✓ Update complete: {summary}")
        return summary

    def refresh(self) -> Dict[str, int]:
        logger.info("Refreshing stack state...")
        result = self._run("refresh", lambda: self.stack.refresh(on_output=self._on_output))
        summary = _summary_counts(result.summary.resource_changes)
        logger.info(f"✓ Refresh complete: {summary}")
        return summary

    def destroy(self) -> Dict[str, int]:
        """
        Destroy all managed resources.

        Warning:
            Deletes the database server and everything in it.
        """
        logger.info("Destroying stack resources...")
        result = self._run("destroy", lambda: self.stack.destroy(on_output=self._on_output))
        summary = _summary_counts(result.summary.resource_changes)
        logger.info(f"✓ Destroy complete: {summary}")
        return summary

    def outputs(self, show_secrets: bool = False) -> Dict[str, Any]:
        """
        Get stack outputs.

        Args:
            show_secrets: Return secret values in plain text instead of masking them

        Returns:
            Mapping of output name to value
        """
        raw = self._run("output", lambda: self.stack.outputs())
        return {
            key: item.value if (show_secrets or not item.secret) else SECRET_MASK
            for key, item in raw.items()
        }


def _summary_counts(changes: Optional[Dict[Any, int]]) -> Dict[str, int]:
    """Normalise a change summary (keys may be OpType enums) to plain strings."""
    if not changes:
        return {}
    return {getattr(op, "value", str(op)): count for op, count in changes.items()}
