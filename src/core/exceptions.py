"""
Custom exceptions for the ruhe infrastructure program.

Exception Hierarchy:
    DeploymentError (base)
    ├── ConfigurationError - Invalid or missing stack configuration
    └── PulumiError - A Pulumi engine command failed
"""

from typing import Optional


class DeploymentError(Exception):
    """
    Base exception for all deployment-related errors.

    Attributes:
        message: Human-readable error description
        resource: Optional logical resource name the error relates to
    """

    def __init__(self, message: str, resource: Optional[str] = None):
        self.message = message
        self.resource = resource

        if resource:
            full_message = f"{message} [resource={resource}]"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(DeploymentError):
    """
    Raised when stack configuration is invalid or missing required keys.

    This typically occurs when:
    - ``pulumi config set resourceGroup ...`` was never run for the stack
    - A value fails Azure naming rules (e.g. a reserved admin login)

    Example:
        >>> load_stack_settings(pulumi.Config())
        ConfigurationError: Missing required configuration key 'pgpass'
    """

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class PulumiError(DeploymentError):
    """Raised when a Pulumi engine command (preview, up, destroy, ...) fails."""

    def __init__(self, command: str, return_code: int, stderr: str):
        self.command = command
        self.return_code = return_code
        self.stderr = stderr
        super().__init__(f"Pulumi {command} failed (exit {return_code}): {stderr}")
