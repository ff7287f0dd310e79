"""
Core configuration and error types for the ruhe infrastructure program.

Exports:
    - StackSettings: Parsed stack configuration
    - load_stack_settings: Build StackSettings from ``pulumi.Config``
    - DeploymentError, ConfigurationError, PulumiError: Exception hierarchy
"""

from .context import StackSettings
from .config_loader import load_stack_settings
from .exceptions import (
    DeploymentError,
    ConfigurationError,
    PulumiError,
)

__all__ = [
    "StackSettings",
    "load_stack_settings",
    "DeploymentError",
    "ConfigurationError",
    "PulumiError",
]
