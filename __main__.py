"""Ruhe Infrastructure - Pulumi Entry Point.

Declares the ruhe backend on Azure:
- PostgreSQL single server, database and firewall rule
- Hasura GraphQL engine on a Linux App Service
- Virtual network and an Ubuntu jump-box
"""

import pulumi

from src.logger import configure_logger
from src.core.config_loader import load_stack_settings
from src.stack import build_stack, export_outputs

settings = load_stack_settings(pulumi.Config())
configure_logger(settings.debug_mode)

stack = build_stack(settings)
export_outputs(stack)
