"""
Stack settings passed explicitly to every resource factory.

Values are read once from the Pulumi stack configuration by
``core.config_loader.load_stack_settings`` and then handed down, so layer
functions never call ``pulumi.Config()`` themselves.
"""

from dataclasses import dataclass
from typing import Union

import pulumi

import src.constants as CONSTANTS


@dataclass
class StackSettings:
    """
    Parsed stack configuration.

    Attributes:
        resource_group: Name of the Azure resource group to create
        pg_user: PostgreSQL admin login, also the jump-box admin user
        pg_password: PostgreSQL admin password (secret Output in a real run)
        location: Azure region for every resource
        db_name: Name of the application database
        mode: Logging mode ("DEBUG" enables debug output)
    """

    resource_group: str
    pg_user: str
    pg_password: Union[str, pulumi.Output]
    location: str = CONSTANTS.DEFAULT_LOCATION
    db_name: str = CONSTANTS.DEFAULT_DB_NAME
    mode: str = CONSTANTS.DEFAULT_MODE

    @property
    def debug_mode(self) -> bool:
        return self.mode.upper() == "DEBUG"

    def secret_password(self) -> pulumi.Output:
        """Password as a secret Output, whether it was loaded as one or given as a plain str."""
        return pulumi.Output.secret(self.pg_password)
