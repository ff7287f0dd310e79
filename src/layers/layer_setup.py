"""
Setup Layer - Resource Group.

The resource group is the container for every other resource in the stack
and must be declared first; all later layers take it as a parent input.
"""

import logging
from typing import Optional

import pulumi
import pulumi_azure as azure

from src.core.context import StackSettings
from src.naming import RuheNaming

logger = logging.getLogger(__name__)


def create_resource_group(
    settings: StackSettings,
    naming: RuheNaming,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.core.ResourceGroup:
    """
    Declare the resource group.

    Args:
        settings: Stack settings (name and location come from here)
        naming: Resource naming helper
        opts: Extra resource options (e.g. a parent component)

    Returns:
        The ResourceGroup resource
    """
    logger.info(f"Declaring Resource Group: {settings.resource_group} in {settings.location}")

    return azure.core.ResourceGroup(
        naming.resource_group(),
        name=settings.resource_group,
        location=settings.location,
        opts=opts,
    )
