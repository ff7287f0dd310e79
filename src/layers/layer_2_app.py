"""
Layer 2 - Hasura GraphQL Engine on App Service.

Resources managed:
- Linux App Service plan (Basic B1, one worker)
- Linux web app running the ``hasura/graphql-engine`` container

The web app is configured entirely through app settings (environment
variables): the database URL from Layer 1, the admin secret, and a JWT
configuration that validates Firebase ID tokens against Google's public
key endpoint.
"""

import logging
from typing import Dict, Optional

import pulumi
import pulumi_azure as azure

import src.constants as CONSTANTS
from src.core.context import StackSettings
from src.naming import RuheNaming

logger = logging.getLogger(__name__)

# Environment variable names understood by the Hasura container
ENV_DATABASE_URL = "HASURA_GRAPHQL_DATABASE_URL"
ENV_JWT_SECRET = "HASURA_GRAPHQL_JWT_SECRET"
ENV_ADMIN_SECRET = "HASURA_GRAPHQL_ADMIN_SECRET"
ENV_ENABLE_CONSOLE = "HASURA_GRAPHQL_ENABLE_CONSOLE"
ENV_UNAUTHORIZED_ROLE = "HASURA_GRAPHQL_UNAUTHORIZED_ROLE"
ENV_WEBSITES_PORT = "WEBSITES_PORT"


def create_app_service_plan(
    settings: StackSettings,
    naming: RuheNaming,
    resource_group: azure.core.ResourceGroup,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.appservice.ServicePlan:
    logger.info(f"Declaring App Service plan ({CONSTANTS.APP_PLAN_OS_TYPE}, {CONSTANTS.APP_PLAN_SKU})")

    return azure.appservice.ServicePlan(
        naming.app_service_plan(),
        location=resource_group.location,
        resource_group_name=resource_group.name,
        os_type=CONSTANTS.APP_PLAN_OS_TYPE,
        sku_name=CONSTANTS.APP_PLAN_SKU,
        worker_count=CONSTANTS.APP_PLAN_WORKER_COUNT,
        opts=opts,
    )


def build_app_settings(
    database_url: pulumi.Input[str],
    admin_secret: pulumi.Input[str],
) -> Dict[str, pulumi.Input[str]]:
    """
    Build the Hasura environment.

    Args:
        database_url: Connection URL from ``database_url_output``
        admin_secret: Value for the Hasura admin secret (the database password)

    Returns:
        Mapping of app setting name to value; values may be Outputs
    """
    return {
        ENV_DATABASE_URL: database_url,
        ENV_JWT_SECRET: CONSTANTS.HASURA_JWT_SECRET,
        ENV_ADMIN_SECRET: admin_secret,
        ENV_ENABLE_CONSOLE: "true",
        ENV_UNAUTHORIZED_ROLE: CONSTANTS.HASURA_UNAUTHORIZED_ROLE,
        ENV_WEBSITES_PORT: CONSTANTS.WEBSITES_PORT,
    }


def create_web_app(
    settings: StackSettings,
    naming: RuheNaming,
    resource_group: azure.core.ResourceGroup,
    plan: azure.appservice.ServicePlan,
    app_settings: Dict[str, pulumi.Input[str]],
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.appservice.LinuxWebApp:
    """
    Declare the Hasura web app.

    Args:
        settings: Stack settings
        naming: Resource naming helper
        resource_group: Parent resource group
        plan: App Service plan to run on
        app_settings: Environment from ``build_app_settings``
        opts: Extra resource options

    Returns:
        The LinuxWebApp resource
    """
    logger.info(f"Declaring Hasura web app ({CONSTANTS.HASURA_IMAGE})")

    return azure.appservice.LinuxWebApp(
        naming.web_app(),
        location=resource_group.location,
        resource_group_name=resource_group.name,
        service_plan_id=plan.id,
        app_settings=app_settings,
        site_config=azure.appservice.LinuxWebAppSiteConfigArgs(
            always_on=True,
            application_stack=azure.appservice.LinuxWebAppSiteConfigApplicationStackArgs(
                docker_image_name=CONSTANTS.HASURA_IMAGE,
                docker_registry_url=CONSTANTS.DOCKER_REGISTRY_URL,
            ),
        ),
        opts=opts,
    )
