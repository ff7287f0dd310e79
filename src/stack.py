"""
Stack assembly.

Declares every layer in dependency order and exports the values operators
need after ``pulumi up``.

Usage (inside a Pulumi program):
    settings = load_stack_settings(pulumi.Config())
    stack = build_stack(settings)
    export_outputs(stack)
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import pulumi
import pulumi_azure as azure

from src.core.context import StackSettings
from src.naming import RuheNaming
from src.layers import layer_setup, layer_1_database, layer_2_app, layer_3_network

logger = logging.getLogger(__name__)


@dataclass
class RuheStack:
    """Every resource declared by ``build_stack``."""

    resource_group: azure.core.ResourceGroup
    db_server: azure.postgresql.Server
    database: azure.postgresql.Database
    firewall_rule: azure.postgresql.FirewallRule
    database_url: pulumi.Output
    app_service_plan: azure.appservice.ServicePlan
    web_app: azure.appservice.LinuxWebApp
    virtual_network: azure.network.VirtualNetwork
    subnet: azure.network.Subnet
    public_ip: azure.network.PublicIp
    network_interface: azure.network.NetworkInterface
    jumpbox: azure.compute.VirtualMachine


def build_stack(settings: StackSettings, naming: Optional[RuheNaming] = None) -> RuheStack:
    """
    Declare all resources.

    Args:
        settings: Loaded stack settings
        naming: Naming helper (defaults to the unprefixed names)

    Returns:
        RuheStack holding the declared resources
    """
    naming = naming or RuheNaming()
    logger.info(f"========== Declaring ruhe stack: {settings.resource_group} ==========")

    # Setup: Resource Group (must be first)
    rg = layer_setup.create_resource_group(settings, naming)

    # Layer 1: PostgreSQL
    server = layer_1_database.create_database_server(settings, naming, rg)
    database = layer_1_database.create_database(settings, naming, rg, server)
    firewall_rule = layer_1_database.create_firewall_rule(naming, rg, server)
    database_url = layer_1_database.database_url_output(settings, server, database)

    # Layer 2: Hasura
    plan = layer_2_app.create_app_service_plan(settings, naming, rg)
    app_settings = layer_2_app.build_app_settings(database_url, settings.secret_password())
    web_app = layer_2_app.create_web_app(settings, naming, rg, plan, app_settings)

    # Layer 3: Network & Jump-box
    vnet = layer_3_network.create_virtual_network(naming, rg)
    subnet = layer_3_network.create_subnet(naming, rg, vnet)
    public_ip = layer_3_network.create_public_ip(naming, rg)
    nic = layer_3_network.create_network_interface(naming, rg, subnet, public_ip)
    jumpbox = layer_3_network.create_jumpbox(settings, naming, rg, nic)

    logger.info("✓ All resources declared")

    return RuheStack(
        resource_group=rg,
        db_server=server,
        database=database,
        firewall_rule=firewall_rule,
        database_url=database_url,
        app_service_plan=plan,
        web_app=web_app,
        virtual_network=vnet,
        subnet=subnet,
        public_ip=public_ip,
        network_interface=nic,
        jumpbox=jumpbox,
    )


def stack_outputs(stack: RuheStack) -> Dict[str, pulumi.Output]:
    return {
        "resource_group_name": stack.resource_group.name,
        "db_server_name": stack.db_server.name,
        "db_server_fqdn": stack.db_server.fqdn,
        "db_name": stack.database.name,
        "app_service_name": stack.web_app.name,
        "app_service_hostname": stack.web_app.default_hostname,
        "jumpbox_public_ip": stack.public_ip.ip_address,
        "jumpbox_id": stack.jumpbox.id,
        "database_url": stack.database_url,
    }


def export_outputs(stack: RuheStack) -> Dict[str, pulumi.Output]:
    """
    Export stack outputs.

    ``database_url`` is a secret and shows as ``[secret]`` unless
    ``pulumi stack output --show-secrets`` is used.
    """
    outputs = stack_outputs(stack)
    for key, value in outputs.items():
        pulumi.export(key, value)
    return outputs
