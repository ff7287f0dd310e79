"""
Layer 3 - Network and Jump-box.

Resources managed:
- Virtual network (10.0.0.0/16) with one subnet (10.0.1.0/24)
- Dynamic public IP for the jump-box
- Network interface joining the subnet and the public IP
- Ubuntu jump-box VM with password SSH login

Creation Order:
    1. Virtual network
    2. Subnet
    3. Public IP
    4. Network interface
    5. Virtual machine
"""

import logging
from typing import Optional

import pulumi
import pulumi_azure as azure

import src.constants as CONSTANTS
from src.core.context import StackSettings
from src.naming import RuheNaming

logger = logging.getLogger(__name__)


# ==========================================
# Virtual Network
# ==========================================

def create_virtual_network(
    naming: RuheNaming,
    resource_group: azure.core.ResourceGroup,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.network.VirtualNetwork:
    logger.info(f"Declaring virtual network: {CONSTANTS.VNET_ADDRESS_SPACE}")

    return azure.network.VirtualNetwork(
        naming.virtual_network(),
        location=resource_group.location,
        resource_group_name=resource_group.name,
        address_spaces=[CONSTANTS.VNET_ADDRESS_SPACE],
        opts=opts,
    )


def create_subnet(
    naming: RuheNaming,
    resource_group: azure.core.ResourceGroup,
    vnet: azure.network.VirtualNetwork,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.network.Subnet:
    logger.info(f"Declaring subnet {naming.subnet_physical()}: {CONSTANTS.SUBNET_ADDRESS_PREFIX}")

    return azure.network.Subnet(
        naming.subnet(),
        name=naming.subnet_physical(),
        resource_group_name=resource_group.name,
        virtual_network_name=vnet.name,
        address_prefixes=[CONSTANTS.SUBNET_ADDRESS_PREFIX],
        opts=opts,
    )


# ==========================================
# Jump-box
# ==========================================

def create_public_ip(
    naming: RuheNaming,
    resource_group: azure.core.ResourceGroup,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.network.PublicIp:
    logger.info("Declaring jump-box public IP (dynamic)")

    return azure.network.PublicIp(
        naming.public_ip(),
        location=resource_group.location,
        resource_group_name=resource_group.name,
        allocation_method=CONSTANTS.IP_ALLOCATION,
        sku=CONSTANTS.PUBLIC_IP_SKU,
        opts=opts,
    )


def create_network_interface(
    naming: RuheNaming,
    resource_group: azure.core.ResourceGroup,
    subnet: azure.network.Subnet,
    public_ip: azure.network.PublicIp,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.network.NetworkInterface:
    logger.info("Declaring jump-box network interface")

    return azure.network.NetworkInterface(
        naming.network_interface(),
        location=resource_group.location,
        resource_group_name=resource_group.name,
        ip_configurations=[
            azure.network.NetworkInterfaceIpConfigurationArgs(
                name=naming.ip_configuration(),
                subnet_id=subnet.id,
                private_ip_address_allocation=CONSTANTS.IP_ALLOCATION,
                public_ip_address_id=public_ip.id,
            )
        ],
        opts=opts,
    )


def create_jumpbox(
    settings: StackSettings,
    naming: RuheNaming,
    resource_group: azure.core.ResourceGroup,
    nic: azure.network.NetworkInterface,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> azure.compute.VirtualMachine:
    """
    Declare the jump-box VM.

    The VM reuses the database admin credentials and keeps password
    authentication enabled, so operators can SSH in with the same login and
    reach the database from inside the virtual network.

    Args:
        settings: Stack settings (admin login and password)
        naming: Resource naming helper
        resource_group: Parent resource group
        nic: Network interface from ``create_network_interface``
        opts: Extra resource options

    Returns:
        The VirtualMachine resource
    """
    image = CONSTANTS.JUMPBOX_IMAGE
    logger.info(
        f"Declaring jump-box VM ({CONSTANTS.JUMPBOX_VM_SIZE}, "
        f"{image['offer']} {image['sku']})"
    )

    return azure.compute.VirtualMachine(
        naming.jumpbox(),
        location=resource_group.location,
        resource_group_name=resource_group.name,
        network_interface_ids=[nic.id],
        vm_size=CONSTANTS.JUMPBOX_VM_SIZE,
        os_profile=azure.compute.VirtualMachineOsProfileArgs(
            computer_name=naming.jumpbox_computer_name(),
            admin_username=settings.pg_user,
            admin_password=settings.secret_password(),
        ),
        os_profile_linux_config=azure.compute.VirtualMachineOsProfileLinuxConfigArgs(
            disable_password_authentication=False,
        ),
        storage_os_disk=azure.compute.VirtualMachineStorageOsDiskArgs(
            name=naming.jumpbox_os_disk(),
            create_option="FromImage",
            managed_disk_type=CONSTANTS.JUMPBOX_OS_DISK_TYPE,
            disk_size_gb=CONSTANTS.JUMPBOX_OS_DISK_SIZE_GB,
        ),
        storage_image_reference=azure.compute.VirtualMachineStorageImageReferenceArgs(
            publisher=image["publisher"],
            offer=image["offer"],
            sku=image["sku"],
            version=image["version"],
        ),
        opts=opts,
    )
