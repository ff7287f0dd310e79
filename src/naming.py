"""
Resource naming for the ruhe stack.

Pulumi identifies each resource by a logical name (the URN component) and
Azure by a physical name. Logical names are fixed so existing stacks keep
their state; physical names are either fixed here or left to Pulumi's
auto-naming (logical name plus a random suffix).

Naming Convention:
    - Resource Group: logical "ruhe-db", physical from the resourceGroup config
    - PostgreSQL: "pg" (server), "pg-db" (database), "pg-fw" (firewall rule)
    - Hasura: "hasura" (service plan and web app)
    - Jump-box: "jumpbox-ip", "jumpboxNic", "jumpbox"

Usage:
    from src.naming import RuheNaming

    naming = RuheNaming()
    naming.db_server()  # "pg"
"""


class RuheNaming:
    """
    Logical and physical names for every resource in the stack.

    Attributes:
        prefix: Optional prefix prepended to all logical names, used to place
                two copies of the stack in one Pulumi program
    """

    def __init__(self, prefix: str = ""):
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def _logical(self, name: str) -> str:
        return f"{self._prefix}-{name}" if self._prefix else name

    # ==========================================
    # Setup Layer
    # ==========================================

    def resource_group(self) -> str:
        return self._logical("ruhe-db")

    # ==========================================
    # Layer 1: Database
    # ==========================================

    def db_server(self) -> str:
        return self._logical("pg")

    def database(self) -> str:
        return self._logical("pg-db")

    def firewall_rule(self) -> str:
        return self._logical("pg-fw")

    def firewall_rule_physical(self) -> str:
        """Physical rule name; Azure-internal access only."""
        return "allow-azure-internal"

    # ==========================================
    # Layer 2: Hasura App
    # ==========================================

    def app_service_plan(self) -> str:
        return self._logical("hasura")

    def web_app(self) -> str:
        return self._logical("hasura")

    # ==========================================
    # Layer 3: Network & Jump-box
    # ==========================================

    def virtual_network(self) -> str:
        return self._logical("vnet")

    def subnet(self) -> str:
        return self._logical("vnet-default")

    def subnet_physical(self) -> str:
        return "default"

    def public_ip(self) -> str:
        return self._logical("jumpbox-ip")

    def network_interface(self) -> str:
        return self._logical("jumpboxNic")

    def ip_configuration(self) -> str:
        return "jumpbox-ipcfg"

    def jumpbox(self) -> str:
        return self._logical("jumpbox")

    def jumpbox_computer_name(self) -> str:
        return "jumpbox"

    def jumpbox_os_disk(self) -> str:
        return "myosdisk1"
