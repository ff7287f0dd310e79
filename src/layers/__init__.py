"""
Resource factories grouped by layer.

Creation Order:
    Setup   - Resource Group
    Layer 1 - PostgreSQL server, database, firewall rule
    Layer 2 - App Service plan, Hasura web app
    Layer 3 - Virtual network, subnet, public IP, NIC, jump-box VM
"""
