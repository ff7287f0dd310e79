# ==========================================
# 1. Stack Configuration Keys
# ==========================================
CONFIG_RESOURCE_GROUP = "resourceGroup"
CONFIG_PG_USER = "pguser"
CONFIG_PG_PASSWORD = "pgpass"
CONFIG_LOCATION = "location"
CONFIG_DB_NAME = "dbname"
CONFIG_MODE = "mode"

REQUIRED_CONFIG_KEYS = [
    CONFIG_RESOURCE_GROUP,
    CONFIG_PG_USER,
    CONFIG_PG_PASSWORD,
]

SECRET_CONFIG_KEYS = {CONFIG_PG_PASSWORD}

DEFAULT_LOCATION = "West US 2"
DEFAULT_DB_NAME = "ruhe"
DEFAULT_MODE = "INFO"
DEFAULT_STACK_NAME = "prod"

# Environment variable read by the CLI when configuring the password
PG_PASSWORD_ENV_VAR = "RUHE_PGPASS"

# Admin logins Azure Database for PostgreSQL refuses
RESERVED_PG_LOGINS = {
    "azure_superuser",
    "azure_pg_admin",
    "admin",
    "administrator",
    "root",
    "guest",
    "public",
}

# ==========================================
# 2. Database Server
# ==========================================
PG_SKU_NAME = "B_Gen5_1"  # Basic tier, Gen5 family, 1 vCore
PG_VERSION = "11"
PG_STORAGE_MB = 5120
PG_BACKUP_RETENTION_DAYS = 7
PG_PORT = 5432
PG_CHARSET = "utf8"
PG_COLLATION = "en_US"

FIREWALL_START_IP = "0.0.0.0"
FIREWALL_END_IP = "0.0.0.0"

# ==========================================
# 3. Hasura Web App
# ==========================================
APP_PLAN_OS_TYPE = "Linux"
APP_PLAN_SKU = "B1"
APP_PLAN_WORKER_COUNT = 1

HASURA_IMAGE = "hasura/graphql-engine:latest"
DOCKER_REGISTRY_URL = "https://index.docker.io"

JWK_URL = "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
HASURA_JWT_SECRET = '{"type":"RS512", "jwk_url": "' + JWK_URL + '"}'
HASURA_UNAUTHORIZED_ROLE = "anonymous"
WEBSITES_PORT = "8080"

# ==========================================
# 4. Network & Jump-box
# ==========================================
VNET_ADDRESS_SPACE = "10.0.0.0/16"
SUBNET_ADDRESS_PREFIX = "10.0.1.0/24"
IP_ALLOCATION = "Dynamic"
PUBLIC_IP_SKU = "Basic"  # Standard SKU only supports static allocation

JUMPBOX_VM_SIZE = "Standard_A0"
JUMPBOX_OS_DISK_TYPE = "Standard_LRS"
JUMPBOX_OS_DISK_SIZE_GB = 30
JUMPBOX_IMAGE = {
    "publisher": "canonical",
    "offer": "UbuntuServer",
    "sku": "18.04-LTS",
    "version": "latest",
}
