import os

# ========= CONFIGURATION =========
TABLE_CONFIG = {
    "user_roles":       os.environ.get("USER_ROLES_TABLE",       "dev.UserRoles.ddb-table"),
    "employees":        os.environ.get("EMPLOYEES_TABLE",        "dev.Employees.ddb-table"),
    "legacy_roles":     os.environ.get("LEGACY_ROLES_TABLE",     "dev.LegacyUserRoles.ddb-table"),
    "staffs":           os.environ.get("STAFFS_TABLE",           "dev.Staffs.ddb-table"),
    "role_permissions": os.environ.get("ROLE_PERMISSIONS_TABLE", "dev.RolePermissions.ddb-table"),
    "staff_auth_index": os.environ.get("STAFF_AUTH_INDEX",       "authUserId-index"),   # GSI on staffs.authUserId
}

AWS_REGION = os.environ.get("AWS_REGION", os.environ.get("AWS_DEFAULT_REGION", "us-east-1"))

# ========= CACHE WINDOWS (seconds) =========
ROLE_CACHE_TTL = int(os.environ.get("ROLE_CACHE_TTL", "120"))
DIRECTORY_CACHE_TTL = int(os.environ.get("DIRECTORY_CACHE_TTL", "300"))

# ========= AUTH =========
JWT_SECRET = os.environ.get("JWT_SECRET")

ALLOWED_ORIGINS = [
    o.strip()
    for o in os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]
