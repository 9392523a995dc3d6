"""
Database connection and table configuration.
"""
import boto3
from ..config import TABLE_CONFIG, AWS_REGION

_ddb = boto3.resource("dynamodb", region_name=AWS_REGION)

# Table instances
USER_ROLES_TBL = _ddb.Table(TABLE_CONFIG["user_roles"])
LEGACY_ROLES_TBL = _ddb.Table(TABLE_CONFIG["legacy_roles"])
EMPLOYEES_TBL = _ddb.Table(TABLE_CONFIG["employees"])
STAFFS_TBL = _ddb.Table(TABLE_CONFIG["staffs"])
ROLE_PERMISSIONS_TBL = _ddb.Table(TABLE_CONFIG["role_permissions"])
