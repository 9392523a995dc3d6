"""
Employee directory repository.
"""
from typing import Any, Dict, List, Optional
from ..logging_config import create_logger
from ..utils import json_clean
from .database import EMPLOYEES_TBL

logger = create_logger("models.employee_repository")


def get_employee(employee_id: str) -> Optional[Dict[str, Any]]:
    """Load one employee record by ID."""
    return EMPLOYEES_TBL.get_item(Key={"employeeID": str(employee_id)}).get("Item")


def scan_all_employees() -> List[Dict[str, Any]]:
    """Scan the whole employee directory."""
    items: List[Dict[str, Any]] = []
    resp = EMPLOYEES_TBL.scan()
    items.extend(resp.get("Items", []))
    while "LastEvaluatedKey" in resp:
        resp = EMPLOYEES_TBL.scan(ExclusiveStartKey=resp["LastEvaluatedKey"])
        items.extend(resp.get("Items", []))
    logger.info(f"Loaded {len(items)} employees")
    return json_clean(items)
