"""Developer tool harness: action catalogue and payload builder."""

import json
from typing import Any, Dict, List, Optional
from models.tools import TOOL_TYPES


class HarnessError(ValueError):
    """The harness form could not be turned into a tool request."""


ACTIONS: List[Dict[str, Any]] = [
    {"value": "listProducts", "label": "List Products", "requireCompanyId": True},
    {"value": "createProduct", "label": "Create Product", "requireInput": True},
    {"value": "updateProduct", "label": "Update Product", "requireId": True, "requireInput": True},
    {"value": "deleteProduct", "label": "Delete Product", "requireId": True},
    {"value": "listPlans", "label": "List Plans", "requireCompanyId": True, "requireProductId": True},
    {"value": "createPlan", "label": "Create Plan", "requireInput": True},
    {"value": "updatePlan", "label": "Update Plan", "requireId": True, "requireInput": True},
    {"value": "deletePlan", "label": "Delete Plan", "requireId": True},
]

INPUT_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "createProduct": {
        "companyId": "biz_***",
        "name": "Signals Pro",
        "description": "High-signal AI copilots for creators.",
        "imageUrls": [],
        "visibility": "visible",
    },
    "updateProduct": {
        "name": "Signals Pro (Updated)",
        "description": "Iterated copy.",
    },
    "createPlan": {
        "companyId": "biz_***",
        "productId": "prod_***",
        "name": "VIP Monthly",
        "priceCents": 9900,
        "interval": "monthly",
        "trialDays": 7,
    },
    "updatePlan": {
        "name": "VIP Annual",
        "priceCents": 29900,
        "interval": "annual",
    },
}


def parse_input(value: Optional[str]) -> Dict[str, Any]:
    """Parse the JSON payload text; blank means an empty object."""
    try:
        parsed = json.loads(value or "{}")
    except ValueError as e:
        raise HarnessError(str(e) or "Invalid JSON payload")

    if not isinstance(parsed, dict):
        raise HarnessError("Payload must be an object")
    return parsed


def build_tool_payload(
    action: str,
    company_id: str = "",
    product_id: str = "",
    target_id: str = "",
    input_value: str = "{}",
) -> Dict[str, Any]:
    """Turn the harness form fields into a raw tool request body."""
    if action not in TOOL_TYPES:
        raise HarnessError(f"Unsupported action: {action}")

    if action == "listProducts":
        if not company_id:
            raise HarnessError("companyId required")
        return {"type": "listProducts", "companyId": company_id}

    if action == "listPlans":
        if not company_id:
            raise HarnessError("companyId required")
        payload = {"type": "listPlans", "companyId": company_id}
        if product_id:
            payload["productId"] = product_id
        return payload

    if action in ("createProduct", "createPlan"):
        return {"type": action, "input": parse_input(input_value)}

    # update and delete
    if not target_id:
        noun = "Product" if "Product" in action else "Plan"
        raise HarnessError(f"{noun} id required")

    payload = {"type": action, "id": target_id}
    if action.startswith("update"):
        payload["input"] = parse_input(input_value)
    return payload
