"""Whop admin operations: list/create/update/delete for products and plans.

Every operation returns a ToolResult and never raises past its boundary.
Lists go through the read client; writes go through the REST client and are
refused up front when writes are disabled.
"""

from typing import Any, Callable, Dict, List, Optional

import structlog

from config import get_settings
from models.tools import (
    PlanCreateInput,
    PlanUpdateInput,
    ProductCreateInput,
    ProductUpdateInput,
    ToolResult,
    failure,
    success,
)
from services.whop_client import (
    WhopReadClient,
    WhopRestClient,
    get_rest_client,
    get_whop_client,
)

logger = structlog.get_logger(__name__)

WRITES_DISABLED_ERROR = "Writes disabled (set ALLOW_WRITES=true)"


def normalize_connection(connection: Any) -> List[Any]:
    """Flatten the collection shapes the Whop API returns into a plain list.

    Accepts a bare list, ``{"data": [...]}``, ``{"nodes": [...]}`` or
    ``{"edges": [{"node": ...}]}``. Empty entries are dropped, order is kept.
    """
    if not connection:
        return []

    if isinstance(connection, list):
        return [item for item in connection if item]

    if not isinstance(connection, dict):
        return []

    def prune(items: Any) -> List[Any]:
        return [item for item in items if item] if isinstance(items, list) else []

    data = prune(connection.get("data"))
    if data:
        return data

    nodes = prune(connection.get("nodes"))
    if nodes:
        return nodes

    edges = connection.get("edges")
    if isinstance(edges, list):
        return [
            edge.get("node")
            for edge in edges
            if isinstance(edge, dict) and edge.get("node")
        ]

    return []


def build_product_payload(data: ProductCreateInput) -> Dict[str, Any]:
    return data.model_dump(exclude_none=True)


def build_plan_payload(data: PlanCreateInput) -> Dict[str, Any]:
    # A null trial_days is left out like any other absent field
    return data.model_dump(exclude_none=True)


def build_update_payload(data) -> Dict[str, Any]:
    """Sparse PATCH body: every field present in the input, nothing else.

    Presence decides inclusion for all fields, so falsy values such as
    ``priceCents: 0`` or ``name: ""`` are sent as given.
    """
    return data.model_dump(exclude_unset=True)


def _plan_product_id(plan: Any) -> Optional[str]:
    if not isinstance(plan, dict):
        return None
    product = plan.get("product")
    if not isinstance(product, dict):
        return None
    return product.get("id")


class WhopAdmin:
    """The eight admin tools, bound to their clients and the write guard."""

    def __init__(
        self,
        allow_writes: bool,
        rest_client_factory: Callable[[], WhopRestClient] = get_rest_client,
        read_client_factory: Callable[[], WhopReadClient] = get_whop_client,
    ):
        self.allow_writes = allow_writes
        self._rest_client_factory = rest_client_factory
        self._read_client_factory = read_client_factory

    def _guard_writes(self) -> Optional[ToolResult]:
        if not self.allow_writes:
            logger.info("whop_write_blocked")
            return failure(WRITES_DISABLED_ERROR)
        return None

    def _write(self, operation: str, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        rest = self._rest_client_factory()
        logger.info("whop_write", operation=operation, method=method, path=path)
        return rest.request(method, path, body=body)

    def _fail(self, operation: str, error: Exception) -> ToolResult:
        message = str(error) or "Unknown error"
        logger.warning("whop_tool_failed", operation=operation, error=message)
        return failure(message)

    # Products

    def list_products(self, company_id: str) -> ToolResult:
        try:
            client = self._read_client_factory()
            connection = client.list_access_passes(company_id)
            return success(normalize_connection(connection))
        except Exception as e:
            return self._fail("listProducts", e)

    def create_product(self, data: ProductCreateInput) -> ToolResult:
        guard = self._guard_writes()
        if guard:
            return guard

        try:
            created = self._write("createProduct", "POST", "/products", build_product_payload(data))
            return success(created)
        except Exception as e:
            return self._fail("createProduct", e)

    def update_product(self, product_id: str, data: ProductUpdateInput) -> ToolResult:
        guard = self._guard_writes()
        if guard:
            return guard

        try:
            updated = self._write(
                "updateProduct", "PATCH", f"/products/{product_id}", build_update_payload(data)
            )
            return success(updated)
        except Exception as e:
            return self._fail("updateProduct", e)

    def delete_product(self, product_id: str) -> ToolResult:
        guard = self._guard_writes()
        if guard:
            return guard

        try:
            self._write("deleteProduct", "DELETE", f"/products/{product_id}")
            return success({"id": product_id})
        except Exception as e:
            return self._fail("deleteProduct", e)

    # Plans

    def list_plans(self, company_id: str, product_id: Optional[str] = None) -> ToolResult:
        try:
            client = self._read_client_factory()
            plans = normalize_connection(client.list_plans(company_id))

            if product_id:
                plans = [plan for plan in plans if _plan_product_id(plan) == product_id]

            return success(plans)
        except Exception as e:
            return self._fail("listPlans", e)

    def create_plan(self, data: PlanCreateInput) -> ToolResult:
        guard = self._guard_writes()
        if guard:
            return guard

        try:
            created = self._write("createPlan", "POST", "/plans", build_plan_payload(data))
            return success(created)
        except Exception as e:
            return self._fail("createPlan", e)

    def update_plan(self, plan_id: str, data: PlanUpdateInput) -> ToolResult:
        guard = self._guard_writes()
        if guard:
            return guard

        try:
            updated = self._write("updatePlan", "PATCH", f"/plans/{plan_id}", build_update_payload(data))
            return success(updated)
        except Exception as e:
            return self._fail("updatePlan", e)

    def delete_plan(self, plan_id: str) -> ToolResult:
        guard = self._guard_writes()
        if guard:
            return guard

        try:
            self._write("deletePlan", "DELETE", f"/plans/{plan_id}")
            return success({"id": plan_id})
        except Exception as e:
            return self._fail("deletePlan", e)


def get_whop_admin() -> WhopAdmin:
    """FastAPI dependency: admin tools bound to the process settings."""
    return WhopAdmin(allow_writes=get_settings().allow_writes)
