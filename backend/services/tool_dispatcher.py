"""Routes validated tool requests to WhopAdmin and maps results to HTTP status."""

import json
from typing import Any, Dict, Tuple

import structlog
from pydantic import ValidationError

from models.intents import intent_to_tool_request, parse_intent
from models.tools import (
    CreatePlanRequest,
    CreateProductRequest,
    DeletePlanRequest,
    DeleteProductRequest,
    ListPlansRequest,
    ListProductsRequest,
    ToolResult,
    UpdatePlanRequest,
    UpdateProductRequest,
    failure,
    parse_tool_request,
    validation_message,
)
from services.whop_admin import WRITES_DISABLED_ERROR, WhopAdmin

logger = structlog.get_logger(__name__)

INVALID_JSON_ERROR = "Invalid JSON body"
UNKNOWN_TOOL_ERROR = "Unknown tool request"


def dispatch_tool_request(admin: WhopAdmin, request: Any) -> ToolResult:
    """Call the admin operation matching the request variant."""
    if isinstance(request, ListProductsRequest):
        return admin.list_products(request.company_id)
    elif isinstance(request, CreateProductRequest):
        return admin.create_product(request.input)
    elif isinstance(request, UpdateProductRequest):
        return admin.update_product(request.id, request.input)
    elif isinstance(request, DeleteProductRequest):
        return admin.delete_product(request.id)
    elif isinstance(request, ListPlansRequest):
        return admin.list_plans(request.company_id, request.product_id)
    elif isinstance(request, CreatePlanRequest):
        return admin.create_plan(request.input)
    elif isinstance(request, UpdatePlanRequest):
        return admin.update_plan(request.id, request.input)
    elif isinstance(request, DeletePlanRequest):
        return admin.delete_plan(request.id)

    # Unreachable for anything parse_tool_request accepted
    return failure(UNKNOWN_TOOL_ERROR)


def to_status(result: ToolResult) -> int:
    if result.ok:
        return 200
    if result.error == WRITES_DISABLED_ERROR:
        return 403
    return 400


def _rejected(error: ValidationError) -> Tuple[int, Dict[str, Any]]:
    message = validation_message(error)
    logger.info("tool_request_rejected", error=message)
    return 400, failure(message).to_dict()


def _run(admin: WhopAdmin, request: Any) -> Tuple[int, Dict[str, Any]]:
    try:
        result = dispatch_tool_request(admin, request)
    except Exception as e:
        logger.exception("tool_request_crashed", tool=request.type)
        return 500, failure(str(e) or "Unknown error").to_dict()

    status = to_status(result)
    logger.info("tool_request_handled", tool=request.type, status_code=status)
    return status, result.to_dict()


def handle_tool_payload(admin: WhopAdmin, payload: Any) -> Tuple[int, Dict[str, Any]]:
    """Validate a decoded JSON body, run it, and return (status, body)."""
    try:
        request = parse_tool_request(payload)
    except ValidationError as e:
        return _rejected(e)

    return _run(admin, request)


def handle_intent_payload(admin: WhopAdmin, payload: Any) -> Tuple[int, Dict[str, Any]]:
    """Run a chat intent ({"kind": ..., "slots": ...}) as its tool request.

    Slots that are still missing fail the same way an incomplete tool
    request does.
    """
    try:
        request = intent_to_tool_request(parse_intent(payload))
    except ValidationError as e:
        return _rejected(e)

    return _run(admin, request)


def handle_tool_body(admin: WhopAdmin, body: bytes, handler=handle_tool_payload) -> Tuple[int, Dict[str, Any]]:
    """Decode the raw request body and pass it to handler (tool requests by default)."""
    try:
        payload = json.loads(body)
    except ValueError:
        return 400, failure(INVALID_JSON_ERROR).to_dict()

    return handler(admin, payload)
