"""Development-only harness for trying the admin tools by hand."""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from config import Settings, get_settings
from services.harness_service import ACTIONS, INPUT_TEMPLATES, HarnessError, build_tool_payload
from services.tool_dispatcher import handle_tool_payload
from services.whop_admin import WhopAdmin, get_whop_admin

router = APIRouter()
logger = structlog.get_logger(__name__)


class HarnessRunRequest(BaseModel):
    action: str
    companyId: str = ""
    productId: str = ""
    targetId: str = ""
    input: str = "{}"


def require_development(settings: Settings = Depends(get_settings)) -> Settings:
    """Hide the harness outside APP_ENV=development."""
    if not settings.is_development:
        raise HTTPException(status_code=404, detail="Not Found")
    return settings


@router.get("")
async def harness_info(settings: Settings = Depends(require_development)):
    """List the available tool actions and sample inputs"""
    return {
        "writesEnabled": settings.allow_writes,
        "actions": ACTIONS,
        "templates": INPUT_TEMPLATES,
    }


@router.post("/run")
async def harness_run(
    request: HarnessRunRequest,
    settings: Settings = Depends(require_development),
    admin: WhopAdmin = Depends(get_whop_admin),
):
    """Build a tool request from the form fields and run it through /api/tools logic"""
    try:
        payload = build_tool_payload(
            request.action,
            company_id=request.companyId,
            product_id=request.productId,
            target_id=request.targetId,
            input_value=request.input,
        )
    except HarnessError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("harness_run", action=request.action)

    status_code, body = await run_in_threadpool(handle_tool_payload, admin, payload)
    return {"status": status_code, "body": body}
