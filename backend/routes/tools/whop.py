"""Whop admin tool endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from services.tool_dispatcher import handle_intent_payload, handle_tool_body
from services.whop_admin import WhopAdmin, get_whop_admin

router = APIRouter()


@router.post("")
async def run_tool_api(request: Request, admin: WhopAdmin = Depends(get_whop_admin)):
    """Run one admin tool request ({"type": ..., ...}) against the Whop API.

    Responds with {"ok": true, "data": ...} or {"ok": false, "error": ...};
    403 when writes are disabled, 400 for bad input or upstream failures.
    """
    body = await request.body()
    # The Whop clients are blocking; keep them off the event loop
    status_code, payload = await run_in_threadpool(handle_tool_body, admin, body)
    return JSONResponse(payload, status_code=status_code)


@router.post("/intent")
async def run_intent_api(request: Request, admin: WhopAdmin = Depends(get_whop_admin)):
    """Run a chat intent ({"kind": ..., "slots": ...}) as the matching admin tool."""
    body = await request.body()
    status_code, payload = await run_in_threadpool(handle_tool_body, admin, body, handle_intent_payload)
    return JSONResponse(payload, status_code=status_code)
