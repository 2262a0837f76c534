"""HTTP transport: one JSON-RPC message per POST."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from catalog_mcp.dependencies import get_dispatcher
from catalog_mcp.tools import ToolDispatcher

from .service import handle_message


router = APIRouter(prefix="", tags=["mcp"])


@router.post("/mcp", operation_id="mcp_endpoint_post")
async def mcp_post_endpoint(
    request: Request,
    dispatcher: Annotated[ToolDispatcher, Depends(get_dispatcher)],
):
    """Handle one JSON-RPC 2.0 message.

    Notifications and stray responses are acknowledged with 202 and no body.
    """
    body = await request.body()
    response = await handle_message(dispatcher, body)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response)
