from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from ..dispatcher import ToolDispatcher
from ..errors import AccessDenied, InternalError, InvalidArguments, MethodNotFound, NotFound, ToolError
from ..schemas import ApiResponse

router = APIRouter(prefix='/api/tools', tags=['tools'])


def get_dispatcher(request: Request) -> ToolDispatcher:
    return request.app.state.dispatcher


def _status_for(exc: ToolError) -> int:
    if isinstance(exc, AccessDenied):
        return 403
    if isinstance(exc, (NotFound, MethodNotFound)):
        return 404
    if isinstance(exc, InvalidArguments):
        return 422
    if isinstance(exc, InternalError):
        return 500
    return 400


@router.get('')
def list_tools(dispatcher: ToolDispatcher = Depends(get_dispatcher)):
    return {'ok': True, 'data': [spec.model_dump() for spec in dispatcher.tools()]}


@router.post('/{name}')
async def call_tool(
    name: str,
    arguments: Optional[dict[str, Any]] = Body(default=None),
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
):
    try:
        text = await dispatcher.dispatch(name, arguments)
    except ToolError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=exc.to_dict())
    return ApiResponse(ok=True, message=f'{name} completed', data=text)
