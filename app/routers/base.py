"""
Shared HTTP plumbing for the catalogue routers.

``crud_router`` builds the five endpoints for one entity around an
``EntityService``; ``error_response`` turns a failed ``Result`` into the
``{error, code}`` JSON body with the status code for that endpoint.
"""
from typing import Any, Callable

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import settings
from app.result import ErrorCode, Failure
from app.schemas import ErrorResponse, ListQuery, PagedResponse
from app.services.base import EntityService

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_ID: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.DUPLICATE_NAME: 409,
}


def error_response(result: Failure, *expected: ErrorCode) -> JSONResponse:
    """
    Map *result* to a JSON error response.

    Only the codes listed in *expected* keep their specific status; any
    other code (including INTERNAL_ERROR) becomes 500.
    """
    status_code = STATUS_BY_CODE.get(result.code, 500) if result.code in expected else 500
    body = ErrorResponse(error=result.error, code=result.code.value)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _errors(*codes: int) -> dict[int | str, dict[str, Any]]:
    return {code: {"model": ErrorResponse} for code in (*codes, 500)}


def crud_router(
    *,
    entity: str,
    service_dependency: Callable[..., EntityService],
    query_dependency: Callable[..., ListQuery],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> APIRouter:
    """
    Build ``GET / GET {id} / POST / PUT {id} / DELETE {id}`` for *entity*
    under ``{API_PREFIX}/{entity}``.
    """
    router = APIRouter(prefix=f"{settings.API_PREFIX}/{entity}", tags=[entity])
    detail_route = f"get_{entity}"

    @router.get(
        "",
        name=f"list_{entity}",
        response_model=PagedResponse[response_schema],
        responses=_errors(400),
    )
    async def list_items(
        query: ListQuery = Depends(query_dependency),
        service: EntityService = Depends(service_dependency),
    ):
        result = await service.get_all(query)
        if result.is_failure:
            return error_response(result, ErrorCode.VALIDATION_ERROR)
        return result.value

    @router.get(
        "/{item_id}",
        name=detail_route,
        response_model=response_schema,
        responses=_errors(400, 404),
    )
    async def get_item(item_id: str, service: EntityService = Depends(service_dependency)):
        result = await service.get_by_id(item_id)
        if result.is_failure:
            return error_response(result, ErrorCode.NOT_FOUND, ErrorCode.INVALID_ID)
        return result.value

    @router.post(
        "",
        name=f"create_{entity}",
        status_code=201,
        response_model=response_schema,
        responses=_errors(400, 409),
    )
    async def create_item(
        data: create_schema,  # type: ignore[valid-type]
        request: Request,
        response: Response,
        service: EntityService = Depends(service_dependency),
    ):
        result = await service.create(data)
        if result.is_failure:
            return error_response(result, ErrorCode.VALIDATION_ERROR, ErrorCode.DUPLICATE_NAME)
        response.headers["Location"] = str(request.url_for(detail_route, item_id=str(result.value.id)))
        return result.value

    @router.put(
        "/{item_id}",
        name=f"update_{entity}",
        response_model=response_schema,
        responses=_errors(400, 404, 409),
    )
    async def update_item(
        item_id: str,
        data: update_schema,  # type: ignore[valid-type]
        service: EntityService = Depends(service_dependency),
    ):
        result = await service.update(item_id, data)
        if result.is_failure:
            return error_response(
                result,
                ErrorCode.NOT_FOUND,
                ErrorCode.INVALID_ID,
                ErrorCode.VALIDATION_ERROR,
                ErrorCode.DUPLICATE_NAME,
            )
        return result.value

    @router.delete(
        "/{item_id}",
        name=f"delete_{entity}",
        status_code=204,
        response_class=Response,
        responses=_errors(400, 404),
    )
    async def delete_item(item_id: str, service: EntityService = Depends(service_dependency)):
        result = await service.delete(item_id)
        if result.is_failure:
            return error_response(result, ErrorCode.NOT_FOUND, ErrorCode.INVALID_ID)
        return Response(status_code=204)

    return router
