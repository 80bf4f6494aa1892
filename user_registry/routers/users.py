from __future__ import annotations

import logging

import pydantic
from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response

from user_registry.deps import get_registry
from user_registry.errors import MalformedInputError, NotFoundError, ValidationError
from user_registry.models import CreateUserRequest, UserResponse
from user_registry.registry import User, UserRegistry

logger = logging.getLogger("user_registry")

router = APIRouter(prefix="/user", tags=["users"])

# Ids are signed 64-bit integers written in plain decimal.
_ID_PATTERN = r"^[+-]?[0-9]+$"
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


def _encode_user(user: User) -> str:
    return UserResponse(name=user.name).model_dump_json()


def _parse_user_id(raw: str) -> int:
    user_id = int(raw)
    if not _ID_MIN <= user_id <= _ID_MAX:
        raise MalformedInputError("Invalid user ID")
    return user_id


def _decode_create(body: bytes) -> CreateUserRequest:
    try:
        return CreateUserRequest.model_validate_json(body)
    except pydantic.ValidationError as e:
        raise MalformedInputError("Malformed request body") from e


async def _read_body(request: Request) -> bytes:
    # Read the raw body whatever the Content-Type says; JSON decoding happens in the handler.
    return await request.body()


# Plain `def` handlers: FastAPI runs each request on its worker thread pool.


@router.post("", status_code=202, response_class=Response)
def create_user(
    body: bytes = Depends(_read_body),
    registry: UserRegistry = Depends(get_registry),
) -> Response:
    try:
        payload = _decode_create(body)
        user_id = registry.create(payload.name)
    except (MalformedInputError, ValidationError) as e:
        logger.warning("Rejected user create: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return Response(status_code=202, headers={"Location": f"/user/{user_id}"})


@router.get("/{user_id}", response_class=Response)
def get_user(
    user_id: str = Path(..., pattern=_ID_PATTERN),
    registry: UserRegistry = Depends(get_registry),
) -> Response:
    try:
        user = registry.get(_parse_user_id(user_id))
    except MalformedInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User ID not found")

    try:
        body = _encode_user(user)
    except ValueError:
        logger.exception("Failed to encode user", extra={"user_id": user_id})
        raise HTTPException(status_code=500, detail="Error encoding response")

    return Response(content=body, status_code=200, media_type="application/json")


@router.delete("/{user_id}", status_code=204, response_class=Response)
def delete_user(
    user_id: str = Path(..., pattern=_ID_PATTERN),
    registry: UserRegistry = Depends(get_registry),
) -> Response:
    try:
        registry.delete(_parse_user_id(user_id))
    except MalformedInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        logger.warning("Delete of unknown user", extra={"user_id": user_id})
        raise HTTPException(status_code=404, detail="User ID not found")

    return Response(status_code=204)
