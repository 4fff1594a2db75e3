"""
Router for role management.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from staffhub.db import get_db
from staffhub.dependencies.authz import get_current_actor
from staffhub.errors import ConflictError, NotFoundError
from staffhub.schemas.auth_schemas import Actor
from staffhub.schemas.role_schemas import (
    CreateRoleRequest,
    DeleteManyRolesRequest,
    RoleDetailResponse,
    RoleListResponse,
    RoleSchema,
    UpdateRoleRequest,
)
from staffhub.services.role_service import RoleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/roles", tags=["Role"])


@router.post(
    "",
    response_model=RoleSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create role",
)
async def create_role(
    request: CreateRoleRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RoleService(db).create_role(request, actor=actor.email)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error creating role {request.name!r}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create role") from e


@router.get(
    "",
    response_model=RoleListResponse,
    summary="List roles",
)
async def list_roles(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None),
    created_by: str | None = Query(None),
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RoleService(db).list_roles(page=page, limit=limit, search=search, created_by=created_by)
    except Exception as e:
        logger.error(f"Error listing roles: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch roles") from e


@router.get(
    "/{role_id}",
    response_model=RoleDetailResponse,
    summary="Get role",
    description="Role details with the menus currently granted to it.",
)
async def get_role(
    role_id: int,
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RoleService(db).get_role(role_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error fetching role {role_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch role") from e


@router.patch(
    "/{role_id}",
    response_model=RoleSchema,
    summary="Update role",
)
async def update_role(
    role_id: int,
    request: UpdateRoleRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RoleService(db).update_role(role_id, request, actor=actor.email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error updating role {role_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update role") from e


@router.delete(
    "/{role_id}",
    summary="Delete role",
)
async def delete_role(
    role_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RoleService(db).delete_role(role_id, actor=actor.email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error deleting role {role_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete role") from e


@router.post(
    "/delete-many",
    summary="Delete many roles",
)
async def delete_many_roles(
    request: DeleteManyRolesRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RoleService(db).delete_many_roles(request.ids, actor=actor.email)
    except Exception as e:
        logger.error(f"Error bulk deleting roles: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete roles") from e
