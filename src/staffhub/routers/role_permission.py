"""
Router for role permissions: which menus each role can see.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from staffhub.db import get_db
from staffhub.dependencies.authz import get_current_actor, require_role_claim
from staffhub.errors import NotFoundError
from staffhub.schemas.auth_schemas import Actor
from staffhub.schemas.menu_schemas import MenuTreeNode
from staffhub.schemas.role_permission_schemas import AssignRolePermissionsRequest, RolePermissionSchema
from staffhub.services.access_resolver import AccessResolver
from staffhub.services.role_permission_service import RolePermissionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/role-permissions", tags=["Role_Permissions"])


@router.post(
    "/assign",
    response_model=list[RolePermissionSchema],
    summary="Assign menus to a role",
    description="Replace all menu grants of a role. Unknown or deleted menu ids are skipped.",
)
async def assign_permissions(
    request: AssignRolePermissionsRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RolePermissionService(db).assign_permissions(request.role_id, request.menu_ids, actor=actor.email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error assigning permissions to role {request.role_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to assign permissions") from e


@router.get(
    "/role/{role_id}",
    response_model=list[RolePermissionSchema],
    summary="Get role grants",
)
async def get_role_permissions(
    role_id: int,
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return RolePermissionService(db).get_role_permissions(role_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get(
    "/role-menus/{role_id}",
    response_model=list[MenuTreeNode],
    summary="Menus visible to a role",
    description="The menu tree a role can see. A granted submenu whose parent is not granted is returned as a root.",
)
async def get_role_menus(
    role_id: int,
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return AccessResolver(db).resolve_menus_for_role(role_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error resolving menus for role {role_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch role menus") from e


@router.get(
    "/my-menus",
    response_model=list[MenuTreeNode],
    summary="Menus visible to the caller",
    description="The menu tree for the role carried in the caller's token.",
)
async def get_my_menus(
    actor: Actor = Depends(require_role_claim),
    db: Session = Depends(get_db),
):
    try:
        return AccessResolver(db).resolve_menus_for_role(actor.role_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error fetching menus for {actor.email}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch user menus") from e
