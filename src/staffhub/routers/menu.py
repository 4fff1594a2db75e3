"""
Router for navigation menu management.

Create, update, delete, and browse the menu tree. Deletions here are
permanent and cascade to submenus.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from staffhub.db import get_db
from staffhub.dependencies.authz import get_current_actor
from staffhub.errors import InvalidParentError, NotFoundError
from staffhub.schemas.auth_schemas import Actor
from staffhub.schemas.menu_schemas import (
    CreateMenuRequest,
    DeleteManyMenusRequest,
    DeleteManyMenusResponse,
    DeleteMenuResponse,
    MenuHierarchyResponse,
    MenuListResponse,
    MenuMutationResponse,
    MenuTreeNode,
    UpdateMenuRequest,
)
from staffhub.services.menu_service import MenuService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/menus", tags=["Menu"])


@router.post(
    "",
    response_model=MenuMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create menu",
    description="Create a menu and an optional batch of submenus. Returns the full rebuilt hierarchy.",
)
async def create_menu(
    request: CreateMenuRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return MenuService(db).create_menu(request.parent, request.children, actor=actor.email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error creating menu: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create menu") from e


@router.get(
    "",
    response_model=MenuListResponse,
    summary="List menus",
    description="Flat, paginated list of menus sorted by order, with each menu's parent name.",
)
async def list_menus(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, description="Case-insensitive match on menu name"),
    created_by: str | None = Query(None),
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return MenuService(db).list_menus(page=page, limit=limit, search=search, created_by=created_by)
    except Exception as e:
        logger.error(f"Error listing menus: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch menus") from e


@router.get(
    "/hierarchy",
    response_model=MenuHierarchyResponse,
    summary="Paginated menu hierarchy",
    description="Root menus paginated, each with its direct submenus.",
)
async def get_menu_hierarchy(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None),
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return MenuService(db).get_menu_hierarchy(page=page, limit=limit, search=search)
    except Exception as e:
        logger.error(f"Error fetching menu hierarchy: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch menu hierarchy") from e


@router.get(
    "/tree",
    response_model=list[MenuTreeNode],
    summary="Full menu tree",
    description="Every menu arranged as a tree, sorted by order at every level.",
)
async def get_menu_tree(
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return MenuService(db).get_full_hierarchy()
    except Exception as e:
        logger.error(f"Error fetching menu tree: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch menu tree") from e


@router.patch(
    "/{menu_id}",
    response_model=MenuMutationResponse,
    summary="Update menu",
    description="Update a menu and reconcile its submenus. Submenus left out of the request are deleted permanently.",
)
async def update_menu(
    menu_id: int,
    request: UpdateMenuRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return MenuService(db).update_menu(menu_id, request.parent, request.children, actor=actor.email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except InvalidParentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error updating menu {menu_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update menu") from e


@router.delete(
    "/{menu_id}",
    response_model=DeleteMenuResponse,
    summary="Delete menu",
    description="Permanently delete a menu and its submenus.",
)
async def delete_menu(
    menu_id: int,
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return MenuService(db).delete_menu(menu_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error deleting menu {menu_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete menu") from e


@router.post(
    "/delete-many",
    response_model=DeleteManyMenusResponse,
    summary="Delete many menus",
    description="Permanently delete several menus and their submenus. Unknown ids are ignored.",
)
async def delete_many_menus(
    request: DeleteManyMenusRequest,
    _: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        return MenuService(db).delete_many_menus(request.ids)
    except Exception as e:
        logger.error(f"Error bulk deleting menus: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete menus") from e
