"""
Domain errors raised by the menu and role services.

Routers translate these into HTTP responses; services never raise
``HTTPException`` themselves.
"""


class MenuAccessError(Exception):
    """Base class for errors raised by the menu/role core."""


class NotFoundError(MenuAccessError):
    """A referenced menu, parent menu or role does not exist."""


class ConflictError(MenuAccessError):
    """A record with the same unique attributes already exists."""


class InvalidParentError(MenuAccessError):
    """A reparent would make a node its own ancestor."""
