from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from staffhub.schemas.auth_schemas import Actor
from staffhub.utils.auth import decode_jwt, parse_role_claim

bearer = HTTPBearer(auto_error=False)


# Module-level dependency object to avoid calling Depends() in function defaults
bearer_dep = Depends(bearer)


def get_current_actor(cred: HTTPAuthorizationCredentials = bearer_dep) -> Actor:
    """
    Resolve the caller from a bearer JWT.

    Tokens are issued by the login service; only the signature, expiry and
    token type are checked here. The ``email`` (or ``sub``) claim becomes the
    audit identity and ``role`` the caller's role id.
    """
    if cred is None or cred.scheme.lower() != "bearer":
        raise HTTPException(401, "missing or invalid authorization header", headers={"WWW-Authenticate": "Bearer"})

    # Tolerate a pasted "Bearer <token>" inside the credentials value
    token = cred.credentials
    if isinstance(token, str) and token.lower().startswith("bearer "):
        token = token.split(" ", 1)[1]

    payload = decode_jwt(token)
    if not payload or payload.get("type", "access") != "access":
        raise HTTPException(401, "invalid or expired token", headers={"WWW-Authenticate": "Bearer"})

    identity = payload.get("email") or payload.get("sub")
    if not identity:
        raise HTTPException(401, "token carries no identity", headers={"WWW-Authenticate": "Bearer"})

    return Actor(email=identity, role_id=parse_role_claim(payload.get("role")))


# Module-level dependency object to avoid calling Depends() in function defaults
current_actor_dependency = Depends(get_current_actor)


def require_role_claim(actor: Actor = current_actor_dependency) -> Actor:
    if actor.role_id is None:
        raise HTTPException(403, "token carries no role")
    return actor
