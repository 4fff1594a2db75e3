from datetime import UTC, datetime, timedelta

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from staffhub.dependencies.authz import get_current_actor, require_role_claim
from staffhub.schemas.auth_schemas import Actor
from staffhub.utils import auth as auth_utils


def _token(**claims):
    payload = {"exp": datetime.now(UTC) + timedelta(minutes=5), **claims}
    return jwt.encode(payload, "test-secret", algorithm="HS256")


def _cred(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_valid_token_gives_actor():
    actor = get_current_actor(_cred(_token(email="staff@test.com", role=3, type="access")))

    assert actor == Actor(email="staff@test.com", role_id=3)


def test_sub_claim_and_numeric_string_role():
    actor = get_current_actor(_cred(_token(sub="hr_user", role="7")))

    assert actor.email == "hr_user"
    assert actor.role_id == 7


def test_bearer_prefix_inside_credentials_is_tolerated():
    actor = get_current_actor(_cred(f"Bearer {_token(email='a@test.com')}"))
    assert actor.email == "a@test.com"
    assert actor.role_id is None


def test_missing_credentials_rejected():
    with pytest.raises(HTTPException) as exc:
        get_current_actor(None)
    assert exc.value.status_code == 401


def test_expired_token_rejected():
    expired = jwt.encode(
        {"email": "late@test.com", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        "test-secret",
        algorithm="HS256",
    )

    assert auth_utils.decode_jwt(expired) is None
    with pytest.raises(HTTPException) as exc:
        get_current_actor(_cred(expired))
    assert exc.value.status_code == 401


def test_wrong_signature_and_refresh_tokens_rejected():
    forged = jwt.encode({"email": "x@test.com"}, "another-secret", algorithm="HS256")
    refresh = _token(email="x@test.com", type="refresh")

    for token in (forged, refresh, _token(role=1)):
        with pytest.raises(HTTPException) as exc:
            get_current_actor(_cred(token))
        assert exc.value.status_code == 401


def test_role_claim_parsing():
    assert auth_utils.parse_role_claim(5) == 5
    assert auth_utils.parse_role_claim(" 12 ") == 12
    assert auth_utils.parse_role_claim("admin") is None
    assert auth_utils.parse_role_claim(True) is None
    assert auth_utils.parse_role_claim(None) is None


def test_require_role_claim():
    with pytest.raises(HTTPException) as exc:
        require_role_claim(Actor(email="a@test.com"))
    assert exc.value.status_code == 403

    actor = Actor(email="a@test.com", role_id=2)
    assert require_role_claim(actor) is actor
