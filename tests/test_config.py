import pytest
from pydantic import ValidationError

from staffhub.config import Settings


def test_boolean_flags_accept_common_spellings():
    assert Settings(debug="yes", menu_deep_cascade="on").menu_deep_cascade is True
    assert Settings(menu_deep_cascade="0").menu_deep_cascade is False


def test_debug_tolerates_log_level_names():
    assert Settings(debug="info").debug is False


def test_deep_cascade_rejects_log_level_names():
    with pytest.raises(ValidationError):
        Settings(menu_deep_cascade="info")


def test_cors_origin_list():
    settings = Settings(cors_origins="http://a.test, ,http://b.test")
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]
