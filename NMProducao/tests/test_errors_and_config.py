import json

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from config.settings import Settings
from utils.errors import error_response


def _body(response):
    return json.loads(response.body)


def test_unhandled_error_defaults_to_500():
    r = error_response(RuntimeError("boom"))
    assert r.status_code == 500
    assert _body(r) == {"error": "boom", "code": "ERR"}


def test_error_status_and_code_are_kept():
    class Teapot(Exception):
        status = 418
        code = "TEA"

    r = error_response(Teapot("sem café"))
    assert r.status_code == 418
    assert _body(r) == {"error": "sem café", "code": "TEA"}


def test_cors_messages_become_403():
    r = error_response(Exception("Not allowed by CORS"))
    assert r.status_code == 403
    assert _body(r) == {"error": "Not allowed by CORS"}


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DATABASE_URL", "URL_DO_BANCO_DE_DADOS", "URL_PUBLICO_DO_BANCO_DE_DADOS",
        "PORT", "PORTA", "CORS_ORIGINS", "CORS_ORIGENS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_database_url_aliases_and_cleanup(clean_env):
    clean_env.setenv("URL_DO_BANCO_DE_DADOS", "'postgres://u:p@db.railway.example:5432/prod'")
    s = Settings(_env_file=None)
    assert s.DATABASE_URL == "postgresql://u:p@db.railway.example:5432/prod"
    assert s.database_requires_ssl is True


def test_local_database_skips_ssl(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@localhost:5432/dev")
    assert Settings(_env_file=None).database_requires_ssl is False


def test_first_present_alias_wins(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite://")
    clean_env.setenv("PORTA", "8081")
    clean_env.setenv("CORS_ORIGENS", "https://a.example, https://b.example,,")
    s = Settings(_env_file=None)
    assert s.PORT == 8081
    assert s.cors_origins == ["https://a.example", "https://b.example"]
    assert "https://b.example" in s.allowed_origins
    assert "http://localhost:3000" in s.allowed_origins


def test_missing_database_url_is_fatal(clean_env):
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_database_url_counts_as_missing(clean_env):
    clean_env.setenv("DATABASE_URL", "   ")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_empty_first_alias_falls_through_to_next(clean_env):
    clean_env.setenv("DATABASE_URL", "")
    clean_env.setenv("URL_DO_BANCO_DE_DADOS", "postgresql://u:p@localhost:5432/dev")
    clean_env.setenv("PORT", "")
    clean_env.setenv("PORTA", "8082")
    s = Settings(_env_file=None)
    assert s.DATABASE_URL == "postgresql://u:p@localhost:5432/dev"
    assert s.PORT == 8082


def test_store_error_code_comes_from_driver_only():
    r = error_response(OperationalError("SELECT 1", {}, Exception("fora do ar")))
    assert r.status_code == 500
    assert _body(r)["code"] == "ERR"
