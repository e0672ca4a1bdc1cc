from sqlalchemy.exc import OperationalError

from api.health import get_health_session
from main import app


def test_healthz_ok(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "app": "nm-comp-api", "db": "up"}


def test_healthz_degraded_when_store_is_down(client):
    class _DownSession:
        def execute(self, *_args, **_kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def _down():
        yield _DownSession()

    app.dependency_overrides[get_health_session] = _down
    r = client.get("/healthz")
    assert r.status_code == 500
    assert r.json() == {"status": "degraded", "app": "nm-comp-api", "db": "down"}


def test_version_and_ping(client):
    assert client.get("/version").json() == {"app": "nm-comp-api", "version": "1.0.0"}
    assert "API funcionando" in client.get("/test-connection").json()["message"]


def test_debug_never_echoes_connection_string(client):
    r = client.get("/debug", headers={"Origin": "http://localhost:3000"})
    assert r.status_code == 200
    env = r.json()["environment"]
    assert env["HAS_DATABASE_URL"] is True
    assert env["CORS_CONFIGURED"] is False
    assert "http://localhost:3000" in env["CORS_ORIGINS"]
    assert isinstance(env["PORT"], int)
    assert "sqlite" not in r.text


def test_unknown_route_is_404_with_error(client):
    r = client.get("/nao-existe")
    assert r.status_code == 404
    assert r.json() == {"error": "Rota não encontrada"}


def test_allowed_origin_is_reflected(client):
    r = client.get("/version", headers={"Origin": "http://localhost:3000"})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert r.headers["access-control-allow-credentials"] == "true"


def test_request_without_origin_passes(client):
    r = client.get("/version")
    assert r.status_code == 200
    assert "access-control-allow-origin" not in r.headers


def test_disallowed_origin_is_forbidden(client):
    r = client.get("/version", headers={"Origin": "https://intruso.example"})
    assert r.status_code == 403
    assert "CORS" in r.json()["error"]
    assert "access-control-allow-origin" not in r.headers


def test_preflight_answers_immediately(client):
    r = client.options(
        "/produtos",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.content == b""
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert "POST" in r.headers["access-control-allow-methods"]

    # preflight para rota inexistente também não passa adiante
    assert client.options("/qualquer/coisa").status_code == 200


def test_security_headers_present(client):
    r = client.get("/version")
    assert r.headers["x-content-type-options"] == "nosniff"
    assert r.headers["x-frame-options"] == "SAMEORIGIN"
    assert "ratelimit-limit" in r.headers
