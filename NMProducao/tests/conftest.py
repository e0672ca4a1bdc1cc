import os

# Precisa estar no ambiente antes de importar config.settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_MAX"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from main import app
from models import Base
from utils.db import engine


@pytest.fixture
def client():
    """API com banco em memória recém-criado (schema + seeds via lifespan)."""
    Base.metadata.drop_all(bind=engine)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def ids(client):
    """IDs semeados de turno, setor e produto."""
    return {
        "turno": client.get("/turnos").json()[0]["turnoid"],
        "setor": client.get("/setores").json()[0]["setorid"],
        "familia": client.get("/familias").json()[0]["familiaid"],
        "produto": client.get("/produtos").json()["rows"][0]["produtoid"],
    }


@pytest.fixture
def make_produto(client, ids):
    def _make(**overrides):
        body = {
            "Codigo": "C100",
            "Descricao": "Compensado 10mm",
            "FamiliaID": ids["familia"],
            "Comprimento_m": 2.2,
            "Largura_m": 1.6,
            "Bitola_m": 0.01,
        }
        body.update(overrides)
        r = client.post("/produtos", json=body)
        assert r.status_code == 201, r.text
        return r.json()["id"]
    return _make


@pytest.fixture
def make_producao(client, ids):
    def _make(data="2025-03-10", chapas=10, produto=None):
        r = client.post("/producao", json={
            "Data": data,
            "TurnoID": ids["turno"],
            "SetorID": ids["setor"],
            "ProdutoID": produto or ids["produto"],
            "Quantidade_Chapas": chapas,
        })
        assert r.status_code == 201, r.text
        return r.json()["id"]
    return _make
