import pytest

from models import Familia, Produto, Setor, Turno
from services.bootstrap_service import init_schema
from utils.db import SessionLocal, engine
from utils.transactions import uow


def test_restart_does_not_duplicate_or_overwrite(client):
    client.put("/produtos/1", json={
        "Codigo": "P001", "Descricao": "Editado pelo operador", "FamiliaID": 1,
        "Comprimento_m": 1, "Largura_m": 1, "Bitola_m": 1,
    })

    init_schema(engine)
    init_schema(engine)

    with SessionLocal() as db:
        assert db.query(Turno).count() == 1
        assert db.query(Setor).count() == 1
        assert db.query(Familia).count() == 1
        produtos = db.query(Produto).all()
    assert len(produtos) == 1
    assert produtos[0].descricao == "Editado pelo operador"


def test_seeds_only_fill_empty_tables(client, make_produto):
    client.delete("/produtos/1")
    make_produto()
    init_schema(engine)
    codigos = [r["codigo"] for r in client.get("/produtos").json()["rows"]]
    assert codigos == ["C100"]


def test_dimension_lists_expose_seeded_defaults(client):
    assert [t["turnonome"] for t in client.get("/turnos").json()] == ["Manhã"]
    assert [s["setornome"] for s in client.get("/setores").json()] == ["Geral"]
    familias = client.get("/familias").json()
    assert [(f["familianome"], f["sigla"]) for f in familias] == [("Padrão", "PAD")]


def test_uow_rolls_back_on_error(client):
    with pytest.raises(RuntimeError):
        with uow(label="teste") as db:
            db.add(Turno(turnonome="Noite"))
            db.flush()
            raise RuntimeError("aborta")

    assert [t["turnonome"] for t in client.get("/turnos").json()] == ["Manhã"]


def test_uow_keeps_borrowed_session_open(client):
    db = SessionLocal()
    try:
        with uow(db) as same:
            same.add(Setor(setornome="Prensa"))
        assert db.query(Setor).count() == 2
    finally:
        db.close()
