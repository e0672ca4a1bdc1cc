import pytest


def test_stats_on_empty_facts(client):
    stats = client.get("/dashboard-stats").json()
    assert stats["totalProdutos"] == 1
    assert stats["totalProducaoM3"] == 0
    assert stats["totalDescarteChapas"] == 0
    assert stats["eficiencia"] == 0
    assert stats["producaoPorTurno"] == [{"turnonome": "Manhã", "total": 0}]
    assert stats["evolucaoProducao"] == []


def test_efficiency_and_totals(client, ids, make_producao):
    make_producao(data="2025-03-10", chapas=60)
    make_producao(data="2025-03-11", chapas=40)
    client.post("/descarte", json={
        "Data": "2025-03-11", "TurnoID": ids["turno"], "SetorID": ids["setor"],
        "ProdutoID": ids["produto"], "Quantidade_Chapas": 20,
    })

    stats = client.get("/dashboard-stats").json()
    unitaria = 2.5 * 1.25 * 0.015
    assert stats["eficiencia"] == 80.0
    assert stats["totalDescarteChapas"] == 20
    assert stats["totalProducaoM3"] == pytest.approx(unitaria * 100)
    assert stats["producaoPorTurno"][0]["total"] == pytest.approx(unitaria * 100)
    assert [d["data"] for d in stats["evolucaoProducao"]] == ["2025-03-11", "2025-03-10"]
    assert stats["evolucaoProducao"][0]["total"] == pytest.approx(unitaria * 40)


def test_daily_series_keeps_latest_14_dates(client, make_producao):
    for day in range(1, 17):
        make_producao(data=f"2025-01-{day:02d}", chapas=1)
    make_producao(data="2025-01-16", chapas=1)

    serie = client.get("/dashboard-stats").json()["evolucaoProducao"]
    assert len(serie) == 14
    assert serie[0]["data"] == "2025-01-16"
    assert serie[-1]["data"] == "2025-01-03"
    assert serie[0]["total"] == pytest.approx(2 * serie[1]["total"])
