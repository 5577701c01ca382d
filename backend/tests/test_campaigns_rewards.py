"""
Testes das campanhas e das recompensas (/api/campanhas, /api/recompensas).
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from ponto.models.reward import Reward
from ponto.models.user import ROLE_GESTOR
from ponto.schemas.reward import RewardItem
from ponto.services import reward_service

from conftest import login, make_user


def login_gestor(api, db):
    make_user(db, nome="Gestora", email="gestora@empresa.com", papel=ROLE_GESTOR)
    login(api, email="gestora@empresa.com")


# ============================================================
# Campanhas
# ============================================================

def test_listar_campanhas_vazio(api):
    response = api.get("/api/campanhas")

    assert response.status_code == 200
    assert response.json() == []


def test_gestor_cria_campanha(api, db):
    login_gestor(api, db)

    response = api.post("/api/campanhas", json={
        "tipo": "pesquisa",
        "titulo": "Clima organizacional",
        "perguntas": ["Como está o ambiente?", "  ", "O que melhorar?"],
    })

    assert response.status_code == 201
    body = response.json()
    assert body["titulo"] == "Clima organizacional"
    assert body["perguntas"] == ["Como está o ambiente?", "O que melhorar?"]

    listed = api.get("/api/campanhas").json()
    assert [c["id"] for c in listed] == [body["id"]]
    assert listed[0]["perguntas"] == ["Como está o ambiente?", "O que melhorar?"]


def test_campanha_sem_perguntas(api, db):
    login_gestor(api, db)

    response = api.post("/api/campanhas", json={"tipo": "pesquisa", "titulo": "X", "perguntas": []})

    assert response.status_code == 400
    assert response.json()["mensagem"] == "A campanha deve ter ao menos uma pergunta."


def test_campanha_sem_titulo(api, db):
    login_gestor(api, db)

    response = api.post("/api/campanhas", json={"tipo": "pesquisa", "perguntas": ["P1"]})

    assert response.status_code == 400
    assert response.json()["mensagem"] == "Dados incompletos: o campo 'titulo' é obrigatório."


def test_colaborador_nao_cria_campanha(api, db):
    make_user(db, email="ana@empresa.com")
    login(api, email="ana@empresa.com")

    response = api.post("/api/campanhas", json={"tipo": "quiz", "titulo": "X", "perguntas": ["P1"]})

    assert response.status_code == 403


# ============================================================
# Recompensas
# ============================================================

def test_substituir_recompensas(api, db):
    login_gestor(api, db)
    api.put("/api/recompensas", json=[{"nome": "Caneca", "quantidade": 3}])

    response = api.put("/api/recompensas", json=[
        {"nome": "Camiseta", "quantidade": 10},
        {"nome": "Folga", "quantidade": 1},
    ])

    assert response.status_code == 200
    assert [(r["nome"], r["quantidade"]) for r in response.json()] == [("Camiseta", 10), ("Folga", 1)]
    assert [r["nome"] for r in api.get("/api/recompensas").json()] == ["Camiseta", "Folga"]


def test_recompensa_quantidade_negativa(api, db):
    login_gestor(api, db)
    api.put("/api/recompensas", json=[{"nome": "Caneca", "quantidade": 3}])

    response = api.put("/api/recompensas", json=[
        {"nome": "Camiseta", "quantidade": 10},
        {"nome": "Folga", "quantidade": -1},
    ])

    assert response.status_code == 400
    assert response.json()["mensagem"] == "A quantidade não pode ser negativa."
    assert [r["nome"] for r in api.get("/api/recompensas").json()] == ["Caneca"]


def test_substituicao_falha_mantem_lista_anterior(db):
    """Falha no meio da substituição → rollback, a lista antiga permanece."""
    reward_service.replace_rewards(db, [RewardItem(nome="Caneca", quantidade=3)])
    db.commit = MagicMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error")))

    with pytest.raises(OperationalError):
        reward_service.replace_rewards(db, [RewardItem(nome="Camiseta", quantidade=1)])

    del db.commit

    assert [r.nome for r in db.query(Reward).all()] == ["Caneca"]


def test_colaborador_nao_altera_recompensas(api, db):
    make_user(db, email="ana@empresa.com")
    login(api, email="ana@empresa.com")

    response = api.put("/api/recompensas", json=[{"nome": "Caneca", "quantidade": 3}])

    assert response.status_code == 403
