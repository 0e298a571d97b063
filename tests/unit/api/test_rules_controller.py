"""Testes do controlador de regras."""

from unittest.mock import Mock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.rules_controller import ControladorRegras, obter_servico_regras
from src.domain.academic import RegraAvaliacao


def _cliente(servico=None):
    aplicacao = FastAPI()
    controlador = ControladorRegras()
    if servico is not None:
        aplicacao.dependency_overrides[obter_servico_regras] = lambda: servico
    aplicacao.include_router(controlador.roteador, prefix="/api/v1")
    return TestClient(aplicacao)


def test_resolver_regra():
    servico = Mock()
    servico.resolver_regra.return_value = RegraAvaliacao(id=2, name="Regra 5º Ano")

    resposta = _cliente(servico).get("/api/v1/rules/resolve", params={"course_id": 20, "grade_id": 5})

    assert resposta.status_code == 200
    assert resposta.json()["name"] == "Regra 5º Ano"
    servico.resolver_regra.assert_called_once_with(20, 5)


def test_resolver_regra_inexistente():
    servico = Mock()
    servico.resolver_regra.return_value = None

    resposta = _cliente(servico).get("/api/v1/rules/resolve", params={"course_id": 20})

    assert resposta.status_code == 200
    assert resposta.json() is None


def test_situacao_e_aprovacao():
    cliente = _cliente()

    situacao = cliente.post("/api/v1/rules/situation", json={"final_grade": 9.0, "attendance_rate": 60.0})
    aprovacao = cliente.post("/api/v1/rules/approval", json={"average": 6.5, "attendance_rate": 90.0})

    assert situacao.json() == {"situation": "Reprovado"}
    assert aprovacao.json()["message"] == "Reprovado por nota (6.5 < 7)"


def test_situacao_rejeita_nota_fora_da_escala():
    resposta = _cliente().post("/api/v1/rules/situation", json={"final_grade": 11})

    assert resposta.status_code == 422


def test_formula_e_pesos_padrao():
    cliente = _cliente()

    formula = cliente.post("/api/v1/rules/formula", json={"rule": {"periods_per_year": 2, "academic_period_type": "Semestre"}})
    pesos = cliente.get("/api/v1/rules/default-weights", params={"periods_per_year": 3, "calculation_type": "Media_Ponderada"})

    assert formula.json() == {"formula": "Média Simples: (1º Sem. + 2º Sem.) / 2"}
    assert pesos.json()["weights"] == [2, 3, 3]
    assert pesos.json()["divisor"] == 8
    assert cliente.get("/api/v1/rules/default-weights", params={"periods_per_year": 0}).status_code == 400
