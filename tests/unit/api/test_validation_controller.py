"""Testes do controlador de validações."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.validation_controller import ControladorValidacao


def _cliente():
    aplicacao = FastAPI()
    aplicacao.include_router(ControladorValidacao().roteador, prefix="/api/v1")
    return TestClient(aplicacao)


def test_validar_documentos():
    cliente = _cliente()

    cpf = cliente.post("/api/v1/validations/cpf", json={"value": "52998224725"})
    cnpj = cliente.post("/api/v1/validations/cnpj", json={"value": "11222333000181"})
    documento = cliente.post("/api/v1/validations/document", json={"value": "111.111.111-11"})

    assert cpf.json()["formatted"] == "529.982.247-25"
    assert cnpj.json()["valid"] is True
    assert documento.status_code == 200
    assert documento.json()["valid"] is False


def test_validar_codigos_inep():
    cliente = _cliente()

    assert cliente.post("/api/v1/validations/inep/school", json={"code": "12345678"}).json()["valid"] is True
    assert cliente.post("/api/v1/validations/inep/etapa", json={"code": "5"}).json()["description"] == "Ensino Médio"
    assert cliente.post("/api/v1/validations/inep/modalidade", json={"code": "01"}).json()["description"] == "Regular"
    assert cliente.post("/api/v1/validations/inep/regime", json={"code": "09"}).json()["valid"] is False


def test_validar_idade_serie():
    payload = {"birth_date": "2018-04-01", "grade": 1, "reference_date": "2024-02-01"}

    resposta = _cliente().post("/api/v1/validations/age-grade", json=payload)

    assert resposta.json()["age"] == 5
    assert resposta.json()["valid"] is False
    assert resposta.json()["distortion"] == "medium"


def test_validar_matricula():
    payload = {
        "enrollment": {"student_id": "s1", "school_id": "e1", "academic_year_id": "a2024", "classroom_id": "t1"},
        "existing_enrollments": [
            {"id": "m1", "student_id": "s1", "school_id": "e2", "academic_year_id": "a2023", "status": "Cursando"}
        ],
        "schools": [
            {
                "id": "e1",
                "academic_years": [
                    {
                        "id": "a2024",
                        "start_date": "2024-02-01",
                        "end_date": "2024-12-15",
                        "turmas": [{"id": "t1", "school_id": "e1"}],
                    }
                ],
            }
        ],
    }

    resposta = _cliente().post("/api/v1/validations/enrollment", json=payload)

    assert resposta.status_code == 200
    assert resposta.json()["valid"] is False
    assert resposta.json()["errors"][0].startswith("Aluno possui matrícula ativa em outra escola.")


def test_validar_datas():
    cliente = _cliente()

    data = cliente.post("/api/v1/validations/date", json={"value": "31/12/1899", "not_too_old": True})
    periodo = cliente.post("/api/v1/validations/academic-period", json={"start_date": "01/02/2024", "end_date": "15/12/2024"})

    assert data.json()["error"] == "Data muito antiga (antes de 1900)"
    assert periodo.json()["valid"] is True


def test_validar_campos_obrigatorios():
    cliente = _cliente()

    etapa = cliente.post("/api/v1/validations/required-fields/etapa-ensino", json={"name": "Ensino Médio"})
    turma = cliente.post(
        "/api/v1/validations/required-fields/classroom",
        params={"multisserie": True},
        json={"name": "Multi", "shift": "Manhã", "etapa_ensino_id": "ef1", "school_id": "e1", "year_id": "a2024"},
    )
    desconhecida = cliente.post("/api/v1/validations/required-fields/bus", json={})

    assert etapa.json()["missing_fields"] == ["codigo_censo"]
    assert turma.json()["valid"] is True
    assert desconhecida.status_code == 404
