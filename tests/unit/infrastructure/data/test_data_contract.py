"""Testes do contrato das tabelas escolares."""

from unittest.mock import Mock

import pandas as pd
import pytest

from src.infrastructure.data.data_contract import CONTRATOS, ContratoDataFrame


def test_contrato_aceita_tabela_vazia_com_colunas():
    dados = pd.DataFrame(columns=["class_id", "subject_id"])

    validado = CONTRATOS["disciplinas_turma"].validar(dados)

    assert validado.empty


def test_contrato_falha_sem_colunas_obrigatorias():
    with pytest.raises(ValueError, match="colunas obrigatórias ausentes"):
        CONTRATOS["matriculas"].validar(pd.DataFrame({"id": [1]}))


def test_contrato_falha_com_tabela_nula():
    with pytest.raises(ValueError):
        ContratoDataFrame("x", ["id"]).validar(None)


def test_contrato_converte_numericos_e_avisa(monkeypatch):
    aviso = Mock()
    monkeypatch.setattr("src.infrastructure.data.data_contract.logger", aviso)
    dados = pd.DataFrame(
        {
            "student_id": ["1", "2"],
            "class_id": [100, 100],
            "subject_id": [10, 10],
            "period_id": [1, 1],
            "evaluation_type": ["Regular", "Regular"],
            "grade_value": ["8.5", "abc"],
        }
    )

    validado = CONTRATOS["avaliacoes"].validar(dados)

    assert validado["student_id"].tolist() == [1, 2]
    assert validado["grade_value"].iloc[0] == 8.5
    assert pd.isna(validado["grade_value"].iloc[1])
    aviso.warning.assert_called_once()
    assert dados["grade_value"].tolist() == ["8.5", "abc"]


def test_contrato_mantem_ausentes_em_colunas_texto():
    dados = pd.DataFrame({"student_enrollment_id": [1, 2], "subject_id": [10, 10], "status": [" Presente ", None]})

    validado = CONTRATOS["frequencias"].validar(dados)

    assert validado["status"].iloc[0] == "Presente"
    assert pd.isna(validado["status"].iloc[1])
