"""Fixtures compartilhadas para os testes."""

import shutil
import sys
from pathlib import Path

import pytest


RAIZ = Path(__file__).resolve().parents[2]
DIRETORIO_APP = RAIZ / "app"
if str(DIRETORIO_APP) not in sys.path:
    sys.path.insert(0, str(DIRETORIO_APP))

from src.domain.academic import DisciplinaRef, PeriodoLetivo, RegraAvaliacao  # noqa: E402


@pytest.fixture()
def periodos_bimestrais():
    """Quatro bimestres fora de ordem, como vêm da fonte de dados."""
    return [
        PeriodoLetivo(id=3, name="3º Bimestre"),
        PeriodoLetivo(id=1, name="1º Bimestre"),
        PeriodoLetivo(id=4, name="4º Bimestre"),
        PeriodoLetivo(id=2, name="2º Bimestre"),
    ]


@pytest.fixture()
def disciplinas_turma():
    return [
        DisciplinaRef(subject_id=10, subject_name="Matemática"),
        DisciplinaRef(subject_id=20, subject_name="Língua Portuguesa"),
    ]


@pytest.fixture()
def regra_ponderada():
    """Regra de bimestres com pesos 1, 1, 2, 2 e divisor 6."""
    return RegraAvaliacao(
        name="Regra 5º Ano",
        calculation_type="Media_Ponderada",
        period_weights={"weights": [1, 1, 2, 2], "divisor": 6},
    )


@pytest.fixture()
def diretorio_dados(tmp_path, monkeypatch):
    """Copia as tabelas de exemplo para um diretório temporário e reinicia o repositório."""
    from src.infrastructure.data.school_repository import RepositorioEscolar

    destino = tmp_path / "data"
    shutil.copytree(DIRETORIO_APP / "data", destino)
    monkeypatch.setattr("src.config.settings.Configuracoes.DATA_DIR", str(destino))
    monkeypatch.setattr("src.config.settings.Configuracoes.ERROR_LOG_PATH", str(tmp_path / "logs" / "errors.jsonl"))
    RepositorioEscolar._instancia = None
    yield destino
    RepositorioEscolar._instancia = None


@pytest.fixture()
def log_erros_temporario(tmp_path, monkeypatch):
    caminho = tmp_path / "logs" / "errors.jsonl"
    monkeypatch.setattr("src.config.settings.Configuracoes.ERROR_LOG_PATH", str(caminho))
    return caminho
