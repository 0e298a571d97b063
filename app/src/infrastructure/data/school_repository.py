"""Repositório de dados escolares.

Responsabilidades:
- Carregar as tabelas escolares (CSV) sob demanda
- Validar cada tabela contra seu contrato
- Normalizar linhas em modelos de domínio
"""

import json
import os
import threading
from typing import Dict, List, Optional

import pandas as pd
from pydantic import ValidationError

from src.config.settings import Configuracoes
from src.domain.academic import (
    DisciplinaRef,
    PeriodoLetivo,
    RegistroAvaliacao,
    RegistroFrequencia,
    RegraAvaliacao,
)
from src.infrastructure.data.data_contract import CONTRATOS
from src.util.logger import FabricaLogger

logger = FabricaLogger.obter("repositorio")


def _registros(df: pd.DataFrame) -> List[dict]:
    """Converte linhas em dicts trocando NaN por None."""
    return df.astype(object).where(pd.notna(df), None).to_dict("records")


def _primeiro(df: pd.DataFrame) -> Optional[dict]:
    registros = _registros(df.head(1))
    return registros[0] if registros else None


class RepositorioEscolar:
    """Repositório singleton das tabelas escolares.

    Responsabilidades:
    - Manter tabelas carregadas em memória
    - Recarregar quando necessário
    - Entregar modelos de domínio às camadas superiores
    """

    _instancia = None
    _lock = threading.Lock()

    def __new__(cls):
        """Cria ou reutiliza a instância única.

        Retorno:
        - RepositorioEscolar: instância singleton
        """
        if cls._instancia is None:
            with cls._lock:
                if cls._instancia is None:
                    cls._instancia = super(RepositorioEscolar, cls).__new__(cls)
                    cls._instancia._tabelas = {}
        return cls._instancia

    def recarregar(self) -> None:
        """Descarta as tabelas em memória; a próxima consulta lê os arquivos novamente."""
        with self._lock:
            self._tabelas = {}
        logger.info("Tabelas escolares descartadas para recarga.")

    def _tabela(self, nome: str) -> pd.DataFrame:
        """Lê e valida uma tabela, usando o cache quando disponível.

        Exceções:
        - RuntimeError: quando o arquivo não existe ou viola o contrato
        """
        with self._lock:
            if nome in self._tabelas:
                return self._tabelas[nome]

            caminho = os.path.join(Configuracoes.DATA_DIR, Configuracoes.TABELAS[nome])
            if not os.path.exists(caminho):
                raise RuntimeError(f"Tabela '{nome}' não encontrada em {caminho}")

            try:
                dados = CONTRATOS[nome].validar(pd.read_csv(caminho))
            except (ValueError, pd.errors.ParserError) as erro:
                raise RuntimeError(f"Falha ao carregar tabela '{nome}': {erro}") from erro

            self._tabelas[nome] = dados
            logger.info(f"Tabela '{nome}' carregada com {len(dados)} registros.")
            return dados

    def obter_regras(self) -> List[RegraAvaliacao]:
        """Regras de avaliação; linhas inválidas são ignoradas com aviso."""
        regras = []
        for linha in _registros(self._tabela("regras")):
            pesos = linha.get("period_weights")
            if isinstance(pesos, str):
                try:
                    linha["period_weights"] = json.loads(pesos)
                except json.JSONDecodeError:
                    logger.warning(f"Regra {linha.get('id')} com period_weights inválido; ignorando pesos.")
                    linha["period_weights"] = None
            dados_regra = {chave: valor for chave, valor in linha.items() if valor is not None}
            try:
                regras.append(RegraAvaliacao(**dados_regra))
            except ValidationError as erro:
                logger.warning(f"Regra {linha.get('id')} ignorada: {erro.errors()[0]['msg']}")
        return regras

    def obter_curso(self, course_id: int) -> Optional[dict]:
        cursos = self._tabela("cursos")
        return _primeiro(cursos[cursos["id"] == course_id])

    def obter_turma(self, class_id: int) -> Optional[dict]:
        turmas = self._tabela("turmas")
        return _primeiro(turmas[turmas["id"] == class_id])

    def obter_periodos(self, academic_year_id: int) -> List[PeriodoLetivo]:
        periodos = self._tabela("periodos")
        selecionados = periodos[periodos["academic_year_id"] == academic_year_id]
        return [PeriodoLetivo(**linha) for linha in _registros(selecionados)]

    def obter_disciplinas_turma(self, class_id: int) -> List[DisciplinaRef]:
        disciplinas = self._tabela("disciplinas_turma")
        selecionadas = disciplinas[disciplinas["class_id"] == class_id]
        return [DisciplinaRef(**linha) for linha in _registros(selecionadas)]

    def obter_avaliacoes(self, student_id: int, class_id: Optional[int] = None) -> List[RegistroAvaliacao]:
        avaliacoes = self._tabela("avaliacoes")
        filtro = avaliacoes["student_id"] == student_id
        if class_id is not None:
            filtro &= avaliacoes["class_id"] == class_id
        return [RegistroAvaliacao(**linha) for linha in _registros(avaliacoes[filtro])]

    def _matriculas_ativas(self, class_id: int) -> pd.DataFrame:
        matriculas = self._tabela("matriculas")
        return matriculas[
            (matriculas["class_id"] == class_id) & (matriculas["status"] == Configuracoes.ENROLLMENT_ACTIVE_STATUS)
        ]

    def obter_matricula(self, student_id: int, class_id: int) -> Optional[dict]:
        ativas = self._matriculas_ativas(class_id)
        return _primeiro(ativas[ativas["student_id"] == student_id])

    def obter_frequencias(self, enrollment_id: int) -> List[RegistroFrequencia]:
        frequencias = self._tabela("frequencias")
        selecionadas = frequencias[frequencias["student_enrollment_id"] == enrollment_id]
        return [RegistroFrequencia(**linha) for linha in _registros(selecionadas)]

    def obter_frequencias_por_aluno(self, class_id: int) -> Dict[str, List[RegistroFrequencia]]:
        """Presenças da turma agrupadas pelo aluno de cada matrícula ativa."""
        da_turma = self._matriculas_ativas(class_id)
        frequencias = self._tabela("frequencias")

        agrupadas = {}
        for linha in _registros(da_turma):
            selecionadas = frequencias[frequencias["student_enrollment_id"] == linha["id"]]
            agrupadas[str(linha["student_id"])] = [RegistroFrequencia(**r) for r in _registros(selecionadas)]
        return agrupadas
