"""Validação de contrato das tabelas escolares.

Responsabilidades:
- Validar presença de colunas obrigatórias
- Converter colunas numéricas
- Falhar explicitamente se contrato for violado
"""

from typing import Dict, List

import pandas as pd

from src.util.logger import logger


class ContratoDataFrame:
    """Define e valida contrato de dados para DataFrames.

    Responsabilidades:
    - Especificar colunas obrigatórias
    - Converter tipos esperados
    - Falhar com mensagem clara se violado
    """

    def __init__(self, nome: str, colunas_obrigatorias: List[str], tipos_esperados: Dict[str, type] = None):
        """Inicializa o contrato.

        Parâmetros:
        - nome (str): nome da tabela, usado nas mensagens
        - colunas_obrigatorias (list): colunas que devem estar presentes
        - tipos_esperados (dict): mapeamento coluna -> tipo esperado
        """
        self.nome = nome
        self.colunas_obrigatorias = colunas_obrigatorias
        self.tipos_esperados = tipos_esperados or {}

    def validar(self, df: pd.DataFrame) -> pd.DataFrame:
        """Valida o DataFrame contra o contrato.

        Parâmetros:
        - df (pd.DataFrame): tabela lida da fonte de dados

        Retorno:
        - pd.DataFrame: tabela com tipos convertidos

        Exceções:
        - ValueError: quando contrato é violado
        """
        if df is None:
            raise ValueError(f"Tabela '{self.nome}' nula. Impossível validar contrato.")

        colunas_faltantes = [c for c in self.colunas_obrigatorias if c not in df.columns]
        if colunas_faltantes:
            raise ValueError(
                f"Contrato de dados violado em '{self.nome}': colunas obrigatórias ausentes: {colunas_faltantes}. "
                f"Colunas disponíveis: {list(df.columns)}"
            )

        df = df.copy()
        for coluna, tipo_esperado in self.tipos_esperados.items():
            if coluna not in df.columns:
                continue
            if tipo_esperado is str:
                df[coluna] = df[coluna].where(df[coluna].isna(), df[coluna].astype(str).str.strip())
                continue

            convertida = pd.to_numeric(df[coluna], errors="coerce")
            invalidos = int(convertida.isna().sum() - df[coluna].isna().sum())
            if invalidos > 0:
                logger.warning(
                    f"Coluna '{coluna}' de '{self.nome}' contém {invalidos} valor(es) não numérico(s); "
                    f"serão tratados como ausentes."
                )
            df[coluna] = convertida

        logger.info(f"Contrato de '{self.nome}' validado com sucesso. {len(df)} registros.")
        return df


CONTRATOS = {
    "periodos": ContratoDataFrame(
        "periodos",
        colunas_obrigatorias=["id", "academic_year_id", "name"],
        tipos_esperados={"id": int, "academic_year_id": int, "name": str},
    ),
    "avaliacoes": ContratoDataFrame(
        "avaliacoes",
        colunas_obrigatorias=["student_id", "class_id", "subject_id", "period_id", "evaluation_type", "grade_value"],
        tipos_esperados={"student_id": int, "class_id": int, "subject_id": int, "period_id": int, "grade_value": float},
    ),
    "frequencias": ContratoDataFrame(
        "frequencias",
        colunas_obrigatorias=["student_enrollment_id", "subject_id", "status"],
        tipos_esperados={"student_enrollment_id": int, "subject_id": int, "status": str},
    ),
    "regras": ContratoDataFrame(
        "regras",
        colunas_obrigatorias=["id", "name", "course_id", "education_grade_id", "calculation_type"],
        tipos_esperados={"id": int, "course_id": int, "education_grade_id": int},
    ),
    "disciplinas_turma": ContratoDataFrame(
        "disciplinas_turma",
        colunas_obrigatorias=["class_id", "subject_id"],
        tipos_esperados={"class_id": int, "subject_id": int},
    ),
    "turmas": ContratoDataFrame(
        "turmas",
        colunas_obrigatorias=["id", "course_id", "academic_year_id"],
        tipos_esperados={"id": int, "course_id": int, "education_grade_id": int, "academic_year_id": int},
    ),
    "cursos": ContratoDataFrame(
        "cursos",
        colunas_obrigatorias=["id", "name", "education_level"],
        tipos_esperados={"id": int},
    ),
    "matriculas": ContratoDataFrame(
        "matriculas",
        colunas_obrigatorias=["id", "student_id", "class_id", "status"],
        tipos_esperados={"id": int, "student_id": int, "class_id": int, "status": str},
    ),
}
