"""Agregação de notas do boletim.

Responsabilidades:
- Ordenar períodos letivos pelo número do nome
- Calcular nota regular, de recuperação e final de cada período
- Calcular média final e situação de cada disciplina
"""

from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.application.evaluation_rules_service import ServicoRegrasAvaliacao
from src.domain.academic import (
    DisciplinaRef,
    FrequenciaDisciplina,
    NotaPeriodo,
    PeriodoLetivo,
    RegistroAvaliacao,
    RegraAvaliacao,
    ResumoDisciplina,
    TipoAvaliacao,
)

COLUNAS_AVALIACAO = ["student_id", "subject_id", "period_id", "evaluation_type", "grade_value"]


class AgregadorNotas:
    """Agrega registros de avaliação em notas por período e por disciplina.

    Responsabilidades:
    - Separar avaliações regulares e de recuperação
    - Aplicar a recuperação apenas quando ela aumenta a nota
    - Delegar a média final à regra de avaliação
    """

    @staticmethod
    def ordenar_periodos(periodos: Iterable[PeriodoLetivo]) -> List[PeriodoLetivo]:
        """Ordena períodos pelo número no nome; nomes sem número vão para o fim."""
        return sorted(periodos, key=lambda periodo: periodo.ordem)

    @staticmethod
    def calcular_notas_disciplinas(
        periodos: List[PeriodoLetivo],
        avaliacoes: List[RegistroAvaliacao],
        regra: Optional[RegraAvaliacao] = None,
        disciplinas: Optional[List[DisciplinaRef]] = None,
        frequencias: Optional[List[FrequenciaDisciplina]] = None,
    ) -> List[ResumoDisciplina]:
        """Calcula o resumo de notas de cada disciplina.

        Parâmetros:
        - periodos (list[PeriodoLetivo]): períodos do ano letivo
        - avaliacoes (list[RegistroAvaliacao]): notas do aluno
        - regra (RegraAvaliacao | None): regra de avaliação da turma
        - disciplinas (list[DisciplinaRef] | None): disciplinas da turma;
          quando omitido, usa as disciplinas presentes nas avaliações
        - frequencias (list[FrequenciaDisciplina] | None): frequência por disciplina

        Retorno:
        - list[ResumoDisciplina]: um resumo por disciplina
        """
        periodos_ordenados = AgregadorNotas.ordenar_periodos(periodos)
        dados = AgregadorNotas._montar_dataframe(avaliacoes)

        if disciplinas is None:
            disciplinas = [DisciplinaRef(subject_id=int(s)) for s in dados["subject_id"].drop_duplicates()]

        taxas: Optional[Dict[int, float]] = None
        if frequencias is not None:
            taxas = {f.subject_id: f.attendance_rate for f in frequencias}

        resumos = []
        for disciplina in disciplinas:
            dados_disciplina = dados[dados["subject_id"] == disciplina.subject_id]
            notas_periodos = [
                AgregadorNotas.calcular_nota_periodo(
                    dados_disciplina[dados_disciplina["period_id"] == periodo.id], periodo, posicao
                )
                for posicao, periodo in enumerate(periodos_ordenados, start=1)
            ]

            media_final = ServicoRegrasAvaliacao.calcular_media_final(
                [nota.final_grade for nota in notas_periodos], regra
            )
            taxa = taxas.get(disciplina.subject_id, 0.0) if taxas is not None else None

            resumos.append(
                ResumoDisciplina(
                    subject_id=disciplina.subject_id,
                    subject_name=disciplina.subject_name,
                    period_grades=notas_periodos,
                    final_average=media_final,
                    attendance_rate=taxa or 0.0,
                    situation=ServicoRegrasAvaliacao.classificar_situacao(media_final, taxa, regra),
                )
            )

        return resumos

    @staticmethod
    def calcular_nota_periodo(dados_periodo: pd.DataFrame, periodo: PeriodoLetivo, posicao: int) -> NotaPeriodo:
        """Calcula as notas de uma disciplina em um período.

        Parâmetros:
        - dados_periodo (pd.DataFrame): avaliações da disciplina no período
        - periodo (PeriodoLetivo): período avaliado
        - posicao (int): posição do período após ordenação (1-based)

        Retorno:
        - NotaPeriodo: nota regular (média), de recuperação (maior) e final
        """
        eh_recuperacao = dados_periodo["evaluation_type"] == TipoAvaliacao.RECUPERACAO.value
        regulares = dados_periodo.loc[~eh_recuperacao, "grade_value"]
        recuperacoes = dados_periodo.loc[eh_recuperacao, "grade_value"]

        nota_regular = float(regulares.mean()) if not regulares.empty else None
        nota_recuperacao = float(recuperacoes.max()) if not recuperacoes.empty else None

        nota_final = None
        if nota_regular is not None or nota_recuperacao is not None:
            nota_final = max(nota_regular or 0.0, nota_recuperacao or 0.0)

        return NotaPeriodo(
            period_id=periodo.id,
            period_name=periodo.name,
            period_order=posicao,
            regular_grade=nota_regular,
            recovery_grade=nota_recuperacao,
            final_grade=nota_final,
        )

    @staticmethod
    def _montar_dataframe(avaliacoes: List[RegistroAvaliacao]) -> pd.DataFrame:
        dados = pd.DataFrame([a.model_dump() for a in avaliacoes], columns=COLUNAS_AVALIACAO)
        dados["grade_value"] = pd.to_numeric(dados["grade_value"], errors="coerce").fillna(0.0)
        return dados
