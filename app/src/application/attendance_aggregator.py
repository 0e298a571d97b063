"""Agregação de frequência do aluno.

Responsabilidades:
- Contar presenças, faltas e faltas justificadas por disciplina
- Calcular taxa de frequência por disciplina e geral
- Identificar alunos com frequência abaixo do mínimo
"""

from typing import Dict, List, Optional

import pandas as pd

from src.config.settings import Configuracoes
from src.domain.academic import (
    DisciplinaRef,
    FrequenciaDisciplina,
    FrequenciaGeral,
    RegistroFrequencia,
    StatusFrequencia,
)
from src.util.logger import logger
from src.util.rounding import arredondar

COLUNAS_FREQUENCIA = ["student_enrollment_id", "subject_id", "lesson_id", "status"]


def calcular_taxa(presentes: int, justificados: int, total: int) -> float:
    """Taxa de frequência em % com uma casa decimal; faltas justificadas contam como presença."""
    if total <= 0:
        return 0.0
    return arredondar((presentes + justificados) / total * 100, 1)


class AgregadorFrequencia:
    """Agrega registros de presença por disciplina.

    Responsabilidades:
    - Classificar status de presença
    - Somar contagens e calcular taxas
    - Devolver linhas zeradas quando não há matrícula
    """

    @staticmethod
    def calcular_frequencia(
        disciplinas: List[DisciplinaRef],
        registros: List[RegistroFrequencia],
        matricula_id: Optional[int],
    ) -> dict:
        """Calcula a frequência por disciplina e a frequência geral.

        Sem matrícula informada, usa a matrícula comum a todos os registros
        (ou nenhuma, quando nenhum registro traz matrícula).

        Parâmetros:
        - disciplinas (list[DisciplinaRef]): disciplinas da turma
        - registros (list[RegistroFrequencia]): presenças do aluno
        - matricula_id (int | None): matrícula do aluno

        Retorno:
        - dict: {"per_subject": list[FrequenciaDisciplina], "overall": FrequenciaGeral}
        """
        if matricula_id is None:
            matriculas = {r.student_enrollment_id for r in registros}
            if len(matriculas) != 1:
                logger.warning("Matrícula do aluno não encontrada; retornando frequência zerada.")
                return {
                    "per_subject": [
                        FrequenciaDisciplina(subject_id=d.subject_id, subject_name=d.subject_name)
                        for d in disciplinas
                    ],
                    "overall": FrequenciaGeral(),
                }
            matricula_id = matriculas.pop()

        dados = pd.DataFrame([r.model_dump() for r in registros], columns=COLUNAS_FREQUENCIA)
        if matricula_id is not None:
            dados = dados[dados["student_enrollment_id"].isna() | (dados["student_enrollment_id"] == matricula_id)]

        por_disciplina = []
        for disciplina in disciplinas:
            status = dados.loc[dados["subject_id"] == disciplina.subject_id, "status"]
            contagem = AgregadorFrequencia._contar_status(status)
            por_disciplina.append(
                FrequenciaDisciplina(
                    subject_id=disciplina.subject_id,
                    subject_name=disciplina.subject_name,
                    total_classes=contagem["total"],
                    present=contagem["present"],
                    absent=contagem["absent"],
                    justified=contagem["justified"],
                    attendance_rate=calcular_taxa(contagem["present"], contagem["justified"], contagem["total"]),
                )
            )

        return {"per_subject": por_disciplina, "overall": AgregadorFrequencia.consolidar(por_disciplina)}

    @staticmethod
    def consolidar(por_disciplina: List[FrequenciaDisciplina]) -> FrequenciaGeral:
        """Soma as contagens das disciplinas em uma frequência geral."""
        presentes = sum(f.present for f in por_disciplina)
        faltas = sum(f.absent for f in por_disciplina)
        justificadas = sum(f.justified for f in por_disciplina)
        total = sum(f.total_classes for f in por_disciplina)
        return FrequenciaGeral(
            total_classes=total,
            present=presentes,
            absent=faltas,
            justified=justificadas,
            rate=calcular_taxa(presentes, justificadas, total),
        )

    @staticmethod
    def alunos_frequencia_baixa(
        registros_por_aluno: Dict[str, List[RegistroFrequencia]],
        minimo: Optional[float] = None,
    ) -> List[dict]:
        """Lista alunos com frequência geral abaixo do mínimo, da menor para a maior.

        Parâmetros:
        - registros_por_aluno (dict): identificador do aluno -> presenças
        - minimo (float | None): frequência mínima; usa o padrão configurado

        Retorno:
        - list[dict]: student_id, contagens e attendance_rate de cada aluno abaixo do mínimo
        """
        limite = Configuracoes.DEFAULT_MIN_ATTENDANCE_PERCENT if minimo is None else minimo
        abaixo = []
        for aluno, registros in registros_por_aluno.items():
            status = pd.Series([r.status for r in registros], dtype=object)
            contagem = AgregadorFrequencia._contar_status(status)
            taxa = calcular_taxa(contagem["present"], contagem["justified"], contagem["total"])
            if taxa < limite:
                abaixo.append(
                    {
                        "student_id": aluno,
                        "total_classes": contagem["total"],
                        "present": contagem["present"],
                        "absent": contagem["absent"],
                        "justified": contagem["justified"],
                        "attendance_rate": taxa,
                    }
                )
        return sorted(abaixo, key=lambda item: item["attendance_rate"])

    @staticmethod
    def status_frequencia(taxa: float) -> str:
        """Status exibido no relatório de frequência da turma."""
        return "Adequado" if taxa >= Configuracoes.ATTENDANCE_ADEQUATE_RATE else "Atenção"

    @staticmethod
    def _contar_status(status: pd.Series) -> dict:
        presentes = int(status.isin(StatusFrequencia.PRESENTE).sum())
        faltas = int(status.isin(StatusFrequencia.AUSENTE).sum())
        justificadas = int(status.isin(StatusFrequencia.JUSTIFICADO).sum())
        return {
            "present": presentes,
            "absent": faltas,
            "justified": justificadas,
            "total": presentes + faltas + justificadas,
        }
