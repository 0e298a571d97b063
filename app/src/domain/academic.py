"""Modelos de domínio do boletim escolar.

Responsabilidades:
- Representar registros de avaliação e frequência vindos da fonte de dados
- Representar períodos letivos e regras de avaliação
- Representar os resumos derivados (notas por período, frequência)
"""

import re
from datetime import date
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.config.settings import Configuracoes


class TipoAvaliacao(str, Enum):
    """Tipos de instância de avaliação."""

    REGULAR = "Regular"
    RECUPERACAO = "Recuperacao"


class TipoCalculo(str, Enum):
    """Tipos de cálculo da média final."""

    MEDIA_SIMPLES = "Media_Simples"
    MEDIA_PONDERADA = "Media_Ponderada"
    SOMA_NOTAS = "Soma_Notas"
    DESCRITIVA = "Descritiva"


class StatusFrequencia:
    """Status de frequência agrupados pela forma como entram na taxa."""

    PRESENTE = ("Presente",)
    AUSENTE = ("Ausente", "Falta Injustificada")
    JUSTIFICADO = ("Justificado", "Atestado", "Falta Justificada")


def _nota_ou_zero(valor: Any) -> float:
    """Converte a nota para float, usando 0 quando ausente ou inválida."""
    try:
        convertido = float(valor)
    except (TypeError, ValueError):
        return 0.0
    if convertido != convertido:
        return 0.0
    return convertido


class RegistroAvaliacao(BaseModel):
    """Nota lançada para um aluno em uma instância de avaliação."""

    student_id: Optional[int] = None
    subject_id: int
    period_id: int
    evaluation_type: str = TipoAvaliacao.REGULAR.value
    grade_value: float = 0.0

    @field_validator("grade_value", mode="before")
    @classmethod
    def _normalizar_nota(cls, valor):
        return _nota_ou_zero(valor)

    @field_validator("evaluation_type", mode="before")
    @classmethod
    def _normalizar_tipo(cls, valor):
        if valor is None:
            return TipoAvaliacao.REGULAR.value
        if isinstance(valor, TipoAvaliacao):
            return valor.value
        return str(valor).strip()

    @property
    def recuperacao(self) -> bool:
        return self.evaluation_type == TipoAvaliacao.RECUPERACAO.value


class RegistroFrequencia(BaseModel):
    """Presença de um aluno em uma aula."""

    student_enrollment_id: Optional[int] = None
    subject_id: int
    lesson_id: Optional[int] = None
    status: str

    @field_validator("status", mode="before")
    @classmethod
    def _normalizar_status(cls, valor):
        return str(valor).strip() if valor is not None else ""


class PeriodoLetivo(BaseModel):
    """Período letivo (bimestre, trimestre, semestre)."""

    id: int
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def ordem(self) -> int:
        """Número embutido no nome ("1º Bimestre" -> 1), ou 999 sem número."""
        encontrado = re.search(r"(\d+)", self.name or "")
        return int(encontrado.group(1)) if encontrado else Configuracoes.PERIOD_ORDER_FALLBACK


class DisciplinaRef(BaseModel):
    """Disciplina vinculada à turma."""

    subject_id: int
    subject_name: Optional[str] = None
    class_teacher_subject_id: Optional[int] = None


class PesosPeriodo(BaseModel):
    """Pesos por período usados na média ponderada."""

    weights: List[float] = Field(..., min_length=1)
    divisor: float = 0.0
    formula: Optional[str] = None


class RegraAvaliacao(BaseModel):
    """Regra de avaliação de um curso ou série."""

    id: Optional[int] = None
    name: str = "Regra Padrão"
    description: Optional[str] = None
    course_id: Optional[int] = None
    education_grade_id: Optional[int] = None
    min_approval_grade: float = Field(Configuracoes.DEFAULT_MIN_APPROVAL_GRADE, ge=0, le=10)
    min_attendance_percent: float = Field(Configuracoes.DEFAULT_MIN_ATTENDANCE_PERCENT, ge=0, le=100)
    min_evaluations_per_period: int = Field(2, ge=0)
    academic_period_type: str = "Bimestre"
    periods_per_year: int = Field(4, ge=1)
    calculation_type: TipoCalculo = TipoCalculo.MEDIA_SIMPLES
    period_weights: Optional[PesosPeriodo] = None
    allow_recovery: bool = True
    recovery_replaces_lowest: bool = True
    deleted_at: Optional[str] = None

    @model_validator(mode="after")
    def _validar_pesos(self):
        if self.calculation_type == TipoCalculo.MEDIA_PONDERADA and self.period_weights is None:
            raise ValueError("Regra com Media_Ponderada exige period_weights.")
        if self.period_weights is not None and len(self.period_weights.weights) != self.periods_per_year:
            raise ValueError(
                f"Quantidade de pesos ({len(self.period_weights.weights)}) difere de "
                f"periods_per_year ({self.periods_per_year})."
            )
        return self


class NotaPeriodo(BaseModel):
    """Notas de uma disciplina em um período."""

    period_id: int
    period_name: str
    period_order: int
    regular_grade: Optional[float] = None
    recovery_grade: Optional[float] = None
    final_grade: Optional[float] = None


class ResumoDisciplina(BaseModel):
    """Resumo de notas e frequência de uma disciplina."""

    subject_id: int
    subject_name: Optional[str] = None
    period_grades: List[NotaPeriodo] = Field(default_factory=list)
    final_average: Optional[float] = None
    attendance_rate: float = 0.0
    situation: str = "-"


class FrequenciaDisciplina(BaseModel):
    """Contagem de presenças e faltas de uma disciplina."""

    subject_id: int
    subject_name: Optional[str] = None
    total_classes: int = 0
    present: int = 0
    absent: int = 0
    justified: int = 0
    attendance_rate: float = 0.0


class FrequenciaGeral(BaseModel):
    """Frequência consolidada de todas as disciplinas."""

    total_classes: int = 0
    present: int = 0
    absent: int = 0
    justified: int = 0
    rate: float = 0.0
