"""Modelos de entrada da API.

Responsabilidades:
- Validar corpos de requisição
- Garantir limites de notas, frequências e séries
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.academic import DisciplinaRef, PeriodoLetivo, RegistroAvaliacao, RegistroFrequencia, RegraAvaliacao
from src.domain.school import Escola, Matricula


class EntradaBoletim(BaseModel):
    """Registros já carregados para o cálculo do boletim.

    Responsabilidades:
    - Reunir períodos, avaliações e presenças de um aluno
    """

    periods: List[PeriodoLetivo]
    evaluations: List[RegistroAvaliacao] = Field(default_factory=list)
    rule: Optional[RegraAvaliacao] = None
    subjects: Optional[List[DisciplinaRef]] = None
    attendance: Optional[List[RegistroFrequencia]] = None
    enrollment_id: Optional[int] = Field(None, description="Matrícula dona das presenças")


class EntradaSituacao(BaseModel):
    final_grade: Optional[float] = Field(None, ge=0, le=10)
    attendance_rate: Optional[float] = Field(None, ge=0, le=100)
    rule: Optional[RegraAvaliacao] = None


class EntradaAprovacao(BaseModel):
    average: float = Field(..., ge=0, le=10)
    attendance_rate: float = Field(..., ge=0, le=100)
    rule: Optional[RegraAvaliacao] = None


class EntradaFormula(BaseModel):
    rule: RegraAvaliacao
    period_names: Optional[List[str]] = None


class EntradaDocumento(BaseModel):
    value: str = Field(..., description="Documento com ou sem formatação")


class EntradaCodigo(BaseModel):
    code: str


class EntradaIdadeSerie(BaseModel):
    """Dados para verificar a distorção idade-série.

    Responsabilidades:
    - Receber nascimento, série e data de referência opcional
    """

    birth_date: str = Field(..., description="AAAA-MM-DD ou DD/MM/AAAA")
    grade: int
    allow_exceptions: bool = False
    reference_date: Optional[date] = None


class EntradaMatricula(BaseModel):
    """Matrícula candidata e o contexto necessário para validá-la."""

    enrollment: Matricula
    existing_enrollments: List[Matricula] = Field(default_factory=list)
    schools: List[Escola] = Field(default_factory=list)
    exclude_enrollment_id: Optional[str] = None


class EntradaData(BaseModel):
    value: str
    date_format: str = "%d/%m/%Y"
    not_future: bool = False
    not_too_old: bool = False
    min_date: Optional[date] = None
    max_date: Optional[date] = None


class EntradaPeriodoLetivo(BaseModel):
    start_date: str
    end_date: str
