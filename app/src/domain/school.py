"""Modelos de domínio da estrutura escolar.

Responsabilidades:
- Representar escolas, anos letivos, turmas e matrículas
- Representar etapas de ensino, séries/anos e professores
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class Turma(BaseModel):
    id: str
    name: Optional[str] = None
    school_id: Optional[str] = None
    max_capacity: Optional[int] = None
    etapa_ensino_id: Optional[str] = None
    serie_ano_id: Optional[str] = None


class AnoLetivo(BaseModel):
    id: str
    name: Optional[str] = None
    start_date: date
    end_date: date
    turmas: List[Turma] = Field(default_factory=list)


class Escola(BaseModel):
    id: str
    name: Optional[str] = None
    academic_years: List[AnoLetivo] = Field(default_factory=list)

    def obter_ano_letivo(self, academic_year_id: str) -> Optional[AnoLetivo]:
        return next((ano for ano in self.academic_years if ano.id == academic_year_id), None)


class Matricula(BaseModel):
    """Matrícula de um aluno em uma escola/ano letivo/turma."""

    id: Optional[str] = None
    student_id: str
    school_id: Optional[str] = None
    academic_year_id: Optional[str] = None
    classroom_id: Optional[str] = None
    enrollment_date: Optional[date] = None
    status: str = "Cursando"


class Disciplina(BaseModel):
    id: str
    name: Optional[str] = None


class SerieAno(BaseModel):
    id: str
    name: str
    subjects: List[Disciplina] = Field(default_factory=list)


class EtapaEnsino(BaseModel):
    id: str
    name: Optional[str] = None
    series_anos: List[SerieAno] = Field(default_factory=list)


class Professor(BaseModel):
    id: str
    name: Optional[str] = None
    enabled_subjects: List[str] = Field(default_factory=list)
