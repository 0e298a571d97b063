"""Modelos de resultado das validações.

Responsabilidades:
- Padronizar o retorno {valid, error} dos validadores
- Representar resultados com lista de erros e avisos
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ResultadoValidacao(BaseModel):
    """Resultado simples de validação de um valor."""

    valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None
    formatted: Optional[str] = None


class ResultadoCodigoINEP(BaseModel):
    """Resultado de validação de código do Censo Escolar."""

    valid: bool
    error: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None


class FaixaEtaria(BaseModel):
    min: int
    max: int


class ResultadoIdadeSerie(BaseModel):
    """Resultado da validação de idade versus série/ano."""

    valid: bool
    age: Optional[int] = None
    expected_age: Optional[FaixaEtaria] = None
    distortion: Optional[str] = None
    warning: Optional[str] = None
    error: Optional[str] = None


class ResultadoCapacidade(BaseModel):
    """Resultado da verificação de capacidade da turma."""

    valid: bool
    error: Optional[str] = None
    current_count: Optional[int] = None
    max_capacity: Optional[int] = None


class ResultadoValidacaoLista(BaseModel):
    """Resultado com vários erros e avisos acumulados."""

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class CampoFaltante(BaseModel):
    field: str
    message: str


class ResultadoCamposObrigatorios(BaseModel):
    """Resultado da validação de campos obrigatórios."""

    valid: bool
    errors: List[CampoFaltante] = Field(default_factory=list)
    missing_fields: List[str] = Field(default_factory=list)
