"""Validação de códigos do Censo Escolar (INEP).

Responsabilidades:
- Validar o código INEP da escola (8 dígitos)
- Validar etapa de ensino, modalidade e tipo de regime por tabela
"""

import re
from typing import Dict, Optional

from src.domain.validation import ResultadoCodigoINEP

ETAPA_ENSINO_CODES: Dict[str, str] = {
    "01": "Educação Infantil - Creche",
    "02": "Educação Infantil - Pré-escola",
    "03": "Ensino Fundamental - Anos Iniciais",
    "04": "Ensino Fundamental - Anos Finais",
    "05": "Ensino Médio",
    "06": "Educação de Jovens e Adultos - EJA",
    "07": "Educação Especial",
    "08": "Educação Profissional",
    "09": "Educação Indígena",
    "10": "Educação Quilombola",
    "11": "Educação do Campo",
    "12": "Educação Ambiental",
    "13": "Educação Digital",
    "14": "Educação Bilíngue",
    "15": "Educação Integral",
}

MODALIDADE_CODES: Dict[str, str] = {
    "01": "Regular",
    "02": "Educação Especial - Exclusiva",
    "03": "Educação de Jovens e Adultos",
    "04": "Educação Profissional",
    "05": "Educação Indígena",
    "06": "Educação Quilombola",
    "07": "Educação do Campo",
    "08": "Educação Ambiental",
    "09": "Educação Digital",
    "10": "Educação Bilíngue",
}

TIPO_REGIME_CODES: Dict[str, str] = {
    "01": "Seriado",
    "02": "Não Seriado",
    "03": "Semi-presencial",
    "04": "EAD",
}


def validar_codigo_inep_escola(codigo: str) -> ResultadoCodigoINEP:
    """Valida o código INEP da escola após remover caracteres não numéricos."""
    if not codigo or not isinstance(codigo, str):
        return ResultadoCodigoINEP(valid=False, error="Código INEP não informado")

    digitos = re.sub(r"\D", "", codigo)
    if len(digitos) != 8:
        return ResultadoCodigoINEP(valid=False, error="Código INEP da escola deve conter 8 dígitos")
    return ResultadoCodigoINEP(valid=True, code=digitos)


def _validar_tabela(codigo: str, tabela: Dict[str, str], rotulo: str) -> ResultadoCodigoINEP:
    if not codigo or not isinstance(codigo, str):
        return ResultadoCodigoINEP(valid=False, error=f"Código de {rotulo} não informado")

    normalizado = codigo.strip().zfill(2)
    if normalizado not in tabela:
        return ResultadoCodigoINEP(
            valid=False,
            error=f"Código de {rotulo} inválido. Códigos válidos: {', '.join(tabela)}",
        )
    return ResultadoCodigoINEP(valid=True, code=normalizado, description=tabela[normalizado])


def validar_codigo_etapa_ensino(codigo: str) -> ResultadoCodigoINEP:
    return _validar_tabela(codigo, ETAPA_ENSINO_CODES, "etapa de ensino")


def validar_codigo_modalidade(codigo: str) -> ResultadoCodigoINEP:
    return _validar_tabela(codigo, MODALIDADE_CODES, "modalidade")


def validar_codigo_tipo_regime(codigo: str) -> ResultadoCodigoINEP:
    return _validar_tabela(codigo, TIPO_REGIME_CODES, "tipo de regime")


def obter_nome_etapa_ensino(codigo: str) -> Optional[str]:
    return ETAPA_ENSINO_CODES.get(str(codigo).strip().zfill(2))


def obter_nome_modalidade(codigo: str) -> Optional[str]:
    return MODALIDADE_CODES.get(str(codigo).strip().zfill(2))


def obter_nome_tipo_regime(codigo: str) -> Optional[str]:
    return TIPO_REGIME_CODES.get(str(codigo).strip().zfill(2))
