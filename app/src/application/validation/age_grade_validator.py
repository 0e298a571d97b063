"""Validação de idade versus série/ano (distorção idade-série).

Responsabilidades:
- Calcular idade pela data de corte do Censo Escolar (31 de março)
- Classificar a distorção idade-série
- Bloquear idade abaixo do mínimo, salvo exceção autorizada
"""

import re
from datetime import date
from typing import Optional, Union

from src.application.validation.date_validator import DataEntrada, converter_data
from src.config.settings import Configuracoes
from src.domain.validation import FaixaEtaria, ResultadoIdadeSerie

# Série/ano -> idades em anos completos até 31/12 do ano efetivo
AGE_RULES_BY_GRADE = {
    serie: {"min": serie + 5, "max": serie + 6, "ideal": serie + 5}
    for serie in range(1, 10)
}


def calcular_idade(data_nascimento: DataEntrada, data_referencia: Optional[date] = None) -> int:
    """Calcula a idade considerando a data de corte de 31 de março.

    Antes do corte, o ano efetivo é o anterior. A idade é a quantidade de
    anos completos entre o nascimento e 31/12 do ano efetivo.

    Parâmetros:
    - data_nascimento (str | date): DD/MM/AAAA, ISO ou date
    - data_referencia (date | None): data de referência; hoje quando omitida

    Retorno:
    - int: idade em anos

    Exceções:
    - ValueError: quando a data de nascimento é inválida
    """
    try:
        nascimento = converter_data(data_nascimento)
    except (TypeError, ValueError):
        raise ValueError("Data de nascimento inválida")

    referencia = converter_data(data_referencia) if data_referencia else date.today()
    corte = date(referencia.year, Configuracoes.AGE_CUTOFF_MONTH, Configuracoes.AGE_CUTOFF_DAY)
    ano_efetivo = referencia.year - 1 if referencia < corte else referencia.year
    data_efetiva = date(ano_efetivo, 12, 31)

    idade = data_efetiva.year - nascimento.year
    if (data_efetiva.month, data_efetiva.day) < (nascimento.month, nascimento.day):
        idade -= 1
    return idade


def validar_idade_serie(
    data_nascimento: DataEntrada,
    serie: Union[int, str],
    permitir_excecoes: bool = False,
    data_referencia: Optional[date] = None,
) -> ResultadoIdadeSerie:
    """Valida a idade do aluno para a série/ano.

    Parâmetros:
    - data_nascimento (str | date): data de nascimento
    - serie (int | str): série/ano de 1 a 9
    - permitir_excecoes (bool): libera idade abaixo do mínimo com aviso
    - data_referencia (date | None): data de referência do cálculo

    Retorno:
    - ResultadoIdadeSerie: validade, idade, faixa esperada e distorção
    """
    try:
        idade = calcular_idade(data_nascimento, data_referencia)
    except ValueError as erro:
        return ResultadoIdadeSerie(valid=False, error=str(erro))

    encontrado = re.match(r"\s*(\d+)", str(serie))
    if encontrado is None:
        return ResultadoIdadeSerie(valid=False, age=idade, error=f"Série/ano {serie} inválida")
    numero_serie = int(encontrado.group(1))

    faixa = AGE_RULES_BY_GRADE.get(numero_serie)
    if faixa is None:
        return ResultadoIdadeSerie(
            valid=False,
            age=idade,
            error=f"Série/ano {numero_serie} não possui regras de idade definidas",
        )

    minima, maxima, ideal = faixa["min"], faixa["max"], faixa["ideal"]
    esperada = FaixaEtaria(min=minima, max=maxima)

    if idade == ideal:
        return ResultadoIdadeSerie(valid=True, age=idade, expected_age=esperada, distortion="none")

    if minima <= idade <= maxima:
        aviso = None
        if idade > ideal:
            aviso = f"Aluno com {idade} anos na {numero_serie}ª série (idade ideal: {ideal} anos)"
        return ResultadoIdadeSerie(
            valid=True, age=idade, expected_age=esperada, distortion="low", warning=aviso
        )

    if idade < minima:
        distorcao = "high" if (minima - idade) > 2 else "medium"
        if permitir_excecoes:
            return ResultadoIdadeSerie(
                valid=True,
                age=idade,
                expected_age=esperada,
                distortion=distorcao,
                warning=(
                    f"Aluno com {idade} anos na {numero_serie}ª série (idade mínima recomendada: "
                    f"{minima} anos). Requer justificativa."
                ),
            )
        return ResultadoIdadeSerie(
            valid=False,
            age=idade,
            expected_age=esperada,
            distortion=distorcao,
            error=f"Idade insuficiente: {idade} anos (mínimo: {minima} anos para {numero_serie}ª série)",
        )

    diferenca = idade - maxima
    return ResultadoIdadeSerie(
        valid=True,
        age=idade,
        expected_age=esperada,
        distortion="high" if diferenca > 2 else "medium",
        warning=(
            f"Distorção idade-série detectada: aluno com {idade} anos na {numero_serie}ª série "
            f"(idade máxima recomendada: {maxima} anos). Diferença: {diferenca} anos."
        ),
    )


def calcular_distorcao_idade_serie(
    data_nascimento: DataEntrada, serie: Union[int, str], data_referencia: Optional[date] = None
) -> str:
    resultado = validar_idade_serie(data_nascimento, serie, permitir_excecoes=True, data_referencia=data_referencia)
    return resultado.distortion or "none"


def possui_distorcao_idade_serie(
    data_nascimento: DataEntrada, serie: Union[int, str], data_referencia: Optional[date] = None
) -> bool:
    return calcular_distorcao_idade_serie(data_nascimento, serie, data_referencia) != "none"
