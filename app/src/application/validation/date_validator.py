"""Validação de datas escolares.

Responsabilidades:
- Converter datas em DD/MM/AAAA ou ISO
- Validar coerência entre nascimento, matrícula e períodos letivos
- Validar limites (data futura, data muito antiga, data de corte)
"""

from datetime import date, datetime
from typing import Optional, Union

from src.config.settings import Configuracoes
from src.domain.validation import ResultadoValidacao

FORMATO_BR = "%d/%m/%Y"
DATA_MINIMA_HISTORICA = date(1900, 1, 1)

DataEntrada = Union[str, date, datetime]


def converter_data(valor: DataEntrada, formato: str = FORMATO_BR) -> date:
    """Converte a entrada em date.

    Parâmetros:
    - valor (str | date | datetime): data em DD/MM/AAAA, ISO ou objeto de data
    - formato (str): formato usado para textos com "/"

    Retorno:
    - date: data convertida

    Exceções:
    - ValueError: quando a data é inválida
    """
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if not isinstance(valor, str) or not valor.strip():
        raise ValueError("Data não informada")

    texto = valor.strip()
    if "/" in texto:
        return datetime.strptime(texto, formato).date()
    return datetime.fromisoformat(texto).date()


def _formatar(data: date) -> str:
    return data.strftime(FORMATO_BR)


def validar_formato_data(texto: str, formato: str = FORMATO_BR) -> ResultadoValidacao:
    """Valida se o texto está no formato informado (padrão DD/MM/AAAA)."""
    if not texto or not isinstance(texto, str):
        return ResultadoValidacao(valid=False, error="Data não informada")
    try:
        convertida = datetime.strptime(texto.strip(), formato).date()
    except ValueError:
        return ResultadoValidacao(valid=False, error="Formato de data inválido. Use DD/MM/YYYY")
    return ResultadoValidacao(valid=True, formatted=_formatar(convertida))


def validar_logica_datas(data_nascimento: DataEntrada, data_matricula: DataEntrada) -> ResultadoValidacao:
    """Valida que o nascimento é anterior à matrícula."""
    try:
        nascimento = converter_data(data_nascimento)
        matricula = converter_data(data_matricula)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Datas inválidas")

    if not nascimento < matricula:
        return ResultadoValidacao(valid=False, error="Data de nascimento deve ser anterior à data de matrícula")
    return ResultadoValidacao(valid=True)


def validar_periodo_letivo(data_inicio: DataEntrada, data_fim: DataEntrada) -> ResultadoValidacao:
    """Valida início anterior ao fim e duração máxima do período letivo."""
    try:
        inicio = converter_data(data_inicio)
        fim = converter_data(data_fim)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Datas inválidas")

    if not inicio < fim:
        return ResultadoValidacao(valid=False, error="Data de início deve ser anterior à data de fim")
    if (fim - inicio).days > Configuracoes.MAX_ACADEMIC_PERIOD_DAYS:
        return ResultadoValidacao(valid=False, error="Período letivo não pode ser superior a 2 anos")
    return ResultadoValidacao(valid=True)


def validar_data_no_periodo(
    data: DataEntrada, inicio_periodo: DataEntrada, fim_periodo: DataEntrada
) -> ResultadoValidacao:
    """Valida que a data está dentro do período (limites inclusivos)."""
    try:
        alvo = converter_data(data)
        inicio = converter_data(inicio_periodo)
        fim = converter_data(fim_periodo)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Datas inválidas")

    if alvo < inicio:
        return ResultadoValidacao(
            valid=False,
            error=f"Data ({_formatar(alvo)}) é anterior ao início do período ({_formatar(inicio)})",
        )
    if alvo > fim:
        return ResultadoValidacao(
            valid=False,
            error=f"Data ({_formatar(alvo)}) é posterior ao fim do período ({_formatar(fim)})",
        )
    return ResultadoValidacao(valid=True)


def validar_data_corte_idade(data_nascimento: DataEntrada, ano_referencia: Optional[int] = None) -> ResultadoValidacao:
    """Valida que o aniversário no ano de referência não passa da data de corte (31/03)."""
    try:
        nascimento = converter_data(data_nascimento)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Data de nascimento inválida")

    ano = ano_referencia or date.today().year
    corte = date(ano, Configuracoes.AGE_CUTOFF_MONTH, Configuracoes.AGE_CUTOFF_DAY)
    if (nascimento.month, nascimento.day) > (corte.month, corte.day):
        return ResultadoValidacao(
            valid=False,
            error=(
                f"Data de nascimento após 31 de março de {ano}. "
                f"Aluno deve ter nascido até 31/03/{ano} para este ano letivo."
            ),
        )
    return ResultadoValidacao(valid=True)


def validar_data_nao_futura(data: DataEntrada, hoje: Optional[date] = None) -> ResultadoValidacao:
    """Valida que a data não é posterior ao dia de hoje."""
    try:
        alvo = converter_data(data)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Data inválida")

    if alvo > (hoje or date.today()):
        return ResultadoValidacao(valid=False, error="Data não pode ser futura")
    return ResultadoValidacao(valid=True)


def validar_data_nao_muito_antiga(data: DataEntrada) -> ResultadoValidacao:
    """Valida que a data não é anterior a 1900."""
    try:
        alvo = converter_data(data)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Data inválida")

    if alvo < DATA_MINIMA_HISTORICA:
        return ResultadoValidacao(valid=False, error="Data muito antiga (antes de 1900)")
    return ResultadoValidacao(valid=True)


def validar_data_completa(
    data: DataEntrada,
    formato: str = FORMATO_BR,
    nao_futura: bool = False,
    nao_muito_antiga: bool = False,
    data_minima: Optional[date] = None,
    data_maxima: Optional[date] = None,
) -> ResultadoValidacao:
    """Aplica, em ordem, formato, data futura, data antiga e limites mínimo/máximo."""
    if isinstance(data, str):
        resultado_formato = validar_formato_data(data, formato)
        if not resultado_formato.valid:
            return resultado_formato

    try:
        alvo = converter_data(data, formato)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Data inválida")

    if nao_futura:
        resultado = validar_data_nao_futura(alvo)
        if not resultado.valid:
            return resultado

    if nao_muito_antiga:
        resultado = validar_data_nao_muito_antiga(alvo)
        if not resultado.valid:
            return resultado

    if data_minima and alvo < data_minima:
        return ResultadoValidacao(valid=False, error=f"Data deve ser posterior a {_formatar(data_minima)}")

    if data_maxima and alvo > data_maxima:
        return ResultadoValidacao(valid=False, error=f"Data deve ser anterior a {_formatar(data_maxima)}")

    return ResultadoValidacao(valid=True, formatted=_formatar(alvo))
