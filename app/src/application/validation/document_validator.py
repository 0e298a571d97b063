"""Validação de CPF e CNPJ.

Responsabilidades:
- Verificar tamanho e sequências de dígitos repetidos
- Conferir os dígitos verificadores (módulo 11)
- Formatar documentos no padrão oficial
"""

import re

from src.domain.validation import ResultadoValidacao

PESOS_CNPJ_PRIMEIRO = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
PESOS_CNPJ_SEGUNDO = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]


def limpar_documento(documento: str) -> str:
    return re.sub(r"\D", "", documento or "")


def _digitos_iguais(digitos: str) -> bool:
    return len(set(digitos)) == 1


def _digito_modulo_11(digitos: str, pesos) -> int:
    soma = sum(int(d) * p for d, p in zip(digitos, pesos))
    resto = soma % 11
    return 0 if resto < 2 else 11 - resto


def formatar_cpf(cpf: str) -> str:
    """Formata como XXX.XXX.XXX-XX; devolve a entrada sem 11 dígitos."""
    d = limpar_documento(cpf)
    if len(d) != 11:
        return cpf
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def formatar_cnpj(cnpj: str) -> str:
    """Formata como XX.XXX.XXX/XXXX-XX; devolve a entrada sem 14 dígitos."""
    d = limpar_documento(cnpj)
    if len(d) != 14:
        return cnpj
    return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"


def validar_cpf(cpf: str) -> ResultadoValidacao:
    """Valida um CPF com ou sem formatação.

    Parâmetros:
    - cpf (str): CPF informado

    Retorno:
    - ResultadoValidacao: com o CPF formatado quando válido
    """
    if not cpf or not isinstance(cpf, str):
        return ResultadoValidacao(valid=False, error="CPF inválido")

    digitos = limpar_documento(cpf)
    if len(digitos) != 11:
        return ResultadoValidacao(valid=False, error="CPF deve conter 11 dígitos")
    if _digitos_iguais(digitos):
        return ResultadoValidacao(valid=False, error="CPF inválido (todos os dígitos são iguais)")

    primeiro = _digito_modulo_11(digitos[:9], range(10, 1, -1))
    segundo = _digito_modulo_11(digitos[:10], range(11, 1, -1))
    if primeiro != int(digitos[9]) or segundo != int(digitos[10]):
        return ResultadoValidacao(valid=False, error="CPF inválido (dígito verificador incorreto)")

    return ResultadoValidacao(valid=True, formatted=formatar_cpf(digitos))


def validar_cnpj(cnpj: str) -> ResultadoValidacao:
    """Valida um CNPJ com ou sem formatação."""
    if not cnpj or not isinstance(cnpj, str):
        return ResultadoValidacao(valid=False, error="CNPJ inválido")

    digitos = limpar_documento(cnpj)
    if len(digitos) != 14:
        return ResultadoValidacao(valid=False, error="CNPJ deve conter 14 dígitos")
    if _digitos_iguais(digitos):
        return ResultadoValidacao(valid=False, error="CNPJ inválido (todos os dígitos são iguais)")

    primeiro = _digito_modulo_11(digitos[:12], PESOS_CNPJ_PRIMEIRO)
    segundo = _digito_modulo_11(digitos[:13], PESOS_CNPJ_SEGUNDO)
    if primeiro != int(digitos[12]) or segundo != int(digitos[13]):
        return ResultadoValidacao(valid=False, error="CNPJ inválido (dígito verificador incorreto)")

    return ResultadoValidacao(valid=True, formatted=formatar_cnpj(digitos))


def validar_cpf_ou_cnpj(documento: str) -> ResultadoValidacao:
    """Escolhe a validação de CPF ou CNPJ pela quantidade de dígitos."""
    if not documento:
        return ResultadoValidacao(valid=False, error="Documento não informado")

    digitos = limpar_documento(documento)
    if len(digitos) == 11:
        return validar_cpf(documento)
    if len(digitos) == 14:
        return validar_cnpj(documento)
    return ResultadoValidacao(valid=False, error="Documento deve ter 11 dígitos (CPF) ou 14 dígitos (CNPJ)")
