"""Validação de campos obrigatórios do Censo Escolar.

Responsabilidades:
- Declarar os campos obrigatórios de cada entidade
- Acusar campos ausentes ou em branco
"""

from typing import Dict, List, Tuple

from src.domain.validation import CampoFaltante, ResultadoCamposObrigatorios

CamposObrigatorios = List[Tuple[str, str]]

CAMPOS_ALUNO: CamposObrigatorios = [
    ("name", "Nome do aluno é obrigatório"),
    ("birth_date", "Data de nascimento é obrigatória"),
    ("guardian", "Nome do responsável é obrigatório"),
    ("registration", "Número de matrícula é obrigatório"),
    ("street", "Rua é obrigatória"),
    ("number", "Número do endereço é obrigatório"),
    ("neighborhood", "Bairro é obrigatório"),
    ("city", "Cidade é obrigatória"),
    ("state", "Estado é obrigatório"),
]

CAMPOS_PROFESSOR: CamposObrigatorios = [
    ("name", "Nome do professor é obrigatório"),
    ("email", "E-mail é obrigatório"),
    ("phone", "Telefone é obrigatório"),
    ("subject", "Disciplina é obrigatória"),
    ("role", "Cargo/Função é obrigatório"),
    ("admission_date", "Data de admissão é obrigatória"),
]

CAMPOS_ESCOLA: CamposObrigatorios = [
    ("name", "Nome da escola é obrigatório"),
    ("code", "Código da escola é obrigatório"),
    ("inep_code", "Código INEP é obrigatório"),
    ("director", "Nome do diretor é obrigatório"),
    ("address", "Endereço é obrigatório"),
    ("phone", "Telefone é obrigatório"),
    ("administrative_dependency", "Dependência administrativa é obrigatória"),
    ("location_type", "Localização (Urbana/Rural) é obrigatória"),
]

CAMPOS_TURMA: CamposObrigatorios = [
    ("name", "Nome da turma é obrigatório"),
    ("shift", "Turno é obrigatório"),
    ("etapa_ensino_id", "Etapa de Ensino é obrigatória"),
    ("serie_ano_id", "Série/Ano é obrigatória (exceto multissérie)"),
    ("school_id", "Escola é obrigatória"),
    ("year_id", "Ano letivo é obrigatório"),
]

CAMPOS_ETAPA_ENSINO: CamposObrigatorios = [
    ("name", "Nome da etapa de ensino é obrigatório"),
    ("codigo_censo", "Código do Censo Escolar é obrigatório"),
]


def _ausente(valor) -> bool:
    if isinstance(valor, str):
        return valor.strip() == ""
    return not valor


def validar_campos_obrigatorios(entidade: Dict, campos: CamposObrigatorios) -> ResultadoCamposObrigatorios:
    """Valida os campos obrigatórios de qualquer entidade em formato dict."""
    faltantes = [CampoFaltante(field=campo, message=mensagem) for campo, mensagem in campos if _ausente(entidade.get(campo))]
    return ResultadoCamposObrigatorios(
        valid=not faltantes,
        errors=faltantes,
        missing_fields=[f.field for f in faltantes],
    )


def validar_campos_aluno(aluno: Dict) -> ResultadoCamposObrigatorios:
    return validar_campos_obrigatorios(aluno, CAMPOS_ALUNO)


def validar_campos_professor(professor: Dict) -> ResultadoCamposObrigatorios:
    return validar_campos_obrigatorios(professor, CAMPOS_PROFESSOR)


def validar_campos_escola(escola: Dict) -> ResultadoCamposObrigatorios:
    return validar_campos_obrigatorios(escola, CAMPOS_ESCOLA)


def validar_campos_turma(turma: Dict, multisserie: bool = False) -> ResultadoCamposObrigatorios:
    """Turmas multissérie dispensam a série/ano."""
    campos = [(c, m) for c, m in CAMPOS_TURMA if not (multisserie and c == "serie_ano_id")]
    return validar_campos_obrigatorios(turma, campos)


def validar_campos_etapa_ensino(etapa: Dict) -> ResultadoCamposObrigatorios:
    return validar_campos_obrigatorios(etapa, CAMPOS_ETAPA_ENSINO)


VALIDADORES_POR_ENTIDADE = {
    "student": validar_campos_aluno,
    "teacher": validar_campos_professor,
    "school": validar_campos_escola,
    "classroom": validar_campos_turma,
    "etapa-ensino": validar_campos_etapa_ensino,
}
