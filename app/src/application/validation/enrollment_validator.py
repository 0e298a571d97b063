"""Validação de matrículas.

Responsabilidades:
- Impedir matrícula ativa duplicada no mesmo ano letivo
- Impedir matrícula ativa simultânea em outra escola
- Verificar relacionamentos, capacidade da turma e data da matrícula
"""

from typing import List, Optional

from src.application.validation.date_validator import DataEntrada, converter_data
from src.config.settings import Configuracoes
from src.domain.school import Escola, Matricula
from src.domain.validation import ResultadoCapacidade, ResultadoValidacao, ResultadoValidacaoLista

STATUS_ATIVA = Configuracoes.ENROLLMENT_ACTIVE_STATUS


def _ativas(matriculas: List[Matricula], excluir_id: Optional[str]) -> List[Matricula]:
    return [m for m in matriculas if m.status == STATUS_ATIVA and m.id != excluir_id]


def _buscar_escola(escolas: List[Escola], school_id: Optional[str]) -> Optional[Escola]:
    return next((escola for escola in escolas if escola.id == school_id), None)


def validar_matricula_duplicada(
    student_id: str,
    academic_year_id: str,
    matriculas: List[Matricula],
    excluir_matricula_id: Optional[str] = None,
) -> ResultadoValidacao:
    """Rejeita uma segunda matrícula ativa do aluno no mesmo ano letivo."""
    duplicada = any(
        m.student_id == student_id and m.academic_year_id == academic_year_id
        for m in _ativas(matriculas, excluir_matricula_id)
    )
    if duplicada:
        return ResultadoValidacao(valid=False, error="Aluno já possui matrícula ativa neste ano letivo")
    return ResultadoValidacao(valid=True)


def validar_matriculas_simultaneas(
    student_id: str,
    school_id: str,
    matriculas: List[Matricula],
    excluir_matricula_id: Optional[str] = None,
) -> ResultadoValidacao:
    """Rejeita matrícula quando o aluno tem matrícula ativa em outra escola."""
    outras_escolas = [
        m for m in _ativas(matriculas, excluir_matricula_id)
        if m.student_id == student_id and m.school_id != school_id
    ]
    if outras_escolas:
        return ResultadoValidacao(
            valid=False,
            error=(
                "Aluno possui matrícula ativa em outra escola. "
                "Remova a matrícula anterior antes de criar nova."
            ),
        )
    return ResultadoValidacao(valid=True)


def validar_relacionamentos_matricula(matricula: Matricula, escolas: List[Escola]) -> ResultadoValidacaoLista:
    """Valida escola, ano letivo da escola e turma do ano letivo."""
    erros = []
    escola = _buscar_escola(escolas, matricula.school_id)
    if escola is None:
        erros.append("Escola não encontrada")

    if matricula.academic_year_id and escola is not None:
        ano_letivo = escola.obter_ano_letivo(matricula.academic_year_id)
        if ano_letivo is None:
            erros.append("Ano letivo não pertence à escola selecionada")
        elif matricula.classroom_id:
            turma = next((t for t in ano_letivo.turmas if t.id == matricula.classroom_id), None)
            if turma is None:
                erros.append("Turma não pertence ao ano letivo selecionado")
            elif turma.school_id != matricula.school_id:
                erros.append("Turma não pertence à escola selecionada")

    return ResultadoValidacaoLista(valid=not erros, errors=erros)


def validar_capacidade_turma(
    classroom_id: str,
    academic_year_id: str,
    school_id: str,
    matriculas: List[Matricula],
    escolas: List[Escola],
) -> ResultadoCapacidade:
    """Compara as matrículas ativas da turma com a capacidade máxima."""
    escola = _buscar_escola(escolas, school_id)
    if escola is None:
        return ResultadoCapacidade(valid=False, error="Escola não encontrada")

    ano_letivo = escola.obter_ano_letivo(academic_year_id)
    if ano_letivo is None:
        return ResultadoCapacidade(valid=False, error="Ano letivo não encontrado")

    turma = next((t for t in ano_letivo.turmas if t.id == classroom_id), None)
    if turma is None:
        return ResultadoCapacidade(valid=False, error="Turma não encontrada")

    capacidade = turma.max_capacity or Configuracoes.DEFAULT_CLASSROOM_CAPACITY
    ocupadas = sum(
        1
        for m in matriculas
        if m.classroom_id == classroom_id and m.academic_year_id == academic_year_id and m.status == STATUS_ATIVA
    )

    if ocupadas >= capacidade:
        return ResultadoCapacidade(
            valid=False,
            error=f"Turma atingiu capacidade máxima ({capacidade} alunos). Atualmente: {ocupadas} alunos.",
            current_count=ocupadas,
            max_capacity=capacidade,
        )
    return ResultadoCapacidade(valid=True, current_count=ocupadas, max_capacity=capacidade)


def validar_periodo_matricula(
    data_matricula: DataEntrada,
    academic_year_id: str,
    school_id: str,
    escolas: List[Escola],
) -> ResultadoValidacao:
    """Valida que a data da matrícula está dentro do ano letivo."""
    escola = _buscar_escola(escolas, school_id)
    if escola is None:
        return ResultadoValidacao(valid=False, error="Escola não encontrada")

    ano_letivo = escola.obter_ano_letivo(academic_year_id)
    if ano_letivo is None:
        return ResultadoValidacao(valid=False, error="Ano letivo não encontrado")

    try:
        data = converter_data(data_matricula)
    except ValueError:
        return ResultadoValidacao(valid=False, error="Data de matrícula inválida")

    if data < ano_letivo.start_date:
        return ResultadoValidacao(
            valid=False,
            error=(
                f"Data de matrícula ({data:%d/%m/%Y}) é anterior ao início do ano letivo "
                f"({ano_letivo.start_date:%d/%m/%Y})"
            ),
        )
    if data > ano_letivo.end_date:
        return ResultadoValidacao(
            valid=False,
            error=(
                f"Data de matrícula ({data:%d/%m/%Y}) é posterior ao fim do ano letivo "
                f"({ano_letivo.end_date:%d/%m/%Y})"
            ),
        )
    return ResultadoValidacao(valid=True)


def validar_matricula_completa(
    matricula: Matricula,
    matriculas: List[Matricula],
    escolas: List[Escola],
    excluir_matricula_id: Optional[str] = None,
) -> ResultadoValidacaoLista:
    """Executa todas as validações de matrícula acumulando erros e avisos.

    Parâmetros:
    - matricula (Matricula): matrícula a criar ou alterar
    - matriculas (list[Matricula]): matrículas existentes
    - escolas (list[Escola]): escolas com anos letivos e turmas
    - excluir_matricula_id (str | None): matrícula ignorada (edição)

    Retorno:
    - ResultadoValidacaoLista: erros e avisos encontrados
    """
    erros: List[str] = []
    avisos: List[str] = []

    if matricula.academic_year_id:
        resultado = validar_matricula_duplicada(
            matricula.student_id, matricula.academic_year_id, matriculas, excluir_matricula_id
        )
        if not resultado.valid:
            erros.append(resultado.error)

    if matricula.school_id:
        resultado = validar_matriculas_simultaneas(
            matricula.student_id, matricula.school_id, matriculas, excluir_matricula_id
        )
        if not resultado.valid:
            erros.append(resultado.error)

    erros.extend(validar_relacionamentos_matricula(matricula, escolas).errors)

    if matricula.classroom_id and matricula.academic_year_id and matricula.school_id:
        capacidade = validar_capacidade_turma(
            matricula.classroom_id, matricula.academic_year_id, matricula.school_id, matriculas, escolas
        )
        if not capacidade.valid:
            erros.append(capacidade.error)
        elif capacidade.current_count and capacidade.max_capacity:
            restantes = capacidade.max_capacity - capacidade.current_count
            if restantes <= Configuracoes.CLASSROOM_NEARLY_FULL_SEATS:
                avisos.append(f"Turma quase lotada: {restantes} vaga(s) restante(s) de {capacidade.max_capacity}")

    if matricula.enrollment_date and matricula.academic_year_id and matricula.school_id:
        resultado = validar_periodo_matricula(
            matricula.enrollment_date, matricula.academic_year_id, matricula.school_id, escolas
        )
        if not resultado.valid:
            erros.append(resultado.error)

    return ResultadoValidacaoLista(valid=not erros, errors=erros, warnings=avisos)
