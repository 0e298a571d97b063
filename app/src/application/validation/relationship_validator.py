"""Validação de relacionamentos entre entidades escolares."""

from typing import List

from src.domain.school import AnoLetivo, Escola, EtapaEnsino, Professor, SerieAno, Turma
from src.domain.validation import ResultadoValidacaoLista


def _resultado(erros: List[str]) -> ResultadoValidacaoLista:
    return ResultadoValidacaoLista(valid=not erros, errors=erros)


def validar_turma_pertence_escola(turma: Turma, school_id: str) -> ResultadoValidacaoLista:
    if turma.school_id != school_id:
        return _resultado(["Turma não pertence à escola selecionada"])
    return _resultado([])


def validar_turma_pertence_ano_letivo(turma: Turma, ano_letivo: AnoLetivo) -> ResultadoValidacaoLista:
    if not any(t.id == turma.id for t in ano_letivo.turmas):
        return _resultado(["Turma não pertence ao ano letivo selecionado"])
    return _resultado([])


def validar_serie_ano_pertence_etapa(serie_ano_id: str, etapa: EtapaEnsino) -> ResultadoValidacaoLista:
    if not any(s.id == serie_ano_id for s in etapa.series_anos):
        return _resultado(["Série/Ano não pertence à etapa de ensino selecionada"])
    return _resultado([])


def validar_disciplina_pertence_serie_ano(subject_id: str, serie_ano: SerieAno) -> ResultadoValidacaoLista:
    if not any(d.id == subject_id for d in serie_ano.subjects):
        return _resultado(["Disciplina não pertence à série/ano selecionada"])
    return _resultado([])


def validar_professor_habilitado(professor: Professor, subject_id: str) -> ResultadoValidacaoLista:
    if subject_id not in professor.enabled_subjects:
        return _resultado(["Professor não está habilitado para esta disciplina"])
    return _resultado([])


def validar_aluno_serie_correta(
    serie_aluno: str, serie_ano_turma_id: str, etapas: List[EtapaEnsino]
) -> ResultadoValidacaoLista:
    """Compara a série/ano informada do aluno com a série/ano da turma."""
    serie_turma = next(
        (s for etapa in etapas for s in etapa.series_anos if s.id == serie_ano_turma_id),
        None,
    )
    if serie_turma is None:
        return _resultado(["Série/Ano da turma não encontrada"])
    if serie_turma.name != serie_aluno:
        return _resultado(
            [f"Aluno está na série/ano incorreta. Esperado: {serie_turma.name}, Informado: {serie_aluno}"]
        )
    return _resultado([])


def validar_avaliacao_turma_disciplina(
    avaliacao_turma_id: str, avaliacao_disciplina_id: str, turma_id: str, disciplina_id: str
) -> ResultadoValidacaoLista:
    erros = []
    if avaliacao_turma_id != turma_id:
        erros.append("Avaliação não pertence à turma selecionada")
    if avaliacao_disciplina_id != disciplina_id:
        erros.append("Avaliação não pertence à disciplina selecionada")
    return _resultado(erros)


def validar_relacionamentos_turma(
    turma: Turma, escola: Escola, ano_letivo: AnoLetivo, etapas: List[EtapaEnsino]
) -> ResultadoValidacaoLista:
    """Valida escola, ano letivo e etapa/série de uma turma."""
    erros = []
    erros.extend(validar_turma_pertence_escola(turma, escola.id).errors)
    erros.extend(validar_turma_pertence_ano_letivo(turma, ano_letivo).errors)

    if turma.serie_ano_id:
        etapa = next((e for e in etapas if e.id == turma.etapa_ensino_id), None)
        if etapa is None:
            erros.append("Etapa de ensino não encontrada")
        else:
            erros.extend(validar_serie_ano_pertence_etapa(turma.serie_ano_id, etapa).errors)

    return _resultado(erros)
