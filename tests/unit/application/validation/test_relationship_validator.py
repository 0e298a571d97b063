"""Testes da validação de relacionamentos."""

from datetime import date

from src.application.validation.relationship_validator import (
    validar_aluno_serie_correta,
    validar_avaliacao_turma_disciplina,
    validar_disciplina_pertence_serie_ano,
    validar_professor_habilitado,
    validar_relacionamentos_turma,
    validar_serie_ano_pertence_etapa,
    validar_turma_pertence_escola,
)
from src.domain.school import AnoLetivo, Disciplina, Escola, EtapaEnsino, Professor, SerieAno, Turma

QUINTO_ANO = SerieAno(id="s5", name="5º Ano", subjects=[Disciplina(id="mat", name="Matemática")])
FUNDAMENTAL = EtapaEnsino(id="ef1", name="Ensino Fundamental - Anos Iniciais", series_anos=[QUINTO_ANO])


def test_turma_pertence_escola():
    turma = Turma(id="t1", school_id="e1")

    assert validar_turma_pertence_escola(turma, "e1").valid is True
    assert validar_turma_pertence_escola(turma, "e2").errors == ["Turma não pertence à escola selecionada"]


def test_serie_e_disciplina():
    assert validar_serie_ano_pertence_etapa("s5", FUNDAMENTAL).valid is True
    assert validar_serie_ano_pertence_etapa("s9", FUNDAMENTAL).valid is False
    assert validar_disciplina_pertence_serie_ano("mat", QUINTO_ANO).valid is True
    assert validar_disciplina_pertence_serie_ano("his", QUINTO_ANO).errors == [
        "Disciplina não pertence à série/ano selecionada"
    ]


def test_professor_habilitado():
    professor = Professor(id="p1", enabled_subjects=["mat"])

    assert validar_professor_habilitado(professor, "mat").valid is True
    assert validar_professor_habilitado(professor, "his").errors == ["Professor não está habilitado para esta disciplina"]


def test_aluno_serie_correta():
    assert validar_aluno_serie_correta("5º Ano", "s5", [FUNDAMENTAL]).valid is True
    assert validar_aluno_serie_correta("4º Ano", "s5", [FUNDAMENTAL]).errors == [
        "Aluno está na série/ano incorreta. Esperado: 5º Ano, Informado: 4º Ano"
    ]
    assert validar_aluno_serie_correta("5º Ano", "s9", [FUNDAMENTAL]).errors == ["Série/Ano da turma não encontrada"]


def test_avaliacao_turma_disciplina():
    resultado = validar_avaliacao_turma_disciplina("t2", "his", "t1", "mat")

    assert resultado.errors == [
        "Avaliação não pertence à turma selecionada",
        "Avaliação não pertence à disciplina selecionada",
    ]


def test_relacionamentos_turma():
    turma = Turma(id="t1", school_id="e1", etapa_ensino_id="ef1", serie_ano_id="s5")
    ano = AnoLetivo(id="a2024", start_date=date(2024, 2, 1), end_date=date(2024, 12, 15), turmas=[turma])
    escola = Escola(id="e1", academic_years=[ano])

    assert validar_relacionamentos_turma(turma, escola, ano, [FUNDAMENTAL]).valid is True

    sem_etapa = turma.model_copy(update={"etapa_ensino_id": "em"})
    assert validar_relacionamentos_turma(sem_etapa, escola, ano, [FUNDAMENTAL]).errors == [
        "Etapa de ensino não encontrada"
    ]

    outra_escola = Escola(id="e2")
    ano_vazio = AnoLetivo(id="a2025", start_date=date(2025, 2, 1), end_date=date(2025, 12, 15))
    assert validar_relacionamentos_turma(turma, outra_escola, ano_vazio, [FUNDAMENTAL]).errors == [
        "Turma não pertence à escola selecionada",
        "Turma não pertence ao ano letivo selecionado",
    ]
