"""Testes do agregador de frequência."""

from src.application.attendance_aggregator import AgregadorFrequencia, calcular_taxa
from src.domain.academic import RegistroFrequencia


def _presenca(status, disciplina=10, matricula=5):
    return RegistroFrequencia(student_enrollment_id=matricula, subject_id=disciplina, status=status)


def test_calcular_taxa():
    assert calcular_taxa(27, 0, 30) == 90.0
    assert calcular_taxa(2, 0, 3) == 66.7
    assert calcular_taxa(1, 1, 3) == 66.7
    assert calcular_taxa(0, 0, 0) == 0.0


def test_calcular_frequencia_por_disciplina(disciplinas_turma):
    registros = [
        _presenca("Presente"),
        _presenca("Presente"),
        _presenca("Atestado"),
        _presenca("Falta Injustificada"),
        _presenca("Desconhecido"),
        _presenca("Presente", matricula=6),
        _presenca("Ausente", disciplina=20),
    ]

    resultado = AgregadorFrequencia.calcular_frequencia(disciplinas_turma, registros, 5)
    matematica, portugues = resultado["per_subject"]

    assert (matematica.total_classes, matematica.present, matematica.justified, matematica.absent) == (4, 2, 1, 1)
    assert matematica.attendance_rate == 75.0
    assert portugues.attendance_rate == 0.0
    assert resultado["overall"].total_classes == 5
    assert resultado["overall"].rate == 60.0


def test_calcular_frequencia_sem_matricula(disciplinas_turma):
    registros = [_presenca("Presente"), _presenca("Presente", matricula=6)]

    resultado = AgregadorFrequencia.calcular_frequencia(disciplinas_turma, registros, None)

    assert [f.subject_name for f in resultado["per_subject"]] == ["Matemática", "Língua Portuguesa"]
    assert all(f.total_classes == 0 and f.attendance_rate == 0.0 for f in resultado["per_subject"])
    assert resultado["overall"].rate == 0.0


def test_calcular_frequencia_sem_matricula_e_sem_registros(disciplinas_turma):
    resultado = AgregadorFrequencia.calcular_frequencia(disciplinas_turma, [], None)

    assert resultado["overall"].total_classes == 0


def test_calcular_frequencia_usa_matricula_dos_registros(disciplinas_turma):
    com_matricula = [_presenca("Presente"), _presenca("Ausente"), _presenca("Presente", disciplina=20)]
    sem_matricula = [_presenca("Presente", matricula=None), _presenca("Atestado", matricula=None)]

    inferida = AgregadorFrequencia.calcular_frequencia(disciplinas_turma, com_matricula, None)
    avulsa = AgregadorFrequencia.calcular_frequencia(disciplinas_turma, sem_matricula, None)

    assert inferida["per_subject"][0].attendance_rate == 50.0
    assert inferida["overall"].total_classes == 3
    assert avulsa["per_subject"][0].total_classes == 2
    assert avulsa["per_subject"][0].attendance_rate == 100.0


def test_calcular_frequencia_sem_registros(disciplinas_turma):
    resultado = AgregadorFrequencia.calcular_frequencia(disciplinas_turma, [], 5)

    assert resultado["overall"].total_classes == 0
    assert resultado["per_subject"][0].attendance_rate == 0.0


def test_alunos_frequencia_baixa_ordenados():
    registros = {
        "a": [_presenca("Presente")] * 3 + [_presenca("Ausente")],
        "b": [_presenca("Presente"), _presenca("Ausente")],
        "c": [_presenca("Ausente")] * 3 + [_presenca("Presente")],
    }

    alunos = AgregadorFrequencia.alunos_frequencia_baixa(registros)

    assert [a["student_id"] for a in alunos] == ["c", "b"]
    assert alunos[0]["attendance_rate"] == 25.0
    assert alunos[1]["absent"] == 1


def test_alunos_frequencia_baixa_com_minimo_informado():
    registros = {"a": [_presenca("Presente")] * 3 + [_presenca("Ausente")]}

    assert AgregadorFrequencia.alunos_frequencia_baixa(registros, minimo=80.0)[0]["student_id"] == "a"


def test_status_frequencia():
    assert AgregadorFrequencia.status_frequencia(75.0) == "Adequado"
    assert AgregadorFrequencia.status_frequencia(74.9) == "Atenção"
