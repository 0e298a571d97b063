"""Testes do serviço de regras de avaliação."""

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from src.application.evaluation_rules_service import ServicoRegrasAvaliacao
from src.domain.academic import PesosPeriodo, RegraAvaliacao, TipoCalculo


def _repositorio(regras, curso=None):
    repositorio = Mock()
    repositorio.obter_regras.return_value = regras
    repositorio.obter_curso.return_value = curso
    return repositorio


def test_resolver_regra_prioriza_serie():
    regras = [
        RegraAvaliacao(id=1, name="Curso", course_id=20),
        RegraAvaliacao(id=2, name="Série", course_id=20, education_grade_id=5),
    ]
    servico = ServicoRegrasAvaliacao(_repositorio(regras))

    assert servico.resolver_regra(20, 5).id == 2
    assert servico.resolver_regra(20, 6).id == 1
    assert servico.resolver_regra(20).id == 1


def test_resolver_regra_ignora_excluidas():
    regras = [RegraAvaliacao(id=2, name="Série", education_grade_id=5, deleted_at="2024-01-01")]
    servico = ServicoRegrasAvaliacao(_repositorio(regras, curso=None))

    assert servico.resolver_regra(20, 5) is None


def test_resolver_regra_padrao_do_nivel():
    regras = [RegraAvaliacao(id=9, name="Regra Padrão - Ensino Médio", min_approval_grade=6.0)]
    servico = ServicoRegrasAvaliacao(_repositorio(regras, curso={"id": 30, "education_level": "Ensino Médio"}))

    regra = servico.resolver_regra(30)

    assert regra.id == 9
    assert regra.min_approval_grade == 6.0


def test_resolver_regra_sem_resultado():
    servico = ServicoRegrasAvaliacao(_repositorio([], curso={"education_level": "Outro"}))

    assert servico.resolver_regra(30) is None


def test_resolver_regra_falha_retorna_none():
    repositorio = Mock()
    repositorio.obter_regras.side_effect = RuntimeError("sem tabela")

    assert ServicoRegrasAvaliacao(repositorio).resolver_regra(30, 1) is None


def test_resolver_regra_sem_repositorio():
    assert ServicoRegrasAvaliacao().resolver_regra(30) is None


def test_media_ponderada_com_divisor():
    pesos = PesosPeriodo(weights=[1, 1, 2, 2], divisor=6)

    assert ServicoRegrasAvaliacao.calcular_media_ponderada([7.0, 5.0, 8.0, 6.0], pesos) == 6.67


def test_media_ponderada_sem_divisor_usa_pesos_das_notas_presentes():
    pesos = PesosPeriodo(weights=[1, 1, 2, 2], divisor=0)

    assert ServicoRegrasAvaliacao.calcular_media_ponderada([7.0, 5.0, 6.0, None], pesos) == 6.0


def test_media_ponderada_sem_notas_ou_sem_pesos():
    assert ServicoRegrasAvaliacao.calcular_media_ponderada([None, None], PesosPeriodo(weights=[1, 1])) is None
    assert ServicoRegrasAvaliacao.calcular_media_ponderada([5.0, 5.0], PesosPeriodo(weights=[0, 0])) is None


def test_media_final_simples_arredonda_meio_para_cima():
    assert ServicoRegrasAvaliacao.calcular_media_final([6.0, 6.25], None) == 6.13
    assert ServicoRegrasAvaliacao.calcular_media_final([None, None], None) is None


def test_media_final_usa_pesos_mesmo_em_media_simples():
    regra = RegraAvaliacao(periods_per_year=2, period_weights={"weights": [1, 3], "divisor": 4})

    assert ServicoRegrasAvaliacao.calcular_media_final([4.0, 8.0], regra) == 7.0


@pytest.mark.parametrize(
    "media, frequencia, esperado",
    [
        (None, 100.0, "-"),
        (9.0, 60.0, "Reprovado"),
        (7.0, None, "Aprovado"),
        (5.0, 80.0, "Recuperação"),
        (4.99, 80.0, "Reprovado"),
    ],
)
def test_classificar_situacao_padroes(media, frequencia, esperado):
    assert ServicoRegrasAvaliacao.classificar_situacao(media, frequencia) == esperado


def test_classificar_situacao_com_regra():
    regra = RegraAvaliacao(min_approval_grade=6.0, min_attendance_percent=80.0)

    assert ServicoRegrasAvaliacao.classificar_situacao(6.0, 100.0, regra) == "Aprovado"
    assert ServicoRegrasAvaliacao.classificar_situacao(9.0, 79.9, regra) == "Reprovado"


def test_verificar_aprovacao_mensagens():
    servico = ServicoRegrasAvaliacao

    assert servico.verificar_aprovacao(None, 8.0, 90.0)["message"] == "Aprovado"
    assert servico.verificar_aprovacao(None, 6.5, 90.0)["message"] == "Reprovado por nota (6.5 < 7)"
    assert servico.verificar_aprovacao(None, 8.0, 70.0)["message"] == "Reprovado por frequência (70.0% < 75%)"

    ambos = servico.verificar_aprovacao(None, 6.5, 70.0)
    assert ambos["approved"] is False
    assert ambos["grade_approved"] is False
    assert ambos["attendance_approved"] is False
    assert ambos["message"] == "Reprovado por nota (6.5 < 7) e frequência (70.0% < 75%)"


def test_gerar_descricao_formula(regra_ponderada):
    simples = RegraAvaliacao()

    assert ServicoRegrasAvaliacao.gerar_descricao_formula(simples) == (
        "Média Simples: (1ª Av. + 2ª Av. + 3ª Av. + 4ª Av.) / 4"
    )
    assert ServicoRegrasAvaliacao.gerar_descricao_formula(regra_ponderada) == (
        "Média Ponderada: (1ª Av. + 2ª Av. + (3ª Av. × 2) + (4ª Av. × 2)) / 6"
    )
    assert ServicoRegrasAvaliacao.gerar_descricao_formula(RegraAvaliacao(calculation_type="Descritiva")) == (
        "Avaliação Descritiva (sem nota numérica)"
    )


def test_gerar_descricao_formula_trimestre_com_nomes():
    regra = RegraAvaliacao(academic_period_type="Trimestre", periods_per_year=3, calculation_type="Soma_Notas")

    assert ServicoRegrasAvaliacao.gerar_descricao_formula(regra) == "Soma de Notas: 1º Tri. + 2º Tri. + 3º Tri."
    assert ServicoRegrasAvaliacao.gerar_descricao_formula(regra, ["A", "B", "C"]) == "Soma de Notas: A + B + C"


def test_obter_pesos_padrao():
    ponderada = ServicoRegrasAvaliacao.obter_pesos_padrao(4, TipoCalculo.MEDIA_PONDERADA)
    simples = ServicoRegrasAvaliacao.obter_pesos_padrao(3, TipoCalculo.MEDIA_SIMPLES)

    assert ponderada.weights == [2, 3, 2, 3]
    assert ponderada.divisor == 10
    assert simples.weights == [1, 1, 1]
    assert simples.divisor == 3


def test_regra_ponderada_exige_pesos():
    with pytest.raises(ValidationError):
        RegraAvaliacao(calculation_type="Media_Ponderada")


def test_regra_rejeita_quantidade_de_pesos_diferente_dos_periodos():
    with pytest.raises(ValidationError):
        RegraAvaliacao(periods_per_year=4, period_weights={"weights": [1, 2, 3], "divisor": 6})
