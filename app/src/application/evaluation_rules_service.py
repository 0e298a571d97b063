"""Serviço de regras de avaliação.

Responsabilidades:
- Resolver a regra aplicável a uma turma (série > curso > padrão do nível)
- Calcular a média final a partir das notas dos períodos
- Classificar a situação do aluno na disciplina
- Descrever fórmulas e pesos padrão das regras
"""

from typing import List, Optional, Sequence

import numpy as np

from src.config.settings import Configuracoes
from src.domain.academic import PesosPeriodo, RegraAvaliacao, TipoCalculo
from src.util.logger import logger
from src.util.rounding import arredondar

SITUACAO_APROVADO = "Aprovado"
SITUACAO_RECUPERACAO = "Recuperação"
SITUACAO_REPROVADO = "Reprovado"
SITUACAO_NAO_AVALIADO = "-"


class ServicoRegrasAvaliacao:
    """Serviço para resolução e aplicação de regras de avaliação.

    Responsabilidades:
    - Consultar regras no repositório escolar
    - Expor funções puras de média e situação
    """

    def __init__(self, repositorio=None):
        """Inicializa o serviço.

        Parâmetros:
        - repositorio (RepositorioEscolar | None): fonte de regras e cursos
        """
        self.repositorio = repositorio

    def resolver_regra(self, course_id: int, grade_id: Optional[int] = None) -> Optional[RegraAvaliacao]:
        """Busca a regra aplicável, da mais específica para a mais genérica.

        Parâmetros:
        - course_id (int): curso da turma
        - grade_id (int | None): série/ano da turma

        Retorno:
        - RegraAvaliacao | None: regra encontrada ou None para usar os padrões
        """
        if self.repositorio is None:
            return None

        try:
            regras = [r for r in self.repositorio.obter_regras() if not r.deleted_at]

            if grade_id is not None:
                regra_serie = next((r for r in regras if r.education_grade_id == grade_id), None)
                if regra_serie:
                    return regra_serie

            regra_curso = next(
                (r for r in regras if r.course_id == course_id and r.education_grade_id is None),
                None,
            )
            if regra_curso:
                return regra_curso

            curso = self.repositorio.obter_curso(course_id)
            nome_regra_padrao = Configuracoes.REGRAS_PADRAO_POR_NIVEL.get((curso or {}).get("education_level"))
            if nome_regra_padrao:
                regra_padrao = next((r for r in regras if r.name == nome_regra_padrao), None)
                if regra_padrao:
                    return regra_padrao

            return None
        except Exception as erro:
            logger.error(f"Erro ao resolver regra de avaliação (curso={course_id}, série={grade_id}): {erro}")
            return None

    @staticmethod
    def calcular_media_ponderada(notas: Sequence[Optional[float]], pesos: PesosPeriodo) -> Optional[float]:
        """Calcula a média ponderada das notas dos períodos.

        Notas ausentes não contribuem para a soma. Com divisor <= 0, divide
        pela soma dos pesos efetivamente usados.

        Parâmetros:
        - notas (list[float | None]): nota final de cada período, em ordem
        - pesos (PesosPeriodo): pesos e divisor da regra

        Retorno:
        - float | None: média arredondada em 2 casas ou None sem notas
        """
        if all(nota is None for nota in notas):
            return None

        limite = min(len(notas), len(pesos.weights))
        indices = [i for i in range(limite) if notas[i] is not None]
        valores = np.array([notas[i] for i in indices], dtype=float)
        pesos_usados = np.array([pesos.weights[i] for i in indices], dtype=float)

        soma_ponderada = float(np.dot(valores, pesos_usados)) if indices else 0.0
        divisor = pesos.divisor if pesos.divisor > 0 else float(pesos_usados.sum())
        if divisor == 0:
            return None

        return arredondar(soma_ponderada / divisor, 2)

    @staticmethod
    def calcular_media_final(notas: Sequence[Optional[float]], regra: Optional[RegraAvaliacao]) -> Optional[float]:
        """Converte as notas finais dos períodos na média final da disciplina.

        Parâmetros:
        - notas (list[float | None]): nota final de cada período, em ordem
        - regra (RegraAvaliacao | None): regra aplicável

        Retorno:
        - float | None: média final ou None quando nenhum período tem nota
        """
        if all(nota is None for nota in notas):
            return None

        if regra is not None and regra.period_weights is not None:
            # Pesos configurados valem mesmo quando o tipo de cálculo não é Media_Ponderada.
            return ServicoRegrasAvaliacao.calcular_media_ponderada(notas, regra.period_weights)

        validas = [nota for nota in notas if nota is not None]
        return arredondar(sum(validas) / len(validas), 2)

    @staticmethod
    def classificar_situacao(
        media_final: Optional[float],
        frequencia: Optional[float],
        regra: Optional[RegraAvaliacao] = None,
    ) -> str:
        """Classifica a situação do aluno na disciplina.

        A frequência é verificada antes da nota. Frequência None não é verificada.

        Parâmetros:
        - media_final (float | None): média final da disciplina
        - frequencia (float | None): taxa de frequência em %
        - regra (RegraAvaliacao | None): regra com os limiares

        Retorno:
        - str: "-", "Aprovado", "Recuperação" ou "Reprovado"
        """
        nota_minima, frequencia_minima = ServicoRegrasAvaliacao._limiares(regra)

        if media_final is None:
            return SITUACAO_NAO_AVALIADO
        if frequencia is not None and frequencia < frequencia_minima:
            return SITUACAO_REPROVADO
        if media_final >= nota_minima:
            return SITUACAO_APROVADO
        if media_final >= Configuracoes.RECOVERY_MIN_GRADE:
            return SITUACAO_RECUPERACAO
        return SITUACAO_REPROVADO

    @staticmethod
    def verificar_aprovacao(regra: Optional[RegraAvaliacao], media: float, frequencia: float) -> dict:
        """Verifica aprovação por nota e por frequência, com mensagem explicativa.

        Parâmetros:
        - regra (RegraAvaliacao | None): regra com os limiares
        - media (float): média final
        - frequencia (float): frequência em %

        Retorno:
        - dict: approved, grade_approved, attendance_approved e message
        """
        nota_minima, frequencia_minima = ServicoRegrasAvaliacao._limiares(regra)
        nota_aprovada = media >= nota_minima
        frequencia_aprovada = frequencia >= frequencia_minima
        aprovado = nota_aprovada and frequencia_aprovada

        motivo_nota = f"nota ({media:.1f} < {nota_minima:g})"
        motivo_frequencia = f"frequência ({frequencia:.1f}% < {frequencia_minima:g}%)"
        if aprovado:
            mensagem = SITUACAO_APROVADO
        elif not nota_aprovada and not frequencia_aprovada:
            mensagem = f"Reprovado por {motivo_nota} e {motivo_frequencia}"
        elif not nota_aprovada:
            mensagem = f"Reprovado por {motivo_nota}"
        else:
            mensagem = f"Reprovado por {motivo_frequencia}"

        return {
            "approved": aprovado,
            "grade_approved": nota_aprovada,
            "attendance_approved": frequencia_aprovada,
            "message": mensagem,
        }

    @staticmethod
    def gerar_descricao_formula(regra: RegraAvaliacao, nomes_periodos: Optional[List[str]] = None) -> str:
        """Gera a descrição textual da fórmula de cálculo da regra."""
        if regra.academic_period_type == "Bimestre":
            nomes_padrao = ["1ª Av.", "2ª Av.", "3ª Av.", "4ª Av."]
        elif regra.academic_period_type == "Trimestre":
            nomes_padrao = ["1º Tri.", "2º Tri.", "3º Tri."]
        else:
            nomes_padrao = ["1º Sem.", "2º Sem."]
        nomes = nomes_periodos or nomes_padrao[: regra.periods_per_year]

        if regra.calculation_type == TipoCalculo.MEDIA_SIMPLES:
            return f"Média Simples: ({' + '.join(nomes)}) / {regra.periods_per_year}"

        if regra.calculation_type == TipoCalculo.MEDIA_PONDERADA and regra.period_weights:
            pesos = regra.period_weights.weights
            partes = []
            for indice, nome in enumerate(nomes):
                peso = pesos[indice] if indice < len(pesos) and pesos[indice] else 1
                partes.append(nome if peso == 1 else f"({nome} × {peso:g})")
            return f"Média Ponderada: ({' + '.join(partes)}) / {regra.period_weights.divisor:g}"

        if regra.calculation_type == TipoCalculo.DESCRITIVA:
            return "Avaliação Descritiva (sem nota numérica)"

        if regra.calculation_type == TipoCalculo.SOMA_NOTAS:
            return f"Soma de Notas: {' + '.join(nomes)}"

        return "Cálculo não definido"

    @staticmethod
    def obter_pesos_padrao(periodos_por_ano: int, tipo_calculo: TipoCalculo) -> PesosPeriodo:
        """Retorna os pesos padrão para a quantidade de períodos do ano."""
        if tipo_calculo == TipoCalculo.MEDIA_PONDERADA:
            if periodos_por_ano == 4:
                pesos = [2, 3, 2, 3]
            elif periodos_por_ano == 3:
                pesos = [2, 3, 3]
            else:
                pesos = [1, 1]
            return PesosPeriodo(weights=pesos, divisor=sum(pesos))

        return PesosPeriodo(weights=[1] * periodos_por_ano, divisor=periodos_por_ano)

    @staticmethod
    def _limiares(regra: Optional[RegraAvaliacao]) -> tuple:
        if regra is None:
            return Configuracoes.DEFAULT_MIN_APPROVAL_GRADE, Configuracoes.DEFAULT_MIN_ATTENDANCE_PERCENT
        return regra.min_approval_grade, regra.min_attendance_percent
