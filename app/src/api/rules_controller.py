"""Controlador de regras de avaliação da API.

Responsabilidades:
- Resolver a regra de uma turma
- Expor classificação de situação, aprovação e fórmulas
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from src.application.evaluation_rules_service import ServicoRegrasAvaliacao
from src.domain.academic import TipoCalculo
from src.domain.requests import EntradaAprovacao, EntradaFormula, EntradaSituacao
from src.infrastructure.data.school_repository import RepositorioEscolar


def obter_servico_regras():
    """Dependência para obter o serviço de regras ligado ao repositório escolar."""
    return ServicoRegrasAvaliacao(repositorio=RepositorioEscolar())


class ControladorRegras:
    """Controlador de regras de avaliação.

    Responsabilidades:
    - Registrar rotas de consulta e aplicação de regras
    """

    def __init__(self):
        self.roteador = APIRouter(prefix="/rules")
        self.roteador.add_api_route("/resolve", self._resolver_regra, methods=["GET"])
        self.roteador.add_api_route("/situation", self._classificar_situacao, methods=["POST"], response_model=dict)
        self.roteador.add_api_route("/approval", self._verificar_aprovacao, methods=["POST"], response_model=dict)
        self.roteador.add_api_route("/formula", self._descrever_formula, methods=["POST"], response_model=dict)
        self.roteador.add_api_route("/default-weights", self._obter_pesos_padrao, methods=["GET"], response_model=dict)

    @staticmethod
    async def _resolver_regra(
        course_id: int,
        grade_id: Optional[int] = None,
        servico: ServicoRegrasAvaliacao = Depends(obter_servico_regras),
    ):
        """Retorna a regra aplicável ou null quando valem os limiares padrão."""
        regra = servico.resolver_regra(course_id, grade_id)
        return regra.model_dump() if regra else None

    @staticmethod
    async def _classificar_situacao(entrada: EntradaSituacao):
        situacao = ServicoRegrasAvaliacao.classificar_situacao(entrada.final_grade, entrada.attendance_rate, entrada.rule)
        return {"situation": situacao}

    @staticmethod
    async def _verificar_aprovacao(entrada: EntradaAprovacao):
        return ServicoRegrasAvaliacao.verificar_aprovacao(entrada.rule, entrada.average, entrada.attendance_rate)

    @staticmethod
    async def _descrever_formula(entrada: EntradaFormula):
        return {"formula": ServicoRegrasAvaliacao.gerar_descricao_formula(entrada.rule, entrada.period_names)}

    @staticmethod
    async def _obter_pesos_padrao(periods_per_year: int = 4, calculation_type: TipoCalculo = TipoCalculo.MEDIA_SIMPLES):
        """Pesos padrão de uma regra nova.

        Exceções:
        - HTTPException: quantidade de períodos inválida
        """
        if periods_per_year < 1:
            raise HTTPException(status_code=400, detail="periods_per_year deve ser maior que zero")
        return ServicoRegrasAvaliacao.obter_pesos_padrao(periods_per_year, calculation_type).model_dump()
