"""Controlador de boletim da API.

Responsabilidades:
- Definir rotas de boletim e frequência
- Resolver dependências do serviço de boletim
- Traduzir erros em respostas HTTP
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from src.application.report_card_service import ServicoBoletim
from src.domain.requests import EntradaBoletim
from src.infrastructure.data.school_repository import RepositorioEscolar


def obter_servico_boletim():
    """Dependência para obter uma instância do serviço de boletim.

    Retorno:
    - ServicoBoletim: serviço ligado ao repositório escolar
    """
    return ServicoBoletim(repositorio=RepositorioEscolar())


class ControladorBoletim:
    """Controlador de boletim.

    Responsabilidades:
    - Registrar rotas de cálculo e consulta do boletim
    - Expor a lista de alunos com frequência baixa
    """

    def __init__(self):
        """Inicializa o controlador.

        Responsabilidades:
        - Instanciar o roteador
        - Registrar as rotas disponíveis
        """
        self.roteador = APIRouter()
        self._registrar_rotas()

    def _registrar_rotas(self):
        self.roteador.add_api_route(
            path="/report-card/compute",
            endpoint=self._calcular_boletim,
            methods=["POST"],
            response_model=dict,
            summary="Cálculo de boletim a partir de registros enviados",
        )
        self.roteador.add_api_route(
            path="/students/{student_id}/report-card",
            endpoint=self._obter_boletim,
            methods=["GET"],
            response_model=dict,
        )
        self.roteador.add_api_route(
            path="/classes/{class_id}/attendance/low",
            endpoint=self._listar_frequencia_baixa,
            methods=["GET"],
            response_model=dict,
        )

    @staticmethod
    async def _calcular_boletim(entrada: EntradaBoletim):
        """Calcula notas e frequência sem consultar a fonte de dados.

        Parâmetros:
        - entrada (EntradaBoletim): registros do aluno

        Retorno:
        - dict: períodos, disciplinas e frequência

        Exceções:
        - HTTPException: dados inconsistentes
        """
        try:
            return ServicoBoletim.calcular_boletim(
                entrada.periods,
                entrada.evaluations,
                entrada.rule,
                entrada.subjects,
                entrada.attendance,
                entrada.enrollment_id,
            )
        except (ValueError, TypeError, KeyError) as erro:
            raise HTTPException(status_code=400, detail=str(erro))

    @staticmethod
    async def _obter_boletim(
        student_id: int,
        class_id: int,
        academic_year_id: int,
        enrollment_id: Optional[int] = None,
        servico: ServicoBoletim = Depends(obter_servico_boletim),
    ):
        """Boletim do aluno montado a partir das tabelas escolares.

        Falhas de leitura não geram erro HTTP; o boletim volta vazio com o campo error.
        """
        return servico.obter_boletim(student_id, class_id, academic_year_id, enrollment_id)

    @staticmethod
    async def _listar_frequencia_baixa(
        class_id: int,
        minimum: Optional[float] = None,
        servico: ServicoBoletim = Depends(obter_servico_boletim),
    ):
        if minimum is not None and not 0 <= minimum <= 100:
            raise HTTPException(status_code=400, detail="minimum deve estar entre 0 e 100")
        return servico.listar_frequencia_baixa(class_id, minimum)
