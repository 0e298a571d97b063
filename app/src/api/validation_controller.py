"""Controlador de validações da API.

Responsabilidades:
- Expor validadores de documentos, códigos INEP, datas e matrículas
- Expor validação de campos obrigatórios por entidade
"""

from fastapi import APIRouter, Body, HTTPException

from src.application.validation import (
    age_grade_validator,
    date_validator,
    document_validator,
    enrollment_validator,
    inep_code_validator,
    required_fields_validator,
)
from src.domain.requests import (
    EntradaCodigo,
    EntradaData,
    EntradaDocumento,
    EntradaIdadeSerie,
    EntradaMatricula,
    EntradaPeriodoLetivo,
)


class ControladorValidacao:
    """Controlador de validações.

    Responsabilidades:
    - Registrar uma rota por validador
    - Devolver o resultado {valid, error} sem erro HTTP para valores inválidos
    """

    def __init__(self):
        """Inicializa o controlador.

        Responsabilidades:
        - Instanciar o roteador com prefixo /validations
        - Registrar as rotas disponíveis
        """
        self.roteador = APIRouter(prefix="/validations")
        self._registrar_rotas()

    def _registrar_rotas(self):
        rotas = [
            ("/cpf", self._validar_cpf),
            ("/cnpj", self._validar_cnpj),
            ("/document", self._validar_documento),
            ("/inep/school", self._validar_inep_escola),
            ("/inep/etapa", self._validar_etapa_ensino),
            ("/inep/modalidade", self._validar_modalidade),
            ("/inep/regime", self._validar_tipo_regime),
            ("/age-grade", self._validar_idade_serie),
            ("/enrollment", self._validar_matricula),
            ("/date", self._validar_data),
            ("/academic-period", self._validar_periodo_letivo),
            ("/required-fields/{entity}", self._validar_campos_obrigatorios),
        ]
        for caminho, endpoint in rotas:
            self.roteador.add_api_route(caminho, endpoint, methods=["POST"], response_model=dict)

    @staticmethod
    async def _validar_cpf(entrada: EntradaDocumento):
        return document_validator.validar_cpf(entrada.value).model_dump()

    @staticmethod
    async def _validar_cnpj(entrada: EntradaDocumento):
        return document_validator.validar_cnpj(entrada.value).model_dump()

    @staticmethod
    async def _validar_documento(entrada: EntradaDocumento):
        return document_validator.validar_cpf_ou_cnpj(entrada.value).model_dump()

    @staticmethod
    async def _validar_inep_escola(entrada: EntradaCodigo):
        return inep_code_validator.validar_codigo_inep_escola(entrada.code).model_dump()

    @staticmethod
    async def _validar_etapa_ensino(entrada: EntradaCodigo):
        return inep_code_validator.validar_codigo_etapa_ensino(entrada.code).model_dump()

    @staticmethod
    async def _validar_modalidade(entrada: EntradaCodigo):
        return inep_code_validator.validar_codigo_modalidade(entrada.code).model_dump()

    @staticmethod
    async def _validar_tipo_regime(entrada: EntradaCodigo):
        return inep_code_validator.validar_codigo_tipo_regime(entrada.code).model_dump()

    @staticmethod
    async def _validar_idade_serie(entrada: EntradaIdadeSerie):
        """Valida a idade do aluno para a série/ano.

        Parâmetros:
        - entrada (EntradaIdadeSerie): nascimento, série e data de referência

        Retorno:
        - dict: resultado com idade, faixa esperada e distorção
        """
        resultado = age_grade_validator.validar_idade_serie(
            entrada.birth_date,
            entrada.grade,
            permitir_excecoes=entrada.allow_exceptions,
            data_referencia=entrada.reference_date,
        )
        return resultado.model_dump()

    @staticmethod
    async def _validar_matricula(entrada: EntradaMatricula):
        resultado = enrollment_validator.validar_matricula_completa(
            entrada.enrollment,
            entrada.existing_enrollments,
            entrada.schools,
            entrada.exclude_enrollment_id,
        )
        return resultado.model_dump()

    @staticmethod
    async def _validar_data(entrada: EntradaData):
        resultado = date_validator.validar_data_completa(
            entrada.value,
            formato=entrada.date_format,
            nao_futura=entrada.not_future,
            nao_muito_antiga=entrada.not_too_old,
            data_minima=entrada.min_date,
            data_maxima=entrada.max_date,
        )
        return resultado.model_dump()

    @staticmethod
    async def _validar_periodo_letivo(entrada: EntradaPeriodoLetivo):
        return date_validator.validar_periodo_letivo(entrada.start_date, entrada.end_date).model_dump()

    @staticmethod
    async def _validar_campos_obrigatorios(entity: str, dados: dict = Body(...), multisserie: bool = False):
        """Valida os campos obrigatórios de student, teacher, school, classroom ou etapa-ensino.

        Exceções:
        - HTTPException: entidade desconhecida
        """
        validador = required_fields_validator.VALIDADORES_POR_ENTIDADE.get(entity)
        if validador is None:
            raise HTTPException(status_code=404, detail=f"Entidade desconhecida: {entity}")
        if entity == "classroom":
            return required_fields_validator.validar_campos_turma(dados, multisserie=multisserie).model_dump()
        return validador(dados).model_dump()
