"""Serviço de boletim escolar.

Responsabilidades:
- Reunir períodos, notas, presenças e regra de uma turma
- Calcular notas por disciplina e frequência do aluno
- Registrar falhas de leitura e devolver boletim vazio com erro
"""

from typing import List, Optional

from src.application.attendance_aggregator import AgregadorFrequencia
from src.application.evaluation_rules_service import ServicoRegrasAvaliacao
from src.application.grade_aggregator import AgregadorNotas
from src.domain.academic import (
    DisciplinaRef,
    FrequenciaGeral,
    PeriodoLetivo,
    RegistroAvaliacao,
    RegistroFrequencia,
    RegraAvaliacao,
)
from src.infrastructure.logging.error_logger import CategoriaErro, LoggerErros, SeveridadeErro
from src.util.logger import logger

MENSAGEM_FALHA_BOLETIM = "Não foi possível carregar o boletim do aluno."


class ServicoBoletim:
    """Serviço que monta o boletim de um aluno em uma turma.

    Responsabilidades:
    - Consultar o repositório escolar
    - Aplicar os agregadores de notas e de frequência
    - Converter falhas de leitura em resposta vazia
    """

    def __init__(self, repositorio, servico_regras: Optional[ServicoRegrasAvaliacao] = None):
        """Inicializa o serviço.

        Parâmetros:
        - repositorio (RepositorioEscolar): fonte das tabelas escolares
        - servico_regras (ServicoRegrasAvaliacao | None): resolvedor de regras
        """
        self.repositorio = repositorio
        self.servico_regras = servico_regras or ServicoRegrasAvaliacao(repositorio)
        self.logger_erros = LoggerErros()

    @staticmethod
    def calcular_boletim(
        periodos: List[PeriodoLetivo],
        avaliacoes: List[RegistroAvaliacao],
        regra: Optional[RegraAvaliacao] = None,
        disciplinas: Optional[List[DisciplinaRef]] = None,
        frequencias: Optional[List[RegistroFrequencia]] = None,
        matricula_id: Optional[int] = None,
    ) -> dict:
        """Calcula notas e frequência a partir de registros já carregados.

        Sem registros de presença, a situação considera apenas a nota.

        Parâmetros:
        - periodos (list[PeriodoLetivo]): períodos do ano letivo
        - avaliacoes (list[RegistroAvaliacao]): notas do aluno
        - regra (RegraAvaliacao | None): regra da turma
        - disciplinas (list[DisciplinaRef] | None): disciplinas da turma
        - frequencias (list[RegistroFrequencia] | None): presenças do aluno
        - matricula_id (int | None): matrícula dona das presenças

        Retorno:
        - dict: periods, subjects e attendance
        """
        if disciplinas is None:
            vistos = dict.fromkeys([a.subject_id for a in avaliacoes] + [f.subject_id for f in frequencias or []])
            disciplinas = [DisciplinaRef(subject_id=s) for s in vistos]

        frequencia = None
        if frequencias is not None:
            frequencia = AgregadorFrequencia.calcular_frequencia(disciplinas, frequencias, matricula_id)

        resumos = AgregadorNotas.calcular_notas_disciplinas(
            periodos,
            avaliacoes,
            regra,
            disciplinas,
            frequencia["per_subject"] if frequencia else None,
        )

        return {
            "periods": [p.model_dump() for p in AgregadorNotas.ordenar_periodos(periodos)],
            "subjects": [r.model_dump() for r in resumos],
            "attendance": ServicoBoletim._serializar_frequencia(frequencia),
        }

    def obter_boletim(
        self,
        student_id: int,
        class_id: int,
        academic_year_id: int,
        enrollment_id: Optional[int] = None,
    ) -> dict:
        """Monta o boletim do aluno consultando a fonte de dados.

        Parâmetros:
        - student_id (int): aluno
        - class_id (int): turma
        - academic_year_id (int): ano letivo
        - enrollment_id (int | None): matrícula; buscada pela turma quando omitida

        Retorno:
        - dict: boletim com regra, períodos, disciplinas, frequência e error
        """
        identificacao = {"student_id": student_id, "class_id": class_id, "academic_year_id": academic_year_id}

        try:
            turma = self.repositorio.obter_turma(class_id) or {}
            regra = self.servico_regras.resolver_regra(turma.get("course_id"), turma.get("education_grade_id"))

            periodos = self.repositorio.obter_periodos(academic_year_id)
            disciplinas = self.repositorio.obter_disciplinas_turma(class_id)
            avaliacoes = self.repositorio.obter_avaliacoes(student_id, class_id)

            if enrollment_id is None:
                matricula = self.repositorio.obter_matricula(student_id, class_id)
                enrollment_id = matricula["id"] if matricula else None
            frequencias = self.repositorio.obter_frequencias(enrollment_id) if enrollment_id is not None else []

            boletim = self.calcular_boletim(periodos, avaliacoes, regra, disciplinas, frequencias, enrollment_id)
        except (RuntimeError, ValueError, KeyError) as erro:
            logger.error(f"Erro ao montar boletim ({identificacao}): {erro}")
            self.logger_erros.registrar_erro(
                codigo="REPORT_CARD_FETCH",
                mensagem=str(erro),
                categoria=CategoriaErro.DADOS,
                severidade=SeveridadeErro.ALTA,
                mensagem_usuario=MENSAGEM_FALHA_BOLETIM,
                contexto=identificacao,
            )
            return {
                **identificacao,
                "enrollment_id": enrollment_id,
                "rule": None,
                "periods": [],
                "subjects": [],
                "attendance": self._serializar_frequencia(None),
                "error": MENSAGEM_FALHA_BOLETIM,
            }

        return {
            **identificacao,
            "enrollment_id": enrollment_id,
            "rule": regra.model_dump() if regra else None,
            **boletim,
            "error": None,
        }

    def listar_frequencia_baixa(self, class_id: int, minimo: Optional[float] = None) -> dict:
        """Alunos da turma com frequência abaixo do mínimo.

        Retorno:
        - dict: students (ordenados pela menor taxa) e error
        """
        try:
            registros = self.repositorio.obter_frequencias_por_aluno(class_id)
        except (RuntimeError, ValueError, KeyError) as erro:
            logger.error(f"Erro ao carregar frequências da turma {class_id}: {erro}")
            self.logger_erros.registrar_erro(
                codigo="ATTENDANCE_FETCH",
                mensagem=str(erro),
                categoria=CategoriaErro.DADOS,
                severidade=SeveridadeErro.ALTA,
                contexto={"class_id": class_id},
            )
            return {"class_id": class_id, "students": [], "error": "Não foi possível carregar a frequência da turma."}

        alunos = AgregadorFrequencia.alunos_frequencia_baixa(registros, minimo)
        for aluno in alunos:
            aluno["status"] = AgregadorFrequencia.status_frequencia(aluno["attendance_rate"])
        return {"class_id": class_id, "students": alunos, "error": None}

    @staticmethod
    def _serializar_frequencia(frequencia: Optional[dict]) -> dict:
        if frequencia is None:
            return {"per_subject": [], "overall": FrequenciaGeral().model_dump()}
        return {
            "per_subject": [f.model_dump() for f in frequencia["per_subject"]],
            "overall": frequencia["overall"].model_dump(),
        }
