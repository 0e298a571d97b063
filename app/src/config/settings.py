"""Configurações centrais do projeto.

Responsabilidades:
- Definir caminhos de arquivos
- Definir limiares padrão das regras de avaliação
- Declarar tabelas da fonte de dados escolar
"""

import os
from pathlib import Path


class Configuracoes:
    """Centraliza configurações da aplicação.

    Responsabilidades:
    - Fornecer caminhos de diretórios
    - Declarar limiares padrão de aprovação e frequência
    - Listar arquivos das tabelas escolares
    """

    BASE_DIR = Path(__file__).resolve().parents[2]
    DEFAULT_DATA_DIR = os.path.join(BASE_DIR, "data")
    DATA_DIR = os.path.abspath(os.getenv("DATA_DIR", DEFAULT_DATA_DIR))
    LOG_DIR = os.path.join(BASE_DIR, "logs")

    ERROR_LOG_PATH = os.getenv("ERROR_LOG_PATH", os.path.join(LOG_DIR, "errors.jsonl"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))

    DEFAULT_MIN_APPROVAL_GRADE = float(os.getenv("DEFAULT_MIN_APPROVAL_GRADE", "7.0"))
    DEFAULT_MIN_ATTENDANCE_PERCENT = float(os.getenv("DEFAULT_MIN_ATTENDANCE_PERCENT", "75.0"))
    RECOVERY_MIN_GRADE = float(os.getenv("RECOVERY_MIN_GRADE", "5.0"))
    ATTENDANCE_ADEQUATE_RATE = float(os.getenv("ATTENDANCE_ADEQUATE_RATE", "75.0"))

    DEFAULT_CLASSROOM_CAPACITY = int(os.getenv("DEFAULT_CLASSROOM_CAPACITY", "30"))
    CLASSROOM_NEARLY_FULL_SEATS = int(os.getenv("CLASSROOM_NEARLY_FULL_SEATS", "3"))
    ENROLLMENT_ACTIVE_STATUS = os.getenv("ENROLLMENT_ACTIVE_STATUS", "Cursando")

    # Data de corte do Censo Escolar
    AGE_CUTOFF_MONTH = 3
    AGE_CUTOFF_DAY = 31
    MAX_ACADEMIC_PERIOD_DAYS = int(os.getenv("MAX_ACADEMIC_PERIOD_DAYS", "730"))

    PERIOD_ORDER_FALLBACK = 999

    TABELAS = {
        "periodos": "periodos.csv",
        "avaliacoes": "avaliacoes.csv",
        "frequencias": "frequencias.csv",
        "regras": "regras_avaliacao.csv",
        "disciplinas_turma": "disciplinas_turma.csv",
        "turmas": "turmas.csv",
        "cursos": "cursos.csv",
        "matriculas": "matriculas.csv",
    }

    REGRAS_PADRAO_POR_NIVEL = {
        "Educação Infantil": "Regra Padrão - Educação Infantil",
        "Ensino Fundamental I": "Regra Padrão - Fundamental I",
        "Ensino Fundamental II": "Regra Padrão - Fundamental II",
        "Ensino Médio": "Regra Padrão - Ensino Médio",
        "EJA": "Regra Padrão - EJA",
    }
