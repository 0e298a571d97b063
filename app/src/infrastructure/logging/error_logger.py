"""Logger de erros em JSONL.

Responsabilidades:
- Registrar falhas da aplicação com segurança de thread
- Padronizar código, categoria e severidade de cada erro
"""

import json
import os
import threading
import uuid
from datetime import datetime
from enum import Enum

from src.config.settings import Configuracoes
from src.util.logger import logger


class CategoriaErro(str, Enum):
    REDE = "network"
    VALIDACAO = "validation"
    DADOS = "data"
    DESCONHECIDO = "unknown"


class SeveridadeErro(str, Enum):
    BAIXA = "low"
    MEDIA = "medium"
    ALTA = "high"
    CRITICA = "critical"


class LoggerErros:
    """Logger thread-safe para persistir erros da aplicação.

    Responsabilidades:
    - Garantir instância única
    - Serializar o erro com contexto
    - Escrever e rotacionar o arquivo com segurança
    """

    _instancia = None
    _lock = threading.Lock()

    def __new__(cls):
        """Cria ou reutiliza a instância única.

        Retorno:
        - LoggerErros: instância singleton
        """
        if cls._instancia is None:
            with cls._lock:
                if cls._instancia is None:
                    cls._instancia = super(LoggerErros, cls).__new__(cls)
        return cls._instancia

    def registrar_erro(
        self,
        codigo: str,
        mensagem: str,
        categoria: CategoriaErro = CategoriaErro.DESCONHECIDO,
        severidade: SeveridadeErro = SeveridadeErro.MEDIA,
        mensagem_usuario: str | None = None,
        contexto: dict | None = None,
        recuperavel: bool = True,
    ) -> dict:
        """Escreve um registro de erro de forma atômica.

        Parâmetros:
        - codigo (str): código estável do erro (ex.: REPORT_CARD_FETCH)
        - mensagem (str): mensagem técnica
        - categoria (CategoriaErro): origem do erro
        - severidade (SeveridadeErro): gravidade
        - mensagem_usuario (str | None): mensagem exibível ao usuário
        - contexto (dict | None): identificadores envolvidos
        - recuperavel (bool): se a operação pode ser repetida

        Retorno:
        - dict: entrada registrada
        """
        entrada_log = {
            "error_id": str(uuid.uuid4()),
            "timestamp": datetime.now().isoformat(),
            "code": codigo,
            "category": CategoriaErro(categoria).value,
            "severity": SeveridadeErro(severidade).value,
            "message": mensagem,
            "user_message": mensagem_usuario or mensagem,
            "context": contexto or {},
            "recoverable": recuperavel,
        }

        try:
            linha_json = json.dumps(entrada_log, ensure_ascii=False, default=str)
        except (TypeError, ValueError) as erro:
            logger.error(f"Falha ao serializar log de erro: {erro}")
            return entrada_log

        with self._lock:
            try:
                os.makedirs(os.path.dirname(Configuracoes.ERROR_LOG_PATH), exist_ok=True)
                self._rotacionar_se_necessario()
                with open(Configuracoes.ERROR_LOG_PATH, "a", encoding="utf-8") as arquivo:
                    arquivo.write(linha_json + "\n")
            except OSError as erro:
                logger.error(f"Falha Crítica ao escrever no log de erros: {erro}")

        return entrada_log

    @staticmethod
    def _rotacionar_se_necessario() -> None:
        """Rotaciona o arquivo de log quando atinge o tamanho máximo."""
        try:
            if not os.path.exists(Configuracoes.ERROR_LOG_PATH):
                return
            if os.path.getsize(Configuracoes.ERROR_LOG_PATH) < Configuracoes.LOG_MAX_BYTES:
                return
            timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
            os.replace(Configuracoes.ERROR_LOG_PATH, f"{Configuracoes.ERROR_LOG_PATH}.{timestamp}.bak")
        except OSError as erro:
            logger.warning(f"Falha ao rotacionar log de erros: {erro}")
