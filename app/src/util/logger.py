"""Fábrica de logger da aplicação.

Responsabilidades:
- Configurar o logger raiz da aplicação uma única vez
- Fornecer loggers filhos por componente
- Direcionar saída para stdout
"""

import logging
import sys

from src.config.settings import Configuracoes


class FabricaLogger:
    """Responsável por configurar e fornecer instâncias de Logger.

    Responsabilidades:
    - Configuração única de handlers
    - Formatação padronizada
    - Loggers filhos que herdam o handler do logger raiz
    """

    NOME_PADRAO = "GESTAO_ESCOLAR_APP"
    FORMATO = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def configurar(cls, nome: str = NOME_PADRAO, nivel: str | None = None):
        """Configura o logger se ainda não estiver configurado.

        Parâmetros:
        - nome (str): nome do logger
        - nivel (str | None): nível de log; usa LOG_LEVEL quando omitido

        Retorno:
        - logging.Logger: logger configurado
        """
        logger_instancia = logging.getLogger(nome)

        if not logger_instancia.handlers:
            logger_instancia.setLevel(nivel or getattr(Configuracoes, "LOG_LEVEL", "INFO"))

            handler_console = logging.StreamHandler(sys.stdout)
            handler_console.setFormatter(logging.Formatter(fmt=cls.FORMATO, datefmt="%Y-%m-%d %H:%M:%S"))
            logger_instancia.addHandler(handler_console)

            logger_instancia.propagate = False

        return logger_instancia

    @classmethod
    def obter(cls, componente: str):
        """Retorna um logger filho do logger da aplicação.

        Parâmetros:
        - componente (str): sufixo que identifica o componente (ex.: "boletim")

        Retorno:
        - logging.Logger: logger filho
        """
        return cls.configurar().getChild(componente)


logger = FabricaLogger.configurar()
