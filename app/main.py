"""Ponto de entrada da API FastAPI.

Responsabilidades:
- Configurar a aplicação FastAPI
- Registrar rotas e eventos
- Inicializar recursos no startup
"""

import os

import uvicorn
from fastapi import FastAPI, HTTPException

from src.api.report_card_controller import ControladorBoletim
from src.api.rules_controller import ControladorRegras
from src.api.validation_controller import ControladorValidacao
from src.config.settings import Configuracoes
from src.util.logger import logger

app = FastAPI(
    title="Gestão Escolar",
    description="API de boletim, frequência, regras de avaliação e validações do Censo Escolar",
    version="1.0.0",
)


@app.on_event("startup")
async def evento_inicializacao():
    """Executa ações de inicialização da aplicação.

    Retorno:
    - None: não retorna valor
    """
    logger.info(f"Inicializando API. Diretório de dados: {Configuracoes.DATA_DIR}")


controlador_boletim = ControladorBoletim()
app.include_router(controlador_boletim.roteador, prefix="/api/v1", tags=["Boletim"])

controlador_regras = ControladorRegras()
app.include_router(controlador_regras.roteador, prefix="/api/v1", tags=["Regras de Avaliação"])

controlador_validacao = ControladorValidacao()
app.include_router(controlador_validacao.roteador, prefix="/api/v1", tags=["Validações"])


@app.get("/health", tags=["Infraestrutura"])
def checar_saude():
    """Endpoint de health check.

    Retorno:
    - dict: status da aplicação
    """
    if not os.path.isdir(Configuracoes.DATA_DIR):
        raise HTTPException(status_code=503, detail=f"Diretório de dados indisponível: {Configuracoes.DATA_DIR}")
    return {"status": "ok"}


if __name__ == "__main__":
    porta = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=porta)
