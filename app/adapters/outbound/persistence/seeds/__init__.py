# app/adapters/outbound/persistence/seeds/__init__.py

"""
Módulo de seeds para inicialização do banco de dados.

Este módulo contém funções para popular o banco de dados
com dados iniciais necessários para o funcionamento do sistema.
"""

import logging

from app.adapters.outbound.persistence.database import get_db_context
from app.adapters.outbound.persistence.seeds.admin import run_admin_seed

# Configurar logger
logger = logging.getLogger(__name__)


async def run_all_seeds() -> None:
    """
    Executa todos os scripts de seed em ordem.
    """
    logger.info("Iniciando execução de todos os seeds")

    async with get_db_context() as db:
        await run_admin_seed(db)

    logger.info("Todos os seeds foram executados com sucesso")
