# app/adapters/outbound/persistence/seeds/admin.py

"""
Seed da conta administradora inicial.

As credenciais passam pela mesma sanitização aplicada ao corpo das
requisições, para que a senha armazenada corresponda à que o login recebe.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.domain.models.user_domain_model import Role
from app.shared.utils.input_validation import InputValidator, AUTH_RULES

logger = logging.getLogger(__name__)


def admin_credentials() -> dict:
    """
    Credenciais do administrador como o pipeline de requisições as veria.

    Raises:
        ValueError: Se usuário, email ou senha violam as regras de cadastro
    """
    username = settings.ADMIN_USERNAME
    raw = {
        "username": username,
        "email": settings.ADMIN_EMAIL or f"{username}@localhost.localdomain",
        "password": settings.ADMIN_PASSWORD,
    }
    credentials = InputValidator.sanitize(raw)

    error = InputValidator.first_error(credentials, AUTH_RULES)
    if error:
        raise ValueError(f"Invalid admin seed configuration: {error}")
    return credentials


async def run_admin_seed(db: AsyncSession) -> None:
    """
    Cria o administrador definido em ADMIN_USERNAME / ADMIN_PASSWORD, se ainda não existir.

    Uma conta existente com o mesmo nome não é alterada.
    """
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        logger.info("Admin seed skipped: ADMIN_USERNAME/ADMIN_PASSWORD not set")
        return

    credentials = admin_credentials()

    if await user_repository.get_by_username(db, credentials["username"]):
        logger.info(f"Admin '{credentials['username']}' already exists")
        return

    await user_repository.create_with_password(
        db,
        username=credentials["username"],
        email=credentials["email"],
        password=credentials["password"],
        role=Role.ADMIN.value,
    )
    logger.info(f"Admin '{credentials['username']}' created")
