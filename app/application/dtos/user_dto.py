# app/application/dtos/user_dto.py

"""
Schemas para dados de usuário.

Este módulo define os dtos Pydantic para os dados relacionados a usuários,
incluindo registro, login, troca de senha e administração. As regras de
formato já foram aplicadas pelo pipeline de validação; aqui ficam apenas
tipos e campos obrigatórios.
"""

from uuid import UUID
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from app.application.dtos.base_dto import CustomBaseModel
from app.domain.models.user_domain_model import Role


class RegisterInput(CustomBaseModel):
    """
    Schema para registro de um novo usuário.

    Um campo ``role`` enviado no corpo é ignorado: todo registro cria um "user".
    """
    username: Optional[str] = Field(None, description="Nome de usuário único.")
    email: Optional[EmailStr] = Field(None, description="Email do usuário. Deve ser único.")
    password: Optional[str] = Field(None, description="Senha, com no mínimo 6 caracteres.")


class LoginInput(CustomBaseModel):
    """Schema para autenticação por nome de usuário e senha."""
    username: Optional[str] = None
    password: Optional[str] = None


class PasswordUpdateInput(CustomBaseModel):
    """Schema para o usuário autenticado trocar a própria senha."""
    current_password: Optional[str] = Field(None, description="Senha atual.")
    new_password: Optional[str] = Field(None, description="Nova senha, com no mínimo 6 caracteres.")


class UserUpdate(CustomBaseModel):
    """
    Schema para administradores atualizarem qualquer usuário.

    Atualização parcial: apenas os campos enviados são alterados.
    """
    username: Optional[str] = None
    email: Optional[EmailStr] = Field(None, description="Novo email, único entre os usuários.")
    role: Optional[Role] = Field(None, description="Papel do usuário: user ou admin.")
    is_active: Optional[bool] = Field(None, description="Define se o usuário está ativo ou inativo.")


class PublicUser(CustomBaseModel):
    """
    Resumo do usuário devolvido junto com o token no registro e no login.
    """
    id: UUID
    username: str
    email: str
    role: str


class UserOutput(PublicUser):
    """
    Schema para retorno de dados de usuário.

    Utilizado para retornar dados do usuário nas APIs sem expor a senha.
    """
    is_active: bool = Field(..., description="Indica se o usuário está ativo.")
    created_at: Optional[datetime] = Field(None, description="Data e hora de criação do usuário.")
    updated_at: Optional[datetime] = Field(None, description="Data e hora da última atualização.")
