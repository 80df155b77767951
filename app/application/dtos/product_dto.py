# app/application/dtos/product_dto.py

"""
Schemas para dados de produto.
"""

from uuid import UUID
from decimal import Decimal
from datetime import datetime
from typing import Optional
from pydantic import Field, field_serializer

from app.application.dtos.base_dto import CustomBaseModel


class ProductCreate(CustomBaseModel):
    """Schema para criação de produto. ``name`` e ``price`` são obrigatórios."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = Field(None, description="Unidades em estoque, padrão 0.")
    category: Optional[str] = None


class ProductUpdate(CustomBaseModel):
    """Schema para atualização parcial de produto."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    category: Optional[str] = None


class CreatorSummary(CustomBaseModel):
    """Dados públicos do criador incluídos nas consultas de produto."""
    id: UUID
    username: str
    email: str


class ProductOutput(CustomBaseModel):
    """
    Schema para retorno de produto.
    """
    id: UUID
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int
    category: Optional[str] = None
    owner_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class ProductWithCreatorOutput(ProductOutput):
    """Produto com o resumo do criador; requer ``owner`` carregado."""
    creator: CreatorSummary = Field(..., validation_alias="owner")
