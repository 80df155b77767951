# app/application/dtos/base_dto.py

"""
Classe base para dtos personalizados.

Este módulo define a classe base CustomBaseModel que estende
o BaseModel do Pydantic com a convenção camelCase usada no JSON da API.
"""

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from typing import Any, Dict

from app.domain.exceptions import ValidationException


class CustomBaseModel(BaseModel):
    """
    Modelo base personalizado para todos os dtos da aplicação.

    Os campos são declarados em snake_case e expostos em camelCase
    (``is_active`` -> ``isActive``); ambos os nomes são aceitos na entrada.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @classmethod
    def parse(cls, data: Dict[str, Any]):
        """
        Constrói o dto a partir de um corpo já sanitizado.

        Raises:
            ValidationException: Se algum campo tiver tipo incompatível
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise ValidationException(detail=f"Invalid value for {field}")

    def to_json(self, exclude_none: bool = False) -> Dict[str, Any]:
        """
        Serializa o modelo para o formato do envelope de resposta.

        Args:
            exclude_none: Omite campos sem valor definido

        Returns:
            Dict[str, Any]: Dicionário JSON com chaves em camelCase
        """
        return self.model_dump(by_alias=True, mode="json", exclude_none=exclude_none)

    def changes(self) -> Dict[str, Any]:
        """Campos efetivamente enviados pelo cliente, em snake_case."""
        return self.model_dump(exclude_unset=True)
