"""Base dos schemas: JSON em camelCase, atributos em snake_case"""
from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel
from typing import Annotated

# Contadores e placares: inteiros JSON não negativos ("3" é rejeitado)
Count = Annotated[StrictInt, Field(ge=0)]


class CamelModel(BaseModel):
    """Schema base com aliases camelCase"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelInput(CamelModel):
    """Schema de entrada: campos desconhecidos são recusados"""

    model_config = ConfigDict(extra="forbid")
