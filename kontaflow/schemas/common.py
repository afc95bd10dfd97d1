"""
Esquemas compartidos: base camelCase y sobres de respuesta
"""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar('T')


class CamelModel(BaseModel):
    """Base de todos los esquemas: JSON en camelCase, atributos en snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class InputModel(CamelModel):
    """Base para cuerpos de petición: recorta espacios en blanco"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True
    )


class DataResponse(CamelModel, Generic[T]):
    """Respuesta de lectura: {data}"""
    data: T


class MessageResponse(CamelModel, Generic[T]):
    """Respuesta de escritura: {data, message}"""
    data: T
    message: str


class DeleteResponse(CamelModel):
    """Respuesta de borrado: {success, message}"""
    success: bool = True
    message: str


class ErrorBody(CamelModel):
    code: str
    message: str
    details: Optional[dict] = None
    field: Optional[str] = None
    rule: Optional[str] = None


class ErrorResponse(CamelModel):
    """Sobre de error documentado en OpenAPI"""
    error: ErrorBody = Field(..., description="Código y mensaje del error")
