from math import ceil
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar('T')


class PaginationMeta(BaseModel):
    """Metadatos de paginación"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int = Field(..., description="Página actual (basada en 1)")
    limit: int = Field(..., description="Elementos por página")
    total: int = Field(..., description="Total de elementos")
    total_pages: int = Field(..., description="Total de páginas")


class PagedResponse(BaseModel, Generic[T]):
    """Respuesta paginada genérica: {data, pagination}"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: List[T] = Field(..., description="Lista de elementos")
    pagination: PaginationMeta


def page_offset(page: int, limit: int) -> int:
    """Desplazamiento SQL para una página basada en 1"""
    return (page - 1) * limit


def create_paged_response(
    items: List[T],
    total: int,
    page: int,
    limit: int
) -> PagedResponse[T]:
    """
    Crea una respuesta paginada

    Args:
        items: Lista de elementos de la página
        total: Total de elementos que cumplen el filtro
        page: Página actual (basada en 1)
        limit: Límite de elementos por página

    Returns:
        PagedResponse con metadatos de paginación
    """
    total_pages = ceil(total / limit) if limit > 0 else 0

    return PagedResponse(
        data=items,
        pagination=PaginationMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages
        )
    )
