from typing import Generic, List, TypeVar

from pydantic import BaseModel

# ======================================================
# Schéma de pagination commun
# ======================================================

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    items: List[T]
    total: int
