# academic_records/utils/pagination.py
"""Pagination helpers shared by the list endpoints."""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from fastapi import Query

class PaginationParams(BaseModel):
    page: int = Field(1, ge=1, description="Page number (starts from 1)")
    size: int = Field(10, ge=1, le=100, description="Items per page")

class Paginator:

    @staticmethod
    def get_pagination_params(
        page: int = Query(1, ge=1, description="Page number"),
        size: int = Query(10, ge=1, le=100, description="Items per page")
    ) -> PaginationParams:
        """FastAPI dependency for pagination parameters."""
        return PaginationParams(page=page, size=size)

    @staticmethod
    def calculate_offset(page: int, size: int) -> int:
        return (page - 1) * size

    @staticmethod
    def create_response(
        items: List[Any],
        page: int,
        size: int,
        total: int,
        additional_info: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """One page of items with its counters, as every list endpoint returns it"""
        response = {
            "items": items,
            "total": total,
            "page": page,
            "size": size,
            "total_pages": (total + size - 1) // size,
            "has_next": page * size < total,
            "has_previous": page > 1,
        }
        if additional_info:
            response.update(additional_info)
        return response

    @staticmethod
    def paginate_list(items: List[Any], page: int, size: int) -> List[Any]:
        """Slice an already filtered list"""
        offset = Paginator.calculate_offset(page, size)
        return items[offset:offset + size]
