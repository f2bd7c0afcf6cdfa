from typing import Any, Dict, List, TypeVar
from sqlalchemy import desc
from sqlalchemy.orm import Query
from flask_smorest import abort
from math import ceil

# Type variable for the paginated model
T = TypeVar("T")


class Paginator:
    def __init__(
        self,
        query: Query[T],
        page: int = 1,
        per_page: int = 20,
        preserve_order: bool = False,
    ) -> None:
        """
        Initialize paginator with SQLAlchemy query

        Args:
            query: SQLAlchemy query object
            page: Current page number (default: 1)
            per_page: Items per page (default: 20)
            preserve_order: Keep the ordering already applied to the query
                instead of the newest-first default
        """
        self.query: Query[T] = query
        self.page: int = page
        self.per_page: int = per_page
        self.preserve_order: bool = preserve_order
        self.max_per_page: int = 100  # Safety limit

    @property
    def entity(self):
        return self.query.column_descriptions[0]["entity"]

    def paginate(self) -> Dict[str, Any]:
        """
        Apply pagination to the query

        Returns:
            Dictionary containing:
            - items: List of paginated items
            - page: Current page number
            - per_page: Items per page
            - total_items: Total number of items
            - total_pages: Total number of pages
        """
        self._validate_pagination_params()

        if not self.preserve_order and hasattr(self.entity, "created_at"):
            self.query = self.query.order_by(
                desc(getattr(self.entity, "created_at")), desc(self.entity.id)
            )

        items: List[T] = (
            self.query.limit(self.per_page)
            .offset((self.page - 1) * self.per_page)
            .all()
        )

        total: int = self.query.order_by(None).count()

        return {
            "items": items,
            "page": self.page,
            "per_page": self.per_page,
            "total_items": total,
            "total_pages": ceil(total / self.per_page) if total else 0,
        }

    def _validate_pagination_params(self) -> None:
        """Validate pagination parameters"""
        if self.page < 1:
            abort(400, message="Page must be positive integer")

        if self.per_page < 1 or self.per_page > self.max_per_page:
            abort(400, message=f"per_page must be between 1 and {self.max_per_page}")
