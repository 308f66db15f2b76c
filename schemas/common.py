from typing import Generic, List, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    content: List[T]
    total_elements: int
    total_pages: int
    page: int
    size: int

    @classmethod
    def of(cls, content: list, total_elements: int, page: int, size: int):
        total_pages = (total_elements + size - 1) // size if total_elements else 0
        return cls(
            content=content,
            total_elements=total_elements,
            total_pages=total_pages,
            page=page,
            size=size,
        )

    @classmethod
    def empty(cls, page: int, size: int):
        return cls(content=[], total_elements=0, total_pages=0, page=page, size=size)

    @classmethod
    def slice(cls, items: list, page: int, size: int):
        """Offset-paginate an already ordered list."""
        start = page * size
        return cls.of(items[start:start + size], len(items), page, size)
