"""Shared response pieces."""

from pydantic import BaseModel, ConfigDict, Field


class PaginationMeta(BaseModel):
    """Serialized with camelCase keys (currentPage, totalPages, ...)."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_count: int = Field(alias="totalCount")
    has_next_page: bool = Field(alias="hasNextPage")
    has_prev_page: bool = Field(alias="hasPrevPage")
    limit: int
