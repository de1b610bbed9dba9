"""Pydantic models for content API requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from content.domain.value_objects import ContentEntry, ContentPage


class EntryRequest(BaseModel):
    """Request body for creating or updating an entry."""

    data: dict[str, Any] = Field(..., description="Entry fields")


class EntryResponse(BaseModel):
    """Response carrying a single entry."""

    data: dict[str, Any]

    @classmethod
    def from_entry(cls, entry: ContentEntry) -> EntryResponse:
        return cls(data=entry)


class Pagination(BaseModel):
    """Pagination metadata of a listing."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    page_size: int = Field(..., alias="pageSize")
    page_count: int = Field(..., alias="pageCount")
    total: int


class ListMeta(BaseModel):
    pagination: Pagination


class EntryListResponse(BaseModel):
    """Response carrying one page of entries."""

    data: list[dict[str, Any]]
    meta: ListMeta

    @classmethod
    def from_page(cls, page: ContentPage) -> EntryListResponse:
        """Convert a ContentPage to an API response."""
        return cls(
            data=page.entries,
            meta=ListMeta(
                pagination=Pagination(
                    page=page.page,
                    page_size=page.page_size,
                    page_count=page.page_count,
                    total=page.total,
                )
            ),
        )
