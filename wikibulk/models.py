from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class Page(BaseModel):
    id: int
    path: str
    title: str | None = None
    tags: list[str] | None = Field(default=None, description="None and [] both mean no tags")

    @field_validator("tags", mode="before")
    @classmethod
    def _drop_null_tags(cls, value):
        # Wiki.js types the list as [String] so entries may be null
        if value is None:
            return None
        return [tag for tag in value if tag is not None]

    def has_tag(self, tag: str) -> bool:
        return tag in (self.tags or [])


class PageListing(BaseModel):
    pages: list[Page]
    pages_returned: int = Field(..., description="Count returned by the wiki before prefix filtering")


class ResponseStatus(BaseModel):
    succeeded: bool
    slug: str
    error_code: int
    message: str | None = None


class MoveOperation(BaseModel):
    page_id: int
    path: str
    destination_path: str


class TagOperation(BaseModel):
    page_id: int
    path: str
    tag: str
    title: str


class PageFailure(BaseModel):
    page_id: int
    path: str
    tag: str | None = None
    status: ResponseStatus


class UnconfirmedOperation(BaseModel):
    page_id: int
    path: str
    tag: str | None = None


class BatchReport(BaseModel):
    success_count: int
    failures: list[PageFailure] | None = None
    unconfirmed: list[UnconfirmedOperation] = Field(
        default_factory=list,
        description="Operations dispatched without a status in the reply",
    )

    @property
    def clean(self) -> bool:
        return self.failures is None


class MoveReport(BatchReport):
    prefix: str
    destination: str


class TagReport(BatchReport):
    safety_tag: str
    tags: list[str]


# --- HTTP surface -------------------------------------------------------------


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict | None = None


class HealthResponse(BaseModel):
    ok: bool


class ReadyResponse(BaseModel):
    ready: bool
    reason: str | None = None


class SiteTitleResponse(BaseModel):
    title: str


class PageListResponse(BaseModel):
    prefix: str
    count: int
    pages_returned: int
    pages: list[Page]
    private_page_ids: list[int] = Field(default_factory=list)


class BulkMoveRequest(BaseModel):
    prefix: str
    destination: str
    tags: list[str] | None = Field(default=None, description="Server-side tag filter for the listing")
    allow_private: bool = False


class BulkTagRequest(BaseModel):
    prefix: str
    destination: str = Field(..., description="Combined with prefix to derive the safety tag")
    tags: list[str] | None = None
    add_tags: list[str] = Field(default_factory=list)
    allow_private: bool = False
