"""Domain models shared by the backend client, the analysis core and the tools."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Raw counts arrive as display strings ("1,234") or plain numbers.
RawCount = str | int | float | None
Number = int | float


class SubtitleTrack(BaseModel):
    language: str | None = None
    source: str | None = None


class PostDetails(BaseModel):
    """A single post as returned by the backend ``post-detail`` and ``search`` endpoints."""

    model_config = ConfigDict(extra="ignore")

    description: str | None = ""
    video_id: str | int | None = ""
    creator: str | None = ""
    hashtags: list[str] | None = None
    likes: RawCount = None
    shares: RawCount = None
    comments: RawCount = None
    views: RawCount = None
    bookmarks: RawCount = None
    created_at: str | int | None = ""
    duration: RawCount = None
    available_subtitles: list[SubtitleTrack] | None = None


class SearchMetadata(BaseModel):
    cursor: str | None = ""
    has_more: bool | None = False
    search_uid: str | None = ""


class SearchResult(BaseModel):
    videos: list[PostDetails] = Field(default_factory=list)
    metadata: SearchMetadata = Field(default_factory=SearchMetadata)


class EngagementMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    likes: Number = 0
    shares: Number = 0
    comments: Number = 0
    views: Number = 0
    duration_seconds: Number = 0
    engagement: Number = 0
    engagement_rate: float = 0.0  # not capped at 1
    social_proof: Number = 0


class TextSignals(BaseModel):
    model_config = ConfigDict(frozen=True)

    hashtag_count: int = 0
    hook_hits: tuple[str, ...] = ()
    cta_hits: tuple[str, ...] = ()
    retention_hits: tuple[str, ...] = ()


class ViralityReport(BaseModel):
    metrics: EngagementMetrics
    signals: TextSignals
    recommendations: list[str] = Field(default_factory=list)


class ToolSpec(BaseModel):
    name: str
    description: str
    input_schema: dict = Field(default_factory=dict)


class ToolResult(BaseModel):
    text: str
    is_error: bool = False
