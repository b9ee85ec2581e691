"""Response models of the Brave Search APIs.

Every field is optional: the API only includes the sections relevant to the
query and the subscription plan. Unknown keys are ignored, so new response
fields never break decoding; the full decoded body stays available as
``raw`` on the top-level responses.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def _obj(data: Any, key: str, factory: Callable[[dict[str, Any]], T]) -> Optional[T]:
    value = data.get(key)
    return factory(value) if isinstance(value, dict) else None


def _list(data: Any, key: str, factory: Callable[[dict[str, Any]], T]) -> list[T]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [factory(item) for item in value if isinstance(item, dict)]


def _strings(data: Any, key: str) -> list[str]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _drop_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            k: _drop_empty(v)
            for k, v in value.items()
            if v is not None and v != [] and k != "raw"
        }
    if isinstance(value, list):
        return [_drop_empty(v) for v in value]
    return value


class _Model:
    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict, leaving out unset fields."""
        return _drop_empty(asdict(self))


@dataclass
class Thumbnail(_Model):
    src: Optional[str] = None
    original: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None
    logo: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Thumbnail":
        return cls(
            src=data.get("src"),
            original=data.get("original"),
            height=data.get("height"),
            width=data.get("width"),
            logo=data.get("logo"),
        )


@dataclass
class MetaUrl(_Model):
    """Aggregated information about a URL."""

    scheme: Optional[str] = None
    netloc: Optional[str] = None
    hostname: Optional[str] = None
    favicon: Optional[str] = None
    path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MetaUrl":
        return cls(
            scheme=data.get("scheme"),
            netloc=data.get("netloc"),
            hostname=data.get("hostname"),
            favicon=data.get("favicon"),
            path=data.get("path"),
        )


@dataclass
class Profile(_Model):
    """The site or entity a result comes from."""

    name: Optional[str] = None
    long_name: Optional[str] = None
    url: Optional[str] = None
    img: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        return cls(
            name=data.get("name"),
            long_name=data.get("long_name"),
            url=data.get("url"),
            img=data.get("img"),
        )


@dataclass
class QueryInfo(_Model):
    """The query as the search engine understood it."""

    original: Optional[str] = None
    altered: Optional[str] = None
    show_strict_warning: Optional[bool] = None
    is_navigational: Optional[bool] = None
    is_news_breaking: Optional[bool] = None
    spellcheck_off: Optional[bool] = None
    country: Optional[str] = None
    bad_results: Optional[bool] = None
    should_fallback: Optional[bool] = None
    more_results_available: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QueryInfo":
        return cls(
            original=data.get("original"),
            altered=data.get("altered"),
            show_strict_warning=data.get("show_strict_warning"),
            is_navigational=data.get("is_navigational"),
            is_news_breaking=data.get("is_news_breaking"),
            spellcheck_off=data.get("spellcheck_off"),
            country=data.get("country"),
            bad_results=data.get("bad_results"),
            should_fallback=data.get("should_fallback"),
            more_results_available=data.get("more_results_available"),
        )


@dataclass
class SearchResult(_Model):
    """A web search result."""

    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    age: Optional[str] = None
    page_age: Optional[str] = None
    language: Optional[str] = None
    family_friendly: Optional[bool] = None
    profile: Optional[Profile] = None
    meta_url: Optional[MetaUrl] = None
    thumbnail: Optional[Thumbnail] = None
    extra_snippets: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        return cls(
            title=data.get("title"),
            url=data.get("url"),
            description=data.get("description"),
            type=data.get("type"),
            subtype=data.get("subtype"),
            age=data.get("age"),
            page_age=data.get("page_age"),
            language=data.get("language"),
            family_friendly=data.get("family_friendly"),
            profile=_obj(data, "profile", Profile.from_dict),
            meta_url=_obj(data, "meta_url", MetaUrl.from_dict),
            thumbnail=_obj(data, "thumbnail", Thumbnail.from_dict),
            extra_snippets=_strings(data, "extra_snippets"),
        )


@dataclass
class Search(_Model):
    """The ``web`` section of a search response."""

    type: Optional[str] = None
    results: list[SearchResult] = field(default_factory=list)
    family_friendly: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Search":
        return cls(
            type=data.get("type"),
            results=_list(data, "results", SearchResult.from_dict),
            family_friendly=data.get("family_friendly"),
        )


@dataclass
class NewsResult(_Model):
    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None
    breaking: Optional[bool] = None
    age: Optional[str] = None
    meta_url: Optional[MetaUrl] = None
    thumbnail: Optional[Thumbnail] = None
    extra_snippets: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NewsResult":
        return cls(
            title=data.get("title"),
            url=data.get("url"),
            description=data.get("description"),
            source=data.get("source"),
            breaking=data.get("breaking"),
            age=data.get("age"),
            meta_url=_obj(data, "meta_url", MetaUrl.from_dict),
            thumbnail=_obj(data, "thumbnail", Thumbnail.from_dict),
            extra_snippets=_strings(data, "extra_snippets"),
        )


@dataclass
class News(_Model):
    type: Optional[str] = None
    results: list[NewsResult] = field(default_factory=list)
    mutated_by_goggles: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "News":
        return cls(
            type=data.get("type"),
            results=_list(data, "results", NewsResult.from_dict),
            mutated_by_goggles=data.get("mutated_by_goggles"),
        )


@dataclass
class VideoResult(_Model):
    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    age: Optional[str] = None
    duration: Optional[str] = None
    creator: Optional[str] = None
    publisher: Optional[str] = None
    meta_url: Optional[MetaUrl] = None
    thumbnail: Optional[Thumbnail] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoResult":
        video = data.get("video") if isinstance(data.get("video"), dict) else {}
        return cls(
            title=data.get("title"),
            url=data.get("url"),
            description=data.get("description"),
            age=data.get("age"),
            duration=video.get("duration"),
            creator=video.get("creator"),
            publisher=video.get("publisher"),
            meta_url=_obj(data, "meta_url", MetaUrl.from_dict),
            thumbnail=_obj(data, "thumbnail", Thumbnail.from_dict),
        )


@dataclass
class Videos(_Model):
    type: Optional[str] = None
    results: list[VideoResult] = field(default_factory=list)
    mutated_by_goggles: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Videos":
        return cls(
            type=data.get("type"),
            results=_list(data, "results", VideoResult.from_dict),
            mutated_by_goggles=data.get("mutated_by_goggles"),
        )


@dataclass
class Summarizer(_Model):
    """Pointer to a summary, redeemed through the Summarizer API."""

    key: str
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Summarizer":
        return cls(key=data.get("key") or "", type=data.get("type"))


@dataclass
class WebSearchApiResponse(_Model):
    """Top level response of the Web Search API."""

    type: Optional[str] = None
    query: Optional[QueryInfo] = None
    web: Optional[Search] = None
    news: Optional[News] = None
    videos: Optional[Videos] = None
    summarizer: Optional[Summarizer] = None
    discussions: Optional[dict[str, Any]] = None
    faq: Optional[dict[str, Any]] = None
    infobox: Optional[dict[str, Any]] = None
    locations: Optional[dict[str, Any]] = None
    mixed: Optional[dict[str, Any]] = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def web_results(self) -> list[SearchResult]:
        return self.web.results if self.web else []

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WebSearchApiResponse":
        def section(key: str) -> Optional[dict[str, Any]]:
            value = data.get(key)
            return value if isinstance(value, dict) else None

        return cls(
            type=data.get("type"),
            query=_obj(data, "query", QueryInfo.from_dict),
            web=_obj(data, "web", Search.from_dict),
            news=_obj(data, "news", News.from_dict),
            videos=_obj(data, "videos", Videos.from_dict),
            summarizer=_obj(data, "summarizer", Summarizer.from_dict),
            discussions=section("discussions"),
            faq=section("faq"),
            infobox=section("infobox"),
            locations=section("locations"),
            mixed=section("mixed"),
            raw=data,
        )


@dataclass
class TextLocation(_Model):
    start: Optional[int] = None
    end: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextLocation":
        return cls(start=data.get("start"), end=data.get("end"))


@dataclass
class SummarizerAnswer(_Model):
    """The part of the summary answering the query."""

    text: Optional[str] = None
    location: Optional[TextLocation] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummarizerAnswer":
        return cls(
            text=data.get("text"),
            location=_obj(data, "location", TextLocation.from_dict),
        )


@dataclass
class ReferenceSource(_Model):
    """A source used to write the summary."""

    type: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    img: Optional[str] = None
    locations: list[TextLocation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReferenceSource":
        return cls(
            type=data.get("type"),
            name=data.get("name"),
            url=data.get("url"),
            img=data.get("img"),
            locations=_list(data, "locations", TextLocation.from_dict),
        )


@dataclass
class SummarizerResult(_Model):
    summary: Optional[str] = None
    answer: Optional[SummarizerAnswer] = None
    references: list[ReferenceSource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummarizerResult":
        return cls(
            summary=data.get("summary"),
            answer=_obj(data, "answer", SummarizerAnswer.from_dict),
            references=_list(data, "references", ReferenceSource.from_dict),
        )


@dataclass
class SummarizerSearchApiResponse(_Model):
    """Top level response of the Summarizer API."""

    type: Optional[str] = None
    status: Optional[str] = None
    title: Optional[str] = None
    results: list[SummarizerResult] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_complete(self) -> bool:
        return self.status == "complete"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummarizerSearchApiResponse":
        return cls(
            type=data.get("type"),
            status=data.get("status"),
            title=data.get("title"),
            results=_list(data, "results", SummarizerResult.from_dict),
            raw=data,
        )


@dataclass
class SuggestResult(_Model):
    query: Optional[str] = None
    is_entity: Optional[bool] = None
    title: Optional[str] = None
    description: Optional[str] = None
    img: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SuggestResult":
        return cls(
            query=data.get("query"),
            is_entity=data.get("is_entity"),
            title=data.get("title"),
            description=data.get("description"),
            img=data.get("img"),
        )


@dataclass
class SuggestSearchApiResponse(_Model):
    """Top level response of the Suggest API."""

    type: Optional[str] = None
    query: Optional[QueryInfo] = None
    results: list[SuggestResult] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SuggestSearchApiResponse":
        return cls(
            type=data.get("type"),
            query=_obj(data, "query", QueryInfo.from_dict),
            results=_list(data, "results", SuggestResult.from_dict),
            raw=data,
        )
