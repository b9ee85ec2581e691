"""Query parameters of the Brave Web Search and Suggest APIs."""

import re
from dataclasses import dataclass
from typing import Optional

MAX_QUERY_CHARS = 400
MAX_QUERY_WORDS = 50
MAX_COUNT = 20
MAX_OFFSET = 9

RESULT_FILTERS = (
    "discussions",
    "faq",
    "infobox",
    "news",
    "query",
    "summarizer",
    "videos",
    "web",
)
SAFESEARCH_LEVELS = ("off", "moderate", "strict")
FRESHNESS_PERIODS = ("pd", "pw", "pm", "py")
FRESHNESS_RANGE = re.compile(r"^\d{4}-\d{2}-\d{2}to\d{4}-\d{2}-\d{2}$")
UNITS = ("metric", "imperial")

QueryParams = list[tuple[str, str]]


def validate_query(q: str) -> str:
    """Check the search term against the API limits."""
    if not q or not q.strip():
        raise ValueError("Query cannot be empty")
    if len(q) > MAX_QUERY_CHARS:
        raise ValueError(
            f"Query term is too long. Maximum {MAX_QUERY_CHARS} characters allowed"
        )
    if len(q.split()) > MAX_QUERY_WORDS:
        raise ValueError(
            f"Query term is too long. Maximum {MAX_QUERY_WORDS} words allowed"
        )
    return q


def validate_result_filter(result_filter: str) -> str:
    """Check a comma separated list of result types."""
    for value in result_filter.split(","):
        if value not in RESULT_FILTERS:
            raise ValueError(
                "Invalid result filter value. It should be a comma-separated list "
                f"of these values: {', '.join(RESULT_FILTERS)}"
            )
    return result_filter


def validate_freshness(freshness: str) -> str:
    """Accept a period shortcut or a ``YYYY-MM-DDtoYYYY-MM-DD`` range."""
    if freshness in FRESHNESS_PERIODS or FRESHNESS_RANGE.match(freshness):
        return freshness
    raise ValueError(
        "Invalid freshness value. Must be 'pd', 'pw', 'pm', 'py' or "
        "'YYYY-MM-DDtoYYYY-MM-DD'"
    )


def validate_count(count: int) -> int:
    if not 1 <= count <= MAX_COUNT:
        raise ValueError(f"Count must be between 1 and {MAX_COUNT}")
    return count


def validate_offset(offset: int) -> int:
    if not 0 <= offset <= MAX_OFFSET:
        raise ValueError(f"Offset must be between 0 and {MAX_OFFSET}")
    return offset


def validate_safesearch(safesearch: str) -> str:
    if safesearch not in SAFESEARCH_LEVELS:
        raise ValueError(
            f"Safesearch must be one of: {', '.join(SAFESEARCH_LEVELS)}"
        )
    return safesearch


def _render(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class WebSearchParams:
    """Parameters of ``GET /web/search``.

    Only ``q`` is required; unset parameters are left out of the query string
    so the API applies its own defaults.
    """

    q: str
    country: Optional[str] = None
    search_lang: Optional[str] = None
    ui_lang: Optional[str] = None
    count: Optional[int] = None
    offset: Optional[int] = None
    safesearch: Optional[str] = None
    freshness: Optional[str] = None
    text_decorations: Optional[bool] = None
    spellcheck: Optional[bool] = None
    result_filter: Optional[str] = None
    goggles_id: Optional[str] = None
    units: Optional[str] = None
    extra_snippets: Optional[bool] = None
    summary: Optional[bool] = None

    def __post_init__(self):
        """Validate parameters after initialization."""
        validate_query(self.q)

        if self.count is not None:
            validate_count(self.count)

        if self.offset is not None:
            validate_offset(self.offset)

        if self.safesearch is not None:
            validate_safesearch(self.safesearch)

        if self.freshness is not None:
            validate_freshness(self.freshness)

        if self.result_filter is not None:
            validate_result_filter(self.result_filter)

        if self.units is not None and self.units not in UNITS:
            raise ValueError(f"Units must be one of: {', '.join(UNITS)}")

    def to_query_params(self) -> QueryParams:
        """Return the ordered ``(name, value)`` pairs of the query string."""
        params: QueryParams = [("q", self.q)]
        for name in (
            "country",
            "search_lang",
            "ui_lang",
            "count",
            "offset",
            "safesearch",
            "freshness",
            "text_decorations",
            "spellcheck",
            "result_filter",
            "goggles_id",
            "units",
            "extra_snippets",
        ):
            value = getattr(self, name)
            if value is not None:
                params.append((name, _render(value)))

        # The summarizer key is only generated for summary=1
        if self.summary:
            params.append(("summary", "1"))
        return params


@dataclass
class SuggestSearchParams:
    """Parameters of ``GET /suggest/search``."""

    q: str
    country: Optional[str] = None
    lang: Optional[str] = None
    count: Optional[int] = None
    rich: bool = False

    def __post_init__(self):
        validate_query(self.q)
        if self.count is not None:
            validate_count(self.count)

    def to_query_params(self) -> QueryParams:
        params: QueryParams = [("q", self.q)]
        if self.country is not None:
            params.append(("country", self.country))
        if self.lang is not None:
            params.append(("lang", self.lang))
        if self.count is not None:
            params.append(("count", str(self.count)))
        if self.rich:
            params.append(("rich", "1"))
        return params
