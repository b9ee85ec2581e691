"""Unit tests for Brave Search response models."""

from brave_opus.brave.models import (
  SuggestSearchApiResponse,
  SummarizerSearchApiResponse,
  WebSearchApiResponse,
)


WEB_SEARCH_RESPONSE = {
  "type": "search",
  "query": {"original": "brave browser", "is_navigational": True, "country": "us"},
  "web": {
    "type": "search",
    "family_friendly": True,
    "results": [
      {
        "title": "Brave Browser",
        "url": "https://brave.com/",
        "description": "Secure, fast and private web browser",
        "type": "search_result",
        "profile": {"name": "Brave", "url": "https://brave.com/", "img": "https://img/x.png"},
        "meta_url": {"scheme": "https", "netloc": "brave.com", "hostname": "brave.com", "path": ""},
        "extra_snippets": ["Block ads", 42],
        "new_field_from_api": {"nested": True},
      },
      "not a result",
    ],
  },
  "news": {"type": "news", "results": [{"title": "Brave news", "breaking": False}]},
  "videos": {"type": "videos", "results": [{"title": "Clip", "video": {"duration": "01:02"}}]},
  "summarizer": {"type": "summarizer", "key": "{\"query\": \"brave browser\"}"},
  "mixed": {"type": "mixed", "main": [{"type": "web", "index": 0}]},
}


class TestWebSearchApiResponse:
  """Test cases for WebSearchApiResponse."""

  def test_from_dict(self):
    response = WebSearchApiResponse.from_dict(WEB_SEARCH_RESPONSE)

    assert response.type == "search"
    assert response.query.original == "brave browser"
    assert response.query.is_navigational is True
    assert len(response.web_results) == 1

    result = response.web_results[0]
    assert result.title == "Brave Browser"
    assert result.profile.name == "Brave"
    assert result.meta_url.hostname == "brave.com"
    assert result.extra_snippets == ["Block ads"]

    assert response.news.results[0].breaking is False
    assert response.videos.results[0].duration == "01:02"
    assert response.summarizer.key == "{\"query\": \"brave browser\"}"
    assert response.mixed == WEB_SEARCH_RESPONSE["mixed"]
    assert response.raw is WEB_SEARCH_RESPONSE

  def test_empty_response(self):
    """Test that every section is optional."""
    response = WebSearchApiResponse.from_dict({})

    assert response.web is None
    assert response.web_results == []
    assert response.summarizer is None

  def test_to_dict_drops_unset_fields(self):
    data = WebSearchApiResponse.from_dict({
      "type": "search",
      "web": {"results": [{"title": "T", "url": "https://t.example"}]},
    }).to_dict()

    assert data == {
      "type": "search",
      "web": {"results": [{"title": "T", "url": "https://t.example"}]},
    }


class TestSummarizerSearchApiResponse:
  """Test cases for SummarizerSearchApiResponse."""

  def test_from_dict(self):
    response = SummarizerSearchApiResponse.from_dict({
      "type": "summarizer",
      "status": "complete",
      "title": "Brave",
      "results": [{
        "summary": "Brave is a browser.",
        "answer": {"text": "a browser", "location": {"start": 9, "end": 18}},
        "references": [{
          "type": "reference",
          "name": "Brave",
          "url": "https://brave.com",
          "locations": [{"start": 0, "end": 5}],
        }],
      }],
    })

    assert response.is_complete
    result = response.results[0]
    assert result.answer.location.end == 18
    assert result.references[0].url == "https://brave.com"
    assert result.references[0].locations[0].start == 0

  def test_failed_status(self):
    response = SummarizerSearchApiResponse.from_dict({"type": "summarizer", "status": "failed"})

    assert not response.is_complete
    assert response.results == []


class TestSuggestSearchApiResponse:
  """Test cases for SuggestSearchApiResponse."""

  def test_from_dict(self):
    response = SuggestSearchApiResponse.from_dict({
      "type": "suggest",
      "query": {"original": "hel"},
      "results": [{"query": "hello"}, {"query": "helsinki", "is_entity": True, "title": "Helsinki"}],
    })

    assert [r.query for r in response.results] == ["hello", "helsinki"]
    assert response.results[1].is_entity is True
    assert response.to_dict()["results"][0] == {"query": "hello"}
