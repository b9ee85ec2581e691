"""Answer a prompt with Claude, using Brave web results as context."""

from typing import AsyncIterator, List, Optional

from brave_opus.anthropic.client import AnthropicClient
from brave_opus.anthropic.models import MessageBody
from brave_opus.anthropic.streaming.reducer import TextDelta
from brave_opus.brave.client import BraveClient
from brave_opus.brave.models import SearchResult
from brave_opus.brave.params import MAX_QUERY_CHARS, MAX_QUERY_WORDS, WebSearchParams
from brave_opus.logging import get_client_logger

logger = get_client_logger(__name__)

DEFAULT_MODEL = "claude-3-opus-20240229"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_RESULT_COUNT = 5

SYSTEM_PROMPT = (
  "You answer questions using the web search results provided in the "
  "<search_results> tag. Cite the sources you use by their number, and say "
  "so when the results do not contain the answer."
)


def build_context_prompt(prompt: str, results: List[SearchResult]) -> str:
  """Prepend numbered search results to ``prompt``."""
  if not results:
    return prompt

  lines = ["<search_results>"]
  for i, result in enumerate(results, 1):
    lines.append(f"[{i}] {result.title or 'Untitled'}")
    if result.url:
      lines.append(f"URL: {result.url}")
    if result.description:
      lines.append(result.description)
    for snippet in result.extra_snippets:
      lines.append(f"- {snippet}")
    lines.append("")
  lines.append("</search_results>")
  lines.append("")
  lines.append(prompt)
  return "\n".join(lines)


async def answer_with_search(
  brave: BraveClient,
  anthropic: AnthropicClient,
  prompt: str,
  model: str = DEFAULT_MODEL,
  max_tokens: int = DEFAULT_MAX_TOKENS,
  count: int = DEFAULT_RESULT_COUNT,
  system: Optional[str] = None,
) -> AsyncIterator[TextDelta]:
  """Search the web for ``prompt`` and stream Claude's answer.

  The search query is the prompt itself, cut to the query length limits.
  """
  query = " ".join(prompt.split()[:MAX_QUERY_WORDS])[:MAX_QUERY_CHARS]
  params = WebSearchParams(q=query, count=count, extra_snippets=True)
  search = await brave.search(params)
  results = search.web_results[:count]
  logger.info("Search context ready", results=len(results))

  body = MessageBody.from_prompt(
    build_context_prompt(prompt, results),
    model=model,
    max_tokens=max_tokens,
    system=system or SYSTEM_PROMPT,
  )
  async for delta in anthropic.message_delta_stream(body):
    yield delta
