"""Command-line interface for the Brave Search and Claude clients."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click

from brave_opus.anthropic.client import AnthropicClient
from brave_opus.anthropic.client import Auth as AnthropicAuth
from brave_opus.anthropic.models import MessageBody
from brave_opus.brave.client import Auth as BraveAuth
from brave_opus.brave.client import BraveClient
from brave_opus.brave.params import (
    SuggestSearchParams,
    WebSearchParams,
    validate_freshness,
    validate_query,
    validate_result_filter,
)
from brave_opus.config import AppConfig, ConfigLoader
from brave_opus.exceptions import ClientError
from brave_opus.logging import configure_logging
from brave_opus.run import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, answer_with_search


def _validated(validator):
    def callback(ctx, param, value):
        if value is None:
            return value
        try:
            return validator(value)
        except ValueError as e:
            raise click.BadParameter(str(e))

    return callback


def _prompt(ctx, param, value):
    if not value.strip():
        raise click.BadParameter("Prompt cannot be empty")
    return value


def _print_json(response) -> None:
    click.echo(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))


def _run(coro):
    try:
        return asyncio.run(coro)
    except ClientError as e:
        raise click.ClickException(str(e))


def _brave_client(
    ctx: click.Context, subscription_token: Optional[str], subscription: str
) -> BraveClient:
    if subscription_token:
        return BraveClient(BraveAuth(subscription_token))
    config: Optional[AppConfig] = ctx.obj.get("config")
    if config is not None and "brave" in config.services:
        return BraveClient.from_config(config.get("brave"))
    return BraveClient(BraveAuth.from_env(subscription))


def _anthropic_client(
    ctx: click.Context, anthropic_api_key: Optional[str]
) -> AnthropicClient:
    if anthropic_api_key:
        return AnthropicClient(AnthropicAuth(anthropic_api_key))
    config: Optional[AppConfig] = ctx.obj.get("config")
    if config is not None and "anthropic" in config.services:
        return AnthropicClient.from_config(config.get("anthropic"))
    return AnthropicClient(AnthropicAuth.from_env())


def _credentials(func):
    for decorator in reversed(
        (
            click.option(
                "--subscription-token",
                help="Brave Search API subscription token "
                "(default: BRAVE_SUBSCRIPTION_TOKEN)",
            ),
            click.option("--api-version", help="Brave API version (YYYY-MM-DD)"),
        )
    ):
        func = decorator(func)
    return func


def _web_search_options(func):
    for decorator in reversed(
        (
            click.argument("q", callback=_validated(validate_query)),
            click.option("--country", help="2 character country code of the results"),
            click.option("--search-lang", help="Language of the results"),
            click.option("--ui-lang", help="User interface language of the response"),
            click.option(
                "--count", type=click.IntRange(1, 20), help="Number of results (max 20)"
            ),
            click.option(
                "--offset", type=click.IntRange(0, 9), help="Page offset (max 9)"
            ),
            click.option(
                "--safesearch", type=click.Choice(["off", "moderate", "strict"])
            ),
            click.option(
                "--freshness",
                callback=_validated(validate_freshness),
                help="pd, pw, pm, py or YYYY-MM-DDtoYYYY-MM-DD",
            ),
            click.option(
                "--result-filter",
                callback=_validated(validate_result_filter),
                help="Comma-separated result types",
            ),
            click.option("--goggles-id", help="Goggle URL or definition"),
            click.option("--units", type=click.Choice(["metric", "imperial"])),
            click.option(
                "--extra-snippets", is_flag=True, default=None, help="Include extra snippets"
            ),
        )
    ):
        func = decorator(func)
    return func


@click.group(invoke_without_command=True)
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the log level",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default="./config",
    show_default=True,
    help="Path to the configuration directory",
)
@click.option(
    "--config",
    "config_name",
    help="Configuration to load (filename without .yaml)",
)
@click.option(
    "--list-configs", is_flag=True, help="List the available configurations and exit"
)
@click.pass_context
def main(ctx, verbose, log_level, config_dir, config_name, list_configs):
    """Search the web with Brave and ask Claude about the results.

    Credentials come from command options, a YAML configuration selected with
    --config, or the environment.
    """
    configure_logging(
        debug_mode=verbose,
        log_level=log_level or ("DEBUG" if verbose else "WARNING"),
        structured=False,
    )

    if list_configs:
        try:
            names = ConfigLoader(Path(config_dir)).list_available_configs()
        except ClientError as e:
            raise click.ClickException(str(e))
        click.echo("Available configurations:")
        for name in names:
            click.echo(f"  {name}")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()

    ctx.ensure_object(dict)
    ctx.obj["config"] = None
    if config_name:
        try:
            ctx.obj["config"] = ConfigLoader(Path(config_dir)).load_config(config_name)
        except ClientError as e:
            raise click.ClickException(str(e))


@main.command()
@_web_search_options
@_credentials
@click.pass_context
def search(ctx, subscription_token, api_version, **options):
    """Query Brave Search and print the JSON response."""
    params = WebSearchParams(**options)

    async def _search():
        async with _brave_client(ctx, subscription_token, "web") as client:
            return await client.search(params, api_version)

    _print_json(_run(_search()))


@main.command()
@_web_search_options
@_credentials
@click.pass_context
def summarize(ctx, subscription_token, api_version, **options):
    """Summarize the search results for a query."""
    params = WebSearchParams(**options)

    async def _summarize():
        async with _brave_client(ctx, subscription_token, "web") as client:
            return await client.summarize(params, api_version)

    _print_json(_run(_summarize()))


@main.command()
@click.argument("q", callback=_validated(validate_query))
@click.option("--country", help="2 character country code")
@click.option("--lang", help="Language hint for the suggestions")
@click.option("--count", type=click.IntRange(1, 20), help="Number of suggestions")
@click.option("--rich", is_flag=True, help="Enhance suggestions with rich results")
@_credentials
@click.pass_context
def suggest(ctx, q, country, lang, count, rich, subscription_token, api_version):
    """Print query suggestions for a partial search term."""
    params = SuggestSearchParams(q=q, country=country, lang=lang, count=count, rich=rich)

    async def _suggest():
        async with _brave_client(ctx, subscription_token, "suggest") as client:
            return await client.suggest(params, api_version)

    _print_json(_run(_suggest()))


async def _echo_deltas(deltas) -> None:
    async for delta in deltas:
        if delta.is_final:
            click.echo()
        else:
            click.echo(delta.text, nl=False)


@main.command()
@click.argument("prompt", callback=_prompt)
@click.option("--model", default=DEFAULT_MODEL, show_default=True)
@click.option(
    "--max-tokens", type=click.IntRange(min=1), default=DEFAULT_MAX_TOKENS, show_default=True
)
@click.option("--system", help="System prompt")
@click.option(
    "--anthropic-api-key", help="Anthropic API key (default: ANTHROPIC_API_KEY)"
)
@click.pass_context
def chat(ctx, prompt, model, max_tokens, system, anthropic_api_key):
    """Stream Claude's reply to PROMPT."""
    body = MessageBody.from_prompt(prompt, model=model, max_tokens=max_tokens, system=system)

    async def _chat():
        async with _anthropic_client(ctx, anthropic_api_key) as client:
            await _echo_deltas(client.message_delta_stream(body))

    _run(_chat())


@main.command()
@click.argument("prompt", callback=_prompt)
@click.option("--model", default=DEFAULT_MODEL, show_default=True)
@click.option(
    "--max-tokens", type=click.IntRange(min=1), default=DEFAULT_MAX_TOKENS, show_default=True
)
@click.option(
    "--count", type=click.IntRange(1, 20), default=5, show_default=True,
    help="Number of search results used as context",
)
@click.option(
    "--anthropic-api-key", help="Anthropic API key (default: ANTHROPIC_API_KEY)"
)
@click.option(
    "--subscription-token",
    help="Brave Search API subscription token (default: BRAVE_SUBSCRIPTION_TOKEN)",
)
@click.pass_context
def run(ctx, prompt, model, max_tokens, count, anthropic_api_key, subscription_token):
    """Answer PROMPT with Claude, using Brave web results as context."""

    async def _answer():
        async with _brave_client(ctx, subscription_token, "web") as brave:
            async with _anthropic_client(ctx, anthropic_api_key) as anthropic:
                await _echo_deltas(
                    answer_with_search(
                        brave, anthropic, prompt, model=model, max_tokens=max_tokens, count=count
                    )
                )

    _run(_answer())


if __name__ == "__main__":
    main()
