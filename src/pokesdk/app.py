"""Typer application and CLI entry point for pokesdk.

Small command line over the SDK, handy for poking at the catalog from a
shell and for checking cache behaviour with ``--verbose``::

    pokesdk pokemon pikachu
    pokesdk generation 7 --json
    pokesdk names pokemon --page 2 --page-size 10
    pokesdk --cache --verbose names generation --all --page-size 3

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. :class:`~pokesdk.exceptions.PokeSDKError` instances
are printed to stderr and turned into the error's ``exit_code``.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Callable, Optional, TypeVar

import typer

from pokesdk import __version__
from pokesdk.exceptions import PokeSDKError
from pokesdk.exit_codes import EXIT_GENERIC_FAILURE
from pokesdk.models import ClientConfig
from pokesdk.resolver import Resolver, ResourceKind

T = TypeVar("T")

app = typer.Typer(
    name="pokesdk",
    help="Query the Pokémon catalog API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"pokesdk {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Catalog API root URL."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    cache: Optional[bool] = typer.Option(
        None, "--cache/--no-cache", help="Enable the in-memory response cache."
    ),
    cache_ttl: Optional[float] = typer.Option(
        None, "--cache-ttl", help="Cache entry lifetime in seconds."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Install the output manager and resolve the client configuration.

    The resolved :class:`~pokesdk.models.ClientConfig` is stored in
    ``ctx.obj["config"]`` for the sub-commands.
    """
    from pokesdk.config import resolve_config
    from pokesdk.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["config"] = _guard(
        lambda: resolve_config(
            base_url=base_url,
            timeout=timeout,
            cache_enabled=cache,
            cache_ttl=cache_ttl,
        )
    )


def make_resolver(config: ClientConfig) -> Resolver:
    """Build the resolver used by the commands. Tests replace this."""
    return Resolver(config)


def _guard(action: Callable[[], T]) -> T:
    """Run *action*, turning a :class:`PokeSDKError` into a clean CLI exit."""
    from pokesdk.output import error

    try:
        return action()
    except PokeSDKError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


def _show_resource(ctx: typer.Context, kind: ResourceKind, id_or_name: str) -> None:
    from pokesdk.output import get_output

    with make_resolver(ctx.obj["config"]) as resolver:
        resource = _guard(lambda: resolver.resource(kind, id_or_name).get())
    get_output().format_response(resource.model_dump(mode="json"))


@app.command("pokemon")
def pokemon_command(
    ctx: typer.Context,
    id_or_name: str = typer.Argument(..., help="Pokémon ID or name."),
) -> None:
    """Fetch a single Pokémon."""
    _show_resource(ctx, ResourceKind.POKEMON, id_or_name)


@app.command("generation")
def generation_command(
    ctx: typer.Context,
    id_or_name: str = typer.Argument(..., help="Generation ID or name."),
) -> None:
    """Fetch a single generation."""
    _show_resource(ctx, ResourceKind.GENERATION, id_or_name)


@app.command("names")
def names_command(
    ctx: typer.Context,
    kind: ResourceKind = typer.Argument(..., help="Resource kind to list."),
    page: int = typer.Option(1, "--page", min=1, help="Page to fetch (1-based)."),
    page_size: int = typer.Option(20, "--page-size", min=1, help="Names per page."),
    all_pages: bool = typer.Option(
        False, "--all", help="Keep advancing from --page until the last page."
    ),
) -> None:
    """List resource names page by page."""
    from pokesdk.output import get_output

    output = get_output()
    with make_resolver(ctx.obj["config"]) as resolver:
        cursor = resolver.names(kind, page=page, page_size=page_size)
        if all_pages:
            pages = _guard(lambda: list(cursor))
            names = [name for chunk in pages for name in chunk]
            output.info(f"Fetched {len(names)} names up to page {cursor.page}")
        else:
            names = _guard(lambda: cursor.get())
    output.format_response(names)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``pokesdk`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except PokeSDKError as exc:
        from pokesdk.output import error

        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        from pokesdk.output import error

        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
