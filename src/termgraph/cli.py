"""Command line interface for :mod:`termgraph`."""

import json
import sys
from typing import NoReturn

import click

from .backend.config import Config
from .errors import TermGraphError, error_response
from .store import StoreConfig
from .version import VERSION

__all__ = [
    "main",
]


@click.group()
@click.version_option(version=VERSION)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    r"""termgraph - taxonomy terms and graphs over a SPARQL store.

    Serve the HTTP API, or run its two operations directly against the
    store configured through GRAPHDB_URL, REPOSITORY_ID and BASE_URI.
    """
    import logging

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
        logging.getLogger("termgraph").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", force=True)


@main.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=Config.PORT, type=int, help="Port to listen on (default: $PORT or 3000)")
@click.option("--debug", is_flag=True, help="Run Flask in debug mode")
def serve(host: str, port: int, debug: bool) -> None:
    """Run the HTTP API (POST /insert-term, GET /graph)."""
    from .backend.app import create_app

    app = create_app()
    click.echo(f"termgraph listening on http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)


@main.command("insert-term")
@click.argument("label")
@click.option("--comment", default=None, help="Optional skos:note for the term")
@click.option("--parent", "parent_id", default=None, help="URI of the parent term (default: Root)")
def insert_term(label: str, comment: str, parent_id: str) -> None:
    """Insert a term labelled LABEL and print its identifier.


    Example:
      termgraph insert-term Apple --comment "A fruit" --parent http://conceptual-machines.org/Fruit
    """
    from .backend.services.term_service import TermService

    service = TermService(StoreConfig.from_mapping(vars(Config)))
    try:
        term = service.insert_term(label, comment=comment, parent_id=parent_id)
    except TermGraphError as exc:
        _fail(exc)
    click.echo(json.dumps({"termId": term.id, "uri": term.uri}, indent=2))


@main.command()
def graph() -> None:
    """Print the current graph as JSON nodes and edges."""
    from .backend.services.graph_service import GraphService

    service = GraphService(StoreConfig.from_mapping(vars(Config)))
    try:
        snapshot = service.fetch_graph()
    except TermGraphError as exc:
        _fail(exc)
    click.echo(json.dumps(snapshot.model_dump(), indent=2))


def _fail(exc: TermGraphError) -> NoReturn:
    payload, status = error_response(exc)
    click.echo(f"Error ({status}): {json.dumps(payload)}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    main()
