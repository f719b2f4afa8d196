from __future__ import annotations

import asyncio
import json
import sys
from typing import Optional

import typer
from psycopg.conninfo import conninfo_to_dict, make_conninfo

from people_cache.config import get_settings
from people_cache.generator import BulkGenerator
from people_cache.infrastructure.store import PostgresStoreClient
from people_cache.load.harness import LoadHarness, LoadTestConfig
from people_cache.reporter import print_report
from people_cache.utils.logging import configure_logging
from people_cache.utils.profiler import profile_block

app = typer.Typer(help="people-cache CLI: cached reads, bulk generation, load testing.")


def _masked_conninfo(conninfo: str) -> str:
    params = conninfo_to_dict(conninfo)
    if params.get("password"):
        params["password"] = "***"
    return make_conninfo(**params)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={_masked_conninfo(settings.database_url)} | "
        f"ttl={settings.cache_ttl_seconds}s generate={settings.generate_count} | "
        f"load clients={settings.load_clients} url={settings.load_target_url} "
        f"duration={settings.load_duration_seconds}s"
    )


@app.command()
def generate(
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        help="Number of people to insert (default from settings).",
    ),
    first_id: int = typer.Option(
        0,
        "--first-id",
        help=(
            "Id of the first generated person. Ids already in the table violate the "
            "primary key and roll back the whole batch, so a second run needs a fresh range."
        ),
    ),
) -> None:
    """
    Insert synthetic people in a single transaction.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    total = count if count is not None else settings.generate_count

    generator = BulkGenerator(PostgresStoreClient(settings.database_url))
    with profile_block("generate") as stats:
        committed = generator.generate(total, first_id=first_id)

    if not committed:
        typer.echo(f"Generation of {total:,} people rolled back.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Inserted {total:,} people in {stats.duration_seconds:.2f}s.")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port."),
) -> None:
    """
    Run the HTTP service that serves the cached people list.
    """
    import uvicorn

    from people_cache.service.app import create_app

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    uvicorn.run(
        create_app(settings),
        host=host if host is not None else settings.service_host,
        port=port if port is not None else settings.service_port,
        log_config=None,
    )


@app.command("load-test")
def load_test(
    clients: Optional[int] = typer.Option(
        None, "--clients", "-c", help="Concurrent virtual clients (default from settings)."
    ),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Target URL."),
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Test duration in seconds."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON."),
) -> None:
    """
    Hammer an endpoint with concurrent clients for a fixed duration.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    config = LoadTestConfig.from_settings(
        settings, url=url, clients=clients, duration_seconds=duration
    )

    report = asyncio.run(LoadHarness(config).run())

    if as_json:
        typer.echo(json.dumps(report.summary(), indent=2))
    else:
        print_report(report)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
