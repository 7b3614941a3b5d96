"""CLI entry point for solrnode."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solrnode.config.settings import Settings


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="solrnode",
        description="solrnode — Apache Solr operations for workflow items",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"solrnode {_get_version()}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    serve.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    run = subparsers.add_parser("run", help="Execute one node run and print its output as JSON")
    run.add_argument(
        "request",
        nargs="?",
        default="-",
        help="Execution request JSON file ('-' or omitted reads stdin)",
    )
    run.add_argument(
        "--continue-on-failure",
        action="store_true",
        default=None,
        help="Record per-item errors instead of aborting (overrides the request)",
    )

    args = parser.parse_args(argv)

    settings = _load_settings(args.config)
    if args.log_level:
        settings.observability.log_level = args.log_level

    from solrnode.observability.logging import setup_logging

    # `run` prints its output JSON on stdout
    setup_logging(settings.observability, stream=sys.stderr if args.command == "run" else sys.stdout)

    if args.command == "serve":
        _serve(args, settings)
    else:
        sys.exit(_run(args, settings))


def _load_settings(config: str | None) -> Settings:
    from solrnode.config.settings import Settings

    if config:
        config_path = Path(config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        return Settings.from_yaml(config_path)
    return Settings()


def _serve(args: argparse.Namespace, settings: Settings) -> None:
    import uvicorn

    from solrnode.api.app import create_app

    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers

    if args.reload or settings.server.workers > 1:
        # Reload and multi-worker modes need an import string; settings come from env/YAML.
        uvicorn.run(
            "solrnode.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            workers=1 if args.reload else settings.server.workers,
            reload=args.reload,
            log_level=settings.observability.log_level.lower(),
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.observability.log_level.lower(),
    )


def _run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a run; returns the process exit code."""
    from pydantic import ValidationError

    from solrnode.core.dispatcher import execute_node
    from solrnode.core.host import StaticParameterSource
    from solrnode.exceptions import SolrNodeError
    from solrnode.models.execution import ExecutionRequest, ExecutionResponse

    if args.request == "-":
        raw = sys.stdin.read()
    else:
        request_path = Path(args.request)
        if not request_path.is_file():
            print(f"Error: Request file not found: {request_path}", file=sys.stderr)
            return 2
        raw = request_path.read_text(encoding="utf-8")

    try:
        request = ExecutionRequest.model_validate_json(raw)
    except ValidationError as e:
        print(f"Error: Invalid execution request: {e}", file=sys.stderr)
        return 2

    if args.continue_on_failure is not None:
        request.continue_on_failure = args.continue_on_failure

    source = StaticParameterSource(request, default_credentials=settings.solr.credentials)
    try:
        output = asyncio.run(execute_node(source, timeout=settings.solr.timeout))
    except SolrNodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    response = ExecutionResponse(output=output)
    print(json.dumps(response.model_dump(mode="json", by_alias=True)["output"], indent=2, ensure_ascii=False))
    return 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from solrnode import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
