"""Main entry point for the movie sitemap generator."""

import argparse
import sys

from .aggregator import SitemapAggregator
from .client import MovieApiClient
from .config import (
    ClientConfig,
    SitemapConfig,
    get_api_host,
    get_api_port,
    get_log_level,
)
from .logging_config import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate sitemap.xml for the movie site from its REST API."
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL env var or INFO).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file under --log-dir, rotated at 10MB.",
    )
    parser.add_argument(
        "--log-dir",
        default="logs",
        help="Directory for --log-file (default: logs).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write the sitemap once.")
    generate.add_argument(
        "-o",
        "--output",
        default="-",
        help="File to write the sitemap to (default: stdout).",
    )
    generate.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the movie API (default: PUBLIC_API_URL env var).",
    )
    generate.add_argument(
        "--site-url",
        default=None,
        help="Public site origin used in <loc> (default: PUBLIC_SITE_URL env var).",
    )
    generate.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Movies requested per page (default: SITEMAP_BATCH_SIZE env var or 500).",
    )
    generate.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP request timeout in seconds",
    )

    serve = subparsers.add_parser("serve", help="Serve /sitemap.xml over HTTP.")
    serve.add_argument("--host", default=None, help="Bind address.")
    serve.add_argument("--port", type=int, default=None, help="Listen port.")
    return parser


def _generate(args: argparse.Namespace) -> None:
    # --- Argument Validation ---
    if args.batch_size is not None and args.batch_size <= 0:
        print("Error: --batch-size must be a positive integer.", file=sys.stderr)
        sys.exit(1)

    client_config = ClientConfig.from_env()
    sitemap_config = SitemapConfig.from_env()
    client = MovieApiClient(
        ClientConfig(
            base_url=args.api_url or client_config.base_url,
            timeout=args.timeout if args.timeout is not None else client_config.timeout,
        )
    )
    aggregator = SitemapAggregator(
        client,
        SitemapConfig(
            site_url=args.site_url or sitemap_config.site_url,
            batch_size=args.batch_size or sitemap_config.batch_size,
        ),
    )
    xml = aggregator.generate()

    if args.output == "-":
        sys.stdout.write(xml)
        return
    try:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(xml)
    except IOError as e:
        print(f"Error writing sitemap to {args.output}: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Wrote sitemap to {args.output}", file=sys.stderr)


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    from .server import app

    uvicorn.run(
        app,
        host=args.host or get_api_host(),
        port=args.port or get_api_port(),
    )


def main():
    """Parses command-line arguments and runs the requested command."""
    args = _build_parser().parse_args()
    setup_logging(
        level=args.log_level or get_log_level(),
        log_file=args.log_file,
        log_dir=args.log_dir,
    )

    if args.command == "generate":
        _generate(args)
    else:
        _serve(args)


if __name__ == "__main__":
    main()
