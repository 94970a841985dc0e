"""CLI entry point: python -m circuitsnips"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from circuitsnips import __version__
from circuitsnips.config import CircuitSnipsConfig, LogLevel, TransportType


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="CircuitSnips - KiCad schematic snippet validation and transformation server",
    )
    parser.add_argument(
        "--version", action="version", version=f"circuitsnips {__version__}",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--sse-host",
        default=None,
        help="SSE server host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--sse-port",
        type=int,
        default=None,
        help="SSE server port (default: 8765)",
    )
    parser.add_argument(
        "--validate",
        metavar="PATH",
        default=None,
        help="Validate a schematic or snippet file, print the verdict and exit",
    )

    args = parser.parse_args(argv)

    if args.validate:
        return _validate_file(Path(args.validate))

    # Build config from CLI args + env vars
    overrides = {}
    if args.transport:
        overrides["transport"] = TransportType(args.transport)
    if args.log_level:
        overrides["log_level"] = LogLevel(args.log_level)
    if args.sse_host:
        overrides["sse_host"] = args.sse_host
    if args.sse_port:
        overrides["sse_port"] = args.sse_port

    config = CircuitSnipsConfig(**overrides)

    from circuitsnips.server import create_server
    mcp = create_server(config)

    if config.transport == TransportType.SSE:
        mcp.run(transport="sse", host=config.sse_host, port=config.sse_port)
    else:
        mcp.run(transport="stdio")
    return 0


def _validate_file(path: Path) -> int:
    """Print the validation verdict for a file. Returns the exit status."""
    from circuitsnips.schematic.validator import validate_schematic

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read {path}: {e}", file=sys.stderr)
        return 2

    verdict = validate_schematic(text)
    print(verdict.model_dump_json(indent=2, exclude={"normalized_text"}))
    return 0 if verdict.valid else 1


if __name__ == "__main__":
    sys.exit(main())
