"""
Main application entry point for the gcloud MCP server.

Runs either the Streamable-HTTP gateway (default) or the stdio transport.
"""

# Standard library imports
import argparse
import asyncio
import sys
from pathlib import Path

# Third-party imports
import uvicorn
from dotenv import load_dotenv

# Local imports
from common.config import load_config
from common.logging import get_logger, setup_logging
from gateway.http import create_gateway_app
from gcloud_mcp.transports.stdio import main as stdio_main

# Load environment variables from .env file at module level
load_dotenv()

logger = get_logger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Google Cloud MCP Server")
    parser.add_argument("--port", type=int, help="Override the port to run on")
    parser.add_argument("--host", type=str, help="Override the host to run on")
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Serve MCP over stdin/stdout using GCLOUD_ACCESS_TOKEN / GCLOUD_PROJECT_ID",
    )
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    return parser.parse_args(argv)


def main() -> None:
    """Main entry point."""
    try:
        args = parse_args()
        config = load_config(args.config)
        setup_logging(config)

        if args.stdio:
            logger.info(event="application_starting", transport="stdio")
            asyncio.run(stdio_main(config))
            return

        app = create_gateway_app(config)

        host = args.host or config.server.host
        port = args.port or config.server.port

        logger.info(
            event="application_starting",
            transport="http",
            server=config.server.name,
            version=config.server.version,
            host=host,
            port=port,
        )

        # Run uvicorn synchronously (it creates its own event loop)
        uvicorn.run(
            app,
            host=host,
            port=port,
            log_config=None,  # Use our custom logging setup
            access_log=False,  # Disable default access logs
        )

    except KeyboardInterrupt:
        logger.info(event="application_shutdown", reason="Keyboard interrupt")
    except Exception as e:
        logger.critical(event="application_crashed", error=str(e), error_type=type(e).__name__)
        sys.exit(1)


if __name__ == "__main__":
    main()
