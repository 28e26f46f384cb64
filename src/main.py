"""Entry point for the MCP handler kit server.

Usage:
    # STDIO mode
    python main.py

    # Override the log level
    python main.py --log-level debug
"""

import asyncio
import logging
import sys

from core.config import LoggingConfig
from core.tool_logger import configure_logging

logger = logging.getLogger(__name__)


async def run_stdio_mode():
    """Run MCP server in STDIO mode.

    This mode is used for direct MCP client communication via stdio transport.
    Typically used when the server is spawned as a subprocess by an MCP client.
    """
    logger.info("Starting MCP handler kit server in STDIO mode")

    from protocol.stdio_server import run_stdio_server
    try:
        await run_stdio_server()
    except Exception as e:
        logger.error(f"STDIO server error: {e}", exc_info=True)
        sys.exit(1)


def main():
    """Main entry point with argument parsing."""
    import argparse

    parser = argparse.ArgumentParser(
        description="MCP handler kit server"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: from LOG_LEVEL env or info)"
    )

    args = parser.parse_args()

    logging_config = LoggingConfig.from_env()
    if args.log_level:
        logging_config = logging_config.model_copy(update={"level": args.log_level.upper()})
    configure_logging(logging_config)

    asyncio.run(run_stdio_mode())


if __name__ == "__main__":
    main()
