"""Logging setup and console entry point."""

import logging
import sys

import structlog

from trade_with_me.config.constants import LOG_FORMAT


def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format=LOG_FORMAT,
        stream=sys.stderr,
        level=getattr(logging, level),
    )


def main() -> None:
    """Run the command line interface."""
    from trade_with_me.cli import app

    app()


if __name__ == "__main__":
    main()
