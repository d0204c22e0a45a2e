"""Logging configuration"""

import logging
import sys


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure logging for the entire application.

    Logs go to stderr: stdout carries the MCP stdio transport.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )
    return logging.getLogger("cariot-mcp")
