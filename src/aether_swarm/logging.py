"""Logging configuration for the swarm.

Everything logs under the ``aether_swarm`` logger. Modules use
``get_logger(__name__)``; each agent gets its own child logger under
``aether_swarm.agents`` so one agent's loop and tool calls can be
filtered out of a busy swarm, e.g. ``aether_swarm.agents.Aaliyah``.
"""

import logging
import os
import sys

ROOT_LOGGER = "aether_swarm"
AGENT_LOGGER = f"{ROOT_LOGGER}.agents"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str | None) -> int:
    # CLI flag > env var > WARNING
    name = (level or os.environ.get("AETHER_SWARM_LOG_LEVEL") or "WARNING").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        print(f"Warning: Invalid log level '{name}', using WARNING", file=sys.stderr)
        return logging.WARNING
    return numeric


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the swarm's stderr logging.

    Safe to call more than once; later calls only change the level.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).
               Falls back to AETHER_SWARM_LOG_LEVEL, then WARNING.

    Returns:
        The ``aether_swarm`` logger.
    """
    numeric_level = _resolve_level(level)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)


def get_agent_logger(agent_name: str) -> logging.Logger:
    """Get the logger an agent and its tool executor write to."""
    return logging.getLogger(f"{AGENT_LOGGER}.{agent_name}")
