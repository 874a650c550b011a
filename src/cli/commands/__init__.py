"""CLI command groups."""

__all__ = ["config", "prompts"]

from . import config, prompts
