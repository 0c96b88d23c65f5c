"""
CLI command handlers.

- check.py: expression analysis
- config.py: configuration commands
"""

from .check import cmd_check
from .config import cmd_config

__all__ = ["cmd_check", "cmd_config"]
