"""
Configuration management commands for equalsguard CLI.

Handles ``config show``, ``config init`` and ``config validate``.
"""

import sys

from equalsguard.config import ConfigurationError, EqualsGuardConfig, load_config


def cmd_config(args) -> int:
    """Handle config command."""
    if args.config_action == "show":
        config = load_config(getattr(args, "config", None))
        print("Current equalsguard Configuration:")
        print(config.get_config_summary())

    elif args.config_action == "init":
        config = EqualsGuardConfig.default()
        try:
            config.to_file(args.path, args.format)
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Default configuration file created at {args.path}")
        print("Edit the file to customize your equalsguard settings.")

    elif args.config_action == "validate":
        try:
            EqualsGuardConfig.load(args.config_file, use_env=False, validate=True)
            print(f"Configuration file {args.config_file} is valid")
        except ConfigurationError as e:
            print(f"Error: Configuration file is invalid: {e}", file=sys.stderr)
            return 1

    else:
        print("Error: config requires an action (show, init, validate)", file=sys.stderr)
        return 1

    return 0
