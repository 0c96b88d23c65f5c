"""Entry point for running equalsguard as a module."""

from equalsguard.cli_entry import main

if __name__ == "__main__":
    main()
