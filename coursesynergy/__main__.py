"""
Package entry point.

Allows running the application via:

    python -m coursesynergy

This simply forwards execution to coursesynergy.cli.main().
"""

from coursesynergy.cli import main

if __name__ == "__main__":
    main()
