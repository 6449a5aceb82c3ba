"""Allow running the CLI with ``python -m hsds_client``."""

from .cli import main

main()
