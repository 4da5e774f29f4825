"""Allow running as `python -m template_setup`."""

from .cli import main

main()
