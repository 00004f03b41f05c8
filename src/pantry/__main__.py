"""Allow running as python -m pantry."""

from .cli import main

main()
