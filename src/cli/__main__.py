"""Allow ``python -m src.cli`` execution (runs the blog generator CLI)."""

from src.cli.blog import main

main()
