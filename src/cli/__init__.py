"""CLI tools for nightsWriter.

- ``python -m src.cli.blog`` - run the blog generator (generate, cleanup,
  stats) outside the web server.

All CLI modules use argparse and construct their dependencies through the
same factory as the API (``src.main.build_components``).
"""
