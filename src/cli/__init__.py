"""CLI tools for SongPicker.

- ``python -m src.cli`` — list, add, delete, search, and pick songs
  against the same JSON catalog the API server uses.

The CLI uses argparse and constructs its own CatalogStore rather than
going through the API, since commands run as one-shot scripts.
"""
