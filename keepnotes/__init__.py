"""
KeepNotes.

- backend/: REST API, database, configuration
- frontend/: Client-side note state, ordering and optimistic reordering
- cli/: Command-line client (Typer + Rich)
"""
