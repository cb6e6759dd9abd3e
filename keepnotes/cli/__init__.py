"""
CLI Client Module.

Command-line client built with Typer. It drives the backend over HTTP
through the same client-side state and reorder protocol as the web client.

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py notes move 12 7
"""
