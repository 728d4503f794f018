"""CLI entry point for the range monitor app.

Provide access to the Typer app and main entry point. All command logic
lives in the cli subpackage.
"""

from pool_monitor.apps.range_monitor.cli import app

__all__ = ["app", "main"]


def main() -> None:
    """Run the range monitor CLI application."""
    app()


if __name__ == "__main__":
    main()
