"""
AniArt Package Main Entry Point

Runs the Typer CLI when the package is executed with `python -m aniart`.
"""

from aniart.cli.typer_app import app

if __name__ == "__main__":
    app()
