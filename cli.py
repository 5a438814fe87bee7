"""Command-line interface for Anagram Rush.

This is the unified CLI entry point:
- `anagram game play` - Play a timed game in the terminal
- `anagram game words` - List the words in a word bank
- `anagram game validate` - Check a word bank file
- `anagram version` - Show version information
"""

import typer
from rich.console import Console

from anagram.cli_anagram import app as game_app

# Main application
app = typer.Typer(
    help="Anagram Rush - unscramble as many words as you can before time runs out",
    no_args_is_help=True,
)
console = Console()

app.add_typer(game_app, name="game", help="Play Anagram Rush and inspect word banks")


@app.callback()
def main():
    """Anagram Rush - a timed word-unscrambling game.

    Examples:

        # Play a standard 60 second game
        uv run anagram game play

        # Play a short, reproducible game with a custom word list
        uv run anagram game play --duration 30 --seed 42 --words-file my_words.yaml

        # Inspect a word list
        uv run anagram game words --words-file my_words.yaml
    """
    pass


@app.command()
def version():
    """Show version information."""
    from anagram import __version__ as anagram_version
    from anagram.game import GameSession
    from shared import __version__ as shared_version

    console.print("[bold]Anagram Rush[/bold]")
    console.print(f"  anagram: {anagram_version} (rules {GameSession.VERSION})")
    console.print(f"  shared: {shared_version}")


if __name__ == "__main__":
    app()
