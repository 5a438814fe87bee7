"""CLI subcommand for Anagram Rush."""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from anagram.game import Feedback, GameSession, SessionSnapshot
from anagram.scheduler import DeferredScheduler
from anagram.scoring import Scorer
from anagram.word_bank import ConfigurationError, WordBank, default_words_file
from shared.utils.logging import log_summary, setup_logging

app = typer.Typer(help="Play Anagram Rush, the timed word-unscrambling game")
console = Console()

FEEDBACK_STYLES = {
    Feedback.CORRECT: "green",
    Feedback.EMPTY_GUESS: "yellow",
    Feedback.LENGTH_MISMATCH: "yellow",
    Feedback.WRONG_GUESS: "red",
    Feedback.IGNORED: "dim",
}


def _load_word_bank(words_file: Optional[str]) -> WordBank:
    """Load a word bank, exiting with an error message if it is unusable."""
    path = words_file or str(default_words_file())
    try:
        return WordBank.from_yaml(path)
    except FileNotFoundError:
        console.print(f"[red]Error: words file not found: {path}[/red]")
        raise typer.Exit(1)
    except ConfigurationError as e:
        console.print(f"[red]Error: invalid word bank {path}: {e}[/red]")
        raise typer.Exit(1)


def _tiles_table(session: GameSession) -> Table:
    """Render the scrambled word as a row of letter tiles."""
    table = Table(show_header=False, show_lines=True, box=None, padding=(0, 1))
    tiles = session.get_tiles()
    for _ in tiles:
        table.add_column(justify="center", min_width=3)
    table.add_row(*[f"[bold black on yellow] {letter} [/bold black on yellow]" for letter, _ in tiles])
    table.add_row(*[f"[dim]{points}[/dim]" for _, points in tiles])
    return table


def _display_round(session: GameSession) -> None:
    timer_style = "bold red" if session.is_time_low() else "red"
    console.print(
        f"\n[cyan]Score:[/cyan] {session.get_score()}   "
        f"[{timer_style}]Time: {session.get_time_left()}s[/{timer_style}]"
    )
    console.print(_tiles_table(session))
    console.print(f"[green]Clue:[/green] {session.get_clue()} "
                  f"[dim]({session.get_word_length()} letters)[/dim]")


def _display_feedback(result: SessionSnapshot) -> None:
    if result.feedback is None or not result.message:
        return
    style = FEEDBACK_STYLES.get(result.feedback, "white")
    console.print(f"[{style}]{result.message}[/{style}]")


def _display_game_over(session: GameSession) -> None:
    if session.get_time_left() == 0:
        console.print("\n[bold]⏰ Time's up![/bold]")

    table = Table(title="Game Over")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    summary = session.get_summary()
    table.add_row("Final Score", str(summary["score"]))
    table.add_row("Words Seen", str(summary["words_seen"]))
    table.add_row("Guesses", str(summary["total_guesses"]))
    table.add_row("Wrong Guesses", str(summary["wrong_guesses"]))
    console.print(table)

    console.print(f"[bold magenta]{session.get_final_message()}[/bold magenta]")


def _play_until_over(session: GameSession, scheduler: DeferredScheduler) -> None:
    """Drive one session from the terminal until the clock runs out.

    Ticks that elapse while waiting for input are applied before the guess is
    scored, so a guess typed after the deadline does not count.
    """
    while session.is_active():
        _display_round(session)
        try:
            raw = console.input("[bold]Your guess:[/bold] ")
        except (EOFError, KeyboardInterrupt):
            console.print("\n[yellow]Game abandoned.[/yellow]")
            session.end()
            break

        scheduler.run_pending()
        if not session.is_active():
            break

        result = session.submit_guess(raw)
        _display_feedback(result)

        if result.feedback is Feedback.CORRECT:
            time.sleep(GameSession.RELOAD_DELAY_MS / 1000)
        elif result.feedback is Feedback.WRONG_GUESS:
            time.sleep(GameSession.CLEAR_DELAY_MS / 1000)
        scheduler.run_pending()


@app.command()
def play(
    words_file: Optional[str] = typer.Option(
        None, "--words-file", "-w", envvar="ANAGRAM_WORDS_FILE", help="Path to words YAML file"
    ),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible games"),
    duration: int = typer.Option(
        GameSession.TIME_BUDGET, "--duration", "-d", envvar="ANAGRAM_DURATION", help="Seconds per game"
    ),
    log_path: str = typer.Option("logs/anagram", help="Directory for log files"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Play Anagram Rush in the terminal.

    Unscramble as many words as you can before the clock runs out.
    Each correct word scores 1 point.
    """
    log_dir = Path(log_path)
    setup_logging(log_dir, verbose)
    logger = logging.getLogger(__name__)

    word_bank = _load_word_bank(words_file)
    scheduler = DeferredScheduler()

    try:
        session = GameSession(word_bank, scheduler=scheduler, time_budget=duration, seed=seed)
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Error starting game: {e}[/red]")
        raise typer.Exit(1)

    run_id = f"{datetime.now().strftime('%Y-%m-%dT%H-%M-%S')}_anagram"
    session.init_controllog(Path("logs"), run_id)

    console.print("[bold]🔤 Anagram Rush![/bold]")
    console.print(f"[dim]{len(word_bank)} words loaded. You have {duration} seconds.[/dim]")

    session.start()
    while True:
        _play_until_over(session, scheduler)
        log_summary(logger, session.get_summary(), f"Game {session.game_id} complete")
        _display_game_over(session)

        if not typer.confirm("Play again?", default=False):
            break
        session.reset()


@app.command()
def words(
    words_file: Optional[str] = typer.Option(
        None, "--words-file", "-w", envvar="ANAGRAM_WORDS_FILE", help="Path to words YAML file"
    ),
):
    """List the words in a word bank."""
    word_bank = _load_word_bank(words_file)

    table = Table(title=f"Word Bank ({len(word_bank)} words)")
    table.add_column("Word", style="cyan", no_wrap=True)
    table.add_column("Letters", justify="right")
    table.add_column("Tile Points", justify="right", style="dim")
    table.add_column("Clue", style="green")

    for entry in word_bank:
        points = sum(Scorer.letter_value(letter) for letter in entry.word)
        table.add_row(entry.word.upper(), str(len(entry.word)), str(points), entry.clue)

    console.print(table)


@app.command()
def validate(
    words_file: Optional[str] = typer.Option(
        None, "--words-file", "-w", envvar="ANAGRAM_WORDS_FILE", help="Path to words YAML file"
    ),
):
    """Check that a word bank can be used for a game."""
    word_bank = _load_word_bank(words_file)
    word_bank.validate()
    console.print(f"[green]✅ {len(word_bank)} words OK[/green]")
