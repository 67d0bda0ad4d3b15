"""
cli.py - command line interface for the n-gram autocompleter
Features:
- Trains the engine from one or more UTF-8 text files at start-up
- One-shot query mode (--query) or an interactive loop with ranked suggestions
- Slash commands to inspect the model and swap the scoring strategy live
- Uses Rich for tables and formatting
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

# ui styling with Rich
from rich import box
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from ngram_autocompleter.core.autocompleter import Autocompleter
from ngram_autocompleter.core.ranker import Suggestion
from ngram_autocompleter.utils.config_manager import STRATEGIES, Config, ConfigurationError, EngineConfig
from ngram_autocompleter.utils.logger_utils import DEFAULT_LOG_PATH, configure_logging

# initialise console for rich output
console = Console()


class CLI:
    """Interactive front-end: type text, see the ranked next words."""

    def __init__(self, engine: Autocompleter, top_k: int = 5):
        self.engine = engine
        self.top_k = top_k
        self.running = True

    def run(self):
        """
        Main interactive loop:
        - Prompts the user for input.
        - Handles commands like /quit, /stats, /strategy.
        - Prints suggestions for anything else.
        """
        console.rule("[bold magenta]N-gram Autocompleter[/bold magenta]")
        console.print("[cyan]Type a phrase to see likely next words.[/cyan]")
        console.print("Commands: /quit /stats /strategy NAME /train TEXT\n")

        while self.running:
            try:
                fragment = Prompt.ask("[green]You[/green]", default="")
                if not fragment:
                    continue
                if fragment.startswith("/"):
                    self._handle_command(fragment)
                    continue
                self.show_suggestions(fragment)
            except (EOFError, KeyboardInterrupt):
                self.running = False
                console.print("\n[dim]bye[/dim]")

    # COMMAND HANDLING -----------------------------------------------------------
    def _handle_command(self, cmd: str):
        name, _, arg = cmd.partition(" ")
        arg = arg.strip()

        if name == "/quit":
            self.running = False
            return

        if name == "/stats":
            self._show_stats()
            return

        if name == "/strategy":
            try:
                self.engine.set_strategy(arg)
            except ConfigurationError as e:
                console.print(f"[red]{e}[/red]")
                return
            console.print(f"strategy -> [bold]{self.engine.strategy.name}[/bold]")
            return

        if name == "/train":
            if not arg:
                console.print("[yellow]usage: /train TEXT[/yellow]")
                return
            self.engine.train(arg)
            console.print("[dim]trained[/dim]")
            return

        console.print(f"[red]Unknown command:[/red] {cmd}")

    # OUTPUT ---------------------------------------------------------------
    def show_suggestions(self, text: str):
        t0 = time.perf_counter()
        suggestions = self.engine.predict(text, self.top_k)
        ms = (time.perf_counter() - t0) * 1000.0
        console.print(render_table(text, suggestions, f"{self.engine.strategy.name}, {ms:.2f} ms"))

    def _show_stats(self):
        table = Table(title="Model", box=box.SIMPLE)
        table.add_column("key")
        table.add_column("value", justify="right")
        for k, v in self.engine.stats().items():
            table.add_row(k, str(v))
        console.print(table)


def render_table(query: str, suggestions: List[Suggestion], caption: str = "") -> Table:
    table = Table(title=f"next after: {query!r}", caption=caption, box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("word", style="bold cyan")
    table.add_column("score", justify="right")
    if not suggestions:
        table.add_row("-", "[dim]no suggestions[/dim]", "")
    for i, s in enumerate(suggestions, 1):
        table.add_row(str(i), s.word, f"{s.score:.4f}")
    return table


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ngram-autocompleter",
                                description="Train an n-gram next-word model and query it.")
    p.add_argument("--train", nargs="*", default=[], metavar="FILE", help="UTF-8 text files to train on")
    p.add_argument("--config", metavar="PATH", help="JSON config file (created with defaults if missing)")
    p.add_argument("--order", type=int, help="n-gram order (3 = trigrams)")
    p.add_argument("--strategy", choices=STRATEGIES, help="scoring strategy")
    p.add_argument("--top-k", type=int, help="number of suggestions")
    p.add_argument("--query", help="print suggestions for this text and exit")
    p.add_argument("--verbose", action="store_true", help="debug logging")
    p.add_argument("--log-file", nargs="?", const=DEFAULT_LOG_PATH, metavar="PATH",
                   help=f"also write the log to a file (default {DEFAULT_LOG_PATH})")
    return p


def engine_config(args: argparse.Namespace) -> EngineConfig:
    settings = Config(args.config) if args.config else Config(path=None)
    return settings.to_engine_config(max_order=args.order, strategy=args.strategy, top_k=args.top_k)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING", path=args.log_file)

    try:
        cfg = engine_config(args)
        engine = Autocompleter(cfg)
    except ConfigurationError as e:
        console.print(f"[red]config error:[/red] {e}")
        return 2

    for name in args.train:
        path = Path(name)
        if not path.is_file():
            console.print(f"[red]not a file:[/red] {path}")
            return 1
        engine.train(path.read_text(encoding="utf-8"))
        console.print(f"[dim]trained on {path}[/dim]")

    cli = CLI(engine, top_k=cfg.top_k)
    if args.query is not None:
        cli.show_suggestions(args.query)
        return 0
    cli.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
