"""
cli.py - simulated shell with inline next-word suggestions
Features:
- Grey inline suggestion while typing (prompt_toolkit AutoSuggest), TAB or → to accept
- Commands are "executed" by echoing them; nothing is run
- Retrains + saves the model every `train_every` commands, or on `train`
- One-shot `suggest` and `train` sub-commands for scripting
- Uses Rich for output and tables
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shell_autocompleter.core.model import CommandModel
from shell_autocompleter.errors import SnapshotError
from shell_autocompleter.utils.config_manager import Config
from shell_autocompleter.utils.logger_utils import Log

logger = logging.getLogger(__name__)

# initialise console for rich output
console = Console()

PROMPT = "$ "


class ModelAutoSuggest(AutoSuggest):
    """Asks the model for a completion once the line has at least `min_chars` characters."""

    def __init__(self, model: CommandModel, min_chars: int = 2):
        self.model = model
        self.min_chars = min_chars

    def get_suggestion(self, buffer, document: Document) -> Optional[Suggestion]:
        text = document.text
        if len(text) < self.min_chars:
            return None
        suffix = self.model.get_suggestion(text)
        return Suggestion(suffix) if suffix else None


class ShellSession:
    """
    Owns the command history and decides when to train/save.
    handle_line() is the whole policy; run() only adds the prompt loop around it.
    """

    def __init__(self, model: CommandModel, model_path: str,
                 train_every: int = 5, min_suggest_chars: int = 2):
        self.model = model
        self.model_path = model_path
        self.train_every = max(1, int(train_every))
        self.min_suggest_chars = min_suggest_chars
        self.history: List[str] = []

    # Line handling -----------------------------------------------------------
    def handle_line(self, line: str) -> bool:
        """Process one submitted line. Returns False when the session should end."""
        command = line.strip().lower()
        if not line.strip():
            return True
        if command == "exit":
            return False
        if command == "train":
            console.print("[cyan]Training the model with current history...[/cyan]")
            if self._train_and_save():
                console.print("[green]Training complete and model saved.[/green]")
            return True
        if command == "stats":
            self.show_stats()
            return True

        self.history.append(line)
        console.print(f"[dim]Executing:[/dim] {escape(line)}")
        if len(self.history) % self.train_every == 0:
            self._train_and_save()
        return True

    def _train_and_save(self) -> bool:
        self.model.train(self.history)
        try:
            self.model.save_model(self.model_path)
        except OSError as e:
            logger.error("Saving model to %s failed: %s", self.model_path, e)
            console.print(f"[red]Could not save model:[/red] {escape(str(e))}")
            return False
        return True

    def show_stats(self):
        stats = self.model.stats()
        table = Table(title="model")
        table.add_column("metric", style="cyan")
        table.add_column("value", justify="right")
        table.add_row("history", str(len(self.history)))
        for k, v in stats.items():
            table.add_row(k, str(v))
        console.print(table)

    # Prompt loop --------------------------------------------------------------
    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("tab")
        def _(event):
            buf = event.current_buffer
            if buf.suggestion:
                buf.insert_text(buf.suggestion.text)

        return kb

    def run(self):
        console.rule("[bold magenta]Shell with next-word suggestions[/bold magenta]")
        console.print("[cyan]Type 'exit' to quit, 'train' to retrain the model, 'stats' for model size[/cyan]")
        session = PromptSession(
            auto_suggest=ModelAutoSuggest(self.model, self.min_suggest_chars),
            key_bindings=self._key_bindings(),
        )
        while True:
            try:
                line = session.prompt(PROMPT)
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_line(line):
                break


# Entry point -------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shell-autocomplete",
        description="Simulated shell that suggests the rest of the word you are typing.",
    )
    parser.add_argument("--config", default="config.json", help="JSON config file (created if missing)")
    parser.add_argument("--model", help="snapshot file (overrides config model_path)")
    parser.add_argument("--seed", type=int, help="seed for embedding initialisation")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("shell", help="interactive shell (default)")
    p_suggest = sub.add_parser("suggest", help="print the suggestion for a partial command")
    p_suggest.add_argument("text")
    p_train = sub.add_parser("train", help="train on a file of commands, one per line, and save")
    p_train.add_argument("file")
    return parser


def _read_commands(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return [ln.rstrip("\n") for ln in f if ln.strip()]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    Log.setup(args.log_level or cfg.get("log_level", "INFO"))

    if args.seed is not None:
        cfg.data["seed"] = args.seed  # this run only, not saved
    model = CommandModel.from_config(cfg)
    model_path = args.model or cfg["model_path"]

    if os.path.exists(model_path):
        try:
            model.load_model(model_path)
        except SnapshotError as e:
            console.print(f"[red]Cannot load model:[/red] {escape(str(e))}")
            return 1
        logger.info("Loaded existing model.")

    if args.command == "suggest":
        console.print(model.get_suggestion(args.text), markup=False, highlight=False)
        return 0

    if args.command == "train":
        try:
            commands = _read_commands(args.file)
            model.train(commands)
            model.save_model(model_path)
        except OSError as e:
            logger.error("train from %s failed: %s", args.file, e)
            console.print(f"[red]Training failed:[/red] {escape(str(e))}")
            return 1
        console.print(f"Trained on {len(commands)} commands, saved to {escape(model_path)}")
        return 0

    ShellSession(
        model,
        model_path,
        train_every=cfg["train_every"],
        min_suggest_chars=cfg["min_suggest_chars"],
    ).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
