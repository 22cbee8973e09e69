"""Terminal prompt runner for interactive create."""

import typer
from rich.console import Console
from rich.markup import escape

from ..core.collaborators import PromptRunner
from ..create.errors import InteractionCancelledError
from ..create.interactive import Question, QuestionKind


class TyperPromptRunner(PromptRunner):
    """Renders one question at a time with typer prompts and the rich console.

    Selections accept either the option number or its text. Ctrl-C or end of
    input cancels the whole command.
    """

    def __init__(self, console: Console):
        self.console = console

    def run(self, question: Question):
        try:
            if question.kind is QuestionKind.CONFIRM:
                return typer.confirm(question.message, default=bool(question.default))
            if question.kind is QuestionKind.INPUT:
                return self._input(question)
            if question.kind is QuestionKind.SELECT:
                return self._select(question)
            return self._multiselect(question)
        except (typer.Abort, EOFError, KeyboardInterrupt):
            raise InteractionCancelledError() from None

    def _input(self, question: Question) -> str:
        if question.required:
            while True:
                value = typer.prompt(question.message).strip()
                if value:
                    return value
                self.console.print("[yellow]⚠[/yellow] A value is required")
        return typer.prompt(question.message, default="", show_default=False).strip()

    def _print_choices(self, question: Question) -> None:
        self.console.print()
        self.console.print(f"[bold]{escape(question.message)}[/bold]")
        for i, opt in enumerate(question.choices, 1):
            default_marker = " [dim](default)[/dim]" if opt == question.default else ""
            self.console.print(f"  [{i}] {escape(opt)}{default_marker}", highlight=False)

    def _pick(self, question: Question, token: str) -> str | None:
        """Map a number or option text onto a choice."""
        token = token.strip()
        try:
            idx = int(token) - 1
        except ValueError:
            lowered = token.lower()
            return next((c for c in question.choices if c.lower() == lowered), None)
        if 0 <= idx < len(question.choices):
            return question.choices[idx]
        return None

    def _select(self, question: Question) -> str:
        self._print_choices(question)
        default_idx = (
            question.choices.index(question.default) + 1
            if question.default in question.choices
            else 1
        )
        while True:
            choice = typer.prompt(
                f"Select [1-{len(question.choices)}]",
                default=str(default_idx),
                show_default=False,
            )
            picked = self._pick(question, choice)
            if picked is not None:
                return picked
            self.console.print(f"[yellow]⚠[/yellow] Not an option: {escape(choice)}", highlight=False)

    def _multiselect(self, question: Question) -> list[str]:
        self._print_choices(question)
        while True:
            raw = typer.prompt(
                "Select (comma-separated, empty for none)",
                default="",
                show_default=False,
            )
            tokens = [t for t in raw.split(",") if t.strip()]
            picked = [self._pick(question, t) for t in tokens]
            invalid = [t.strip() for t, p in zip(tokens, picked) if p is None]
            if not invalid:
                # Keep choice order and drop repeats
                return [c for c in question.choices if c in picked]
            self.console.print(
                f"[yellow]⚠[/yellow] Not an option: {escape(', '.join(invalid))}", highlight=False
            )
