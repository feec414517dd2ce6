"""Line-based prompt interface for the manual review loop."""

from typing import Optional, Protocol

from rich.console import Console


class Reviewer(Protocol):
    """Supplies one line of human input per prompt.

    ``ask`` raises ``EOFError`` once no more input is available; the review
    loop treats that as quitting.
    """

    def ask(self, question: str) -> str:
        ...

    def show(self, message: str) -> None:
        ...


class ConsoleReviewer:
    """Reviewer reading answers from the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, question: str) -> str:
        return self.console.input(f"[bold]{question}[/bold] ").strip()

    def show(self, message: str) -> None:
        self.console.print(message)
