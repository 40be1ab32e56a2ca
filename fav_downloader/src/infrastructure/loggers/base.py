"""Console logger with rich markup support used across the whole app"""

from __future__ import annotations

from rich.console import Console


class RichLogger:
    """
    Small logging facade over the rich console.

    Every message is prefixed with the logger name and a level marker,
    `tab_level` shifts the message to show nesting (page -> asset).
    """

    def __init__(self, prefix: str, console: Console | None = None) -> None:
        self.prefix = prefix
        self.console = console or Console()

    def _print(
        self,
        marker: str,
        message: str,
        *,
        tab_level: int = 0,
        highlight: bool = True,
    ) -> None:
        indent = '\t' * tab_level
        self.console.print(
            f'{indent}[bold]{self.prefix}[/bold] {marker} {message}',
            highlight=highlight,
        )

    def info(self, message: str, *, tab_level: int = 0, highlight: bool = True) -> None:
        self._print('[blue]INFO[/blue]', message, tab_level=tab_level, highlight=highlight)

    def success(self, message: str, *, tab_level: int = 0, highlight: bool = True) -> None:
        self._print('[green]OK[/green]', message, tab_level=tab_level, highlight=highlight)

    def warning(self, message: str, *, tab_level: int = 0, highlight: bool = True) -> None:
        self._print('[yellow]WARN[/yellow]', message, tab_level=tab_level, highlight=highlight)

    def error(self, message: str, *, tab_level: int = 0, highlight: bool = True) -> None:
        self._print('[red]ERROR[/red]', message, tab_level=tab_level, highlight=highlight)

    def wait(self, message: str, *, tab_level: int = 0, highlight: bool = True) -> None:
        """Report a long blocking operation (e.g. rate limit cooldown)"""
        self._print('[magenta]WAIT[/magenta]', message, tab_level=tab_level, highlight=highlight)
