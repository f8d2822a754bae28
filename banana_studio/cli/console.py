"""Rich Console для CLI.

Attributes:
    console: Общий Rich Console; команды и рендереры пишут через него.
"""

from rich.console import Console

console = Console()

__all__ = ["console"]
