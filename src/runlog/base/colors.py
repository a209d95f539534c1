"""ANSI color helpers backed by colorama."""

from typing import Optional

from colorama import Fore, Style

from runlog.base.config import LogConfig, get_default_config

GREEN = Fore.GREEN
RED = Fore.RED
YELLOW = Fore.YELLOW


def color(text: str, code: str, bold: bool = False, config: Optional[LogConfig] = None) -> str:
    """Wrap text in an ANSI color code.

    Args:
        text: Text to colorize.
        code: A colorama foreground code (e.g., ``GREEN``).
        bold: Whether to also render the text bright/bold.
        config: Rendering configuration. Uses the default config if not provided.

    Returns:
        The colorized text, or the text unchanged when colorizing is disabled.
    """
    config = config or get_default_config()
    if not config.colorize_logging:
        return text
    mode = Style.BRIGHT if bold else ""
    return f"{mode}{code}{text}{Style.RESET_ALL}"
