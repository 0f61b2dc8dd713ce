"""Console color roles and status symbols."""

import sys
from typing import Any, Literal

import typer

SymbolSet = Literal["auto", "unicode", "windows"]

UNICODE_SYMBOLS = {"ok": "✓", "err": "✖", "bang": "!"}
WINDOWS_SYMBOLS = {"ok": "√", "err": "×", "bang": "!"}

DEFAULT_STYLES: dict[str, dict[str, Any]] = {
    "pass": {"fg": typer.colors.BRIGHT_BLACK},
    "fail": {"fg": typer.colors.RED},
    "bright pass": {"fg": typer.colors.BRIGHT_GREEN},
    "bright fail": {"fg": typer.colors.BRIGHT_RED},
    "bright yellow": {"fg": typer.colors.BRIGHT_YELLOW},
    "pending": {"fg": typer.colors.CYAN},
    "suite": {"bold": True},
    "skipped": {"fg": typer.colors.MAGENTA},
    "error message": {"fg": typer.colors.RED},
    "diff removed": {"fg": typer.colors.RED},
    "diff added": {"fg": typer.colors.GREEN},
    "fast": {"fg": typer.colors.BRIGHT_BLACK},
    "medium": {"fg": typer.colors.YELLOW},
    "slow": {"fg": typer.colors.RED},
}


def _symbols_for(symbols: SymbolSet) -> dict[str, str]:
    if symbols == "windows" or (symbols == "auto" and sys.platform == "win32"):
        return dict(WINDOWS_SYMBOLS)
    return dict(UNICODE_SYMBOLS)


class ColorTheme:
    """Maps named color roles and symbols to console text."""

    def __init__(
        self,
        use_color: bool = True,
        symbols: SymbolSet = "auto",
        styles: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        """Initialize the theme.

        Args:
            use_color: Emit ANSI styling; plain text when False
            symbols: Which status symbol set to use
            styles: Role overrides merged over the defaults

        """
        self.use_color = use_color
        self.symbols = _symbols_for(symbols)
        self.styles = {**DEFAULT_STYLES, **(styles or {})}

    def color(self, role: str, text: object) -> str:
        """Return ``text`` styled for ``role``."""
        text = str(text)
        style = self.styles.get(role)
        if not self.use_color or style is None:
            return text
        return typer.style(text, **style)

    def symbol(self, name: str) -> str:
        """Return the symbol registered under ``name`` (ok, err or bang)."""
        return self.symbols[name]
