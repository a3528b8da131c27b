"""Entry point for diffhue."""

import argparse
import sys
import traceback
from importlib.metadata import version

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from diffhue.logger import add_stderr_sink, get_logger
from diffhue.settings import LOG_LEVELS, SyntaxMode, ThemeMode, load_settings
from diffhue.themes import ResolvedThemes, ThemeError, ThemeResolver, ThemeSource

logger = get_logger(__name__)

EXIT_THEME_ERROR = 2


def get_version() -> str:
    """Get the installed package version.

    Returns:
        Version string, or "unknown" when package metadata is unavailable.
    """
    try:
        return version("diffhue")
    except Exception:
        return "unknown"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        Parsed arguments. Unset overrides are None so file settings apply.
    """
    parser = argparse.ArgumentParser(
        prog="diffhue",
        description="Resolve the UI and syntax highlighting themes of the diff viewer.",
    )
    parser.add_argument("--theme", metavar="NAME", help="UI theme name (overrides ui.theme.name)")
    parser.add_argument(
        "--theme-mode",
        choices=[mode.value for mode in ThemeMode],
        help="Light or dark mode (overrides ui.theme.mode)",
    )
    parser.add_argument(
        "--syntax-theme",
        metavar="ID",
        help="Syntax theme name, .tmTheme file name or path (overrides ui.syntax.theme)",
    )
    parser.add_argument("--no-syntax", action="store_true", help="Disable syntax highlighting")
    parser.add_argument("--list-themes", action="store_true", help="List built-in UI themes and exit")
    parser.add_argument("--list-syntax-themes", action="store_true", help="List syntax themes and exit")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level for messages on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser.parse_args(argv)


def _print_ui_themes(console: Console, resolver: ThemeResolver) -> None:
    table = Table(title="UI themes")
    table.add_column("Name", style="bold")
    table.add_column("Label")
    table.add_column("Dark", justify="center")
    table.add_column("Light", justify="center")
    for info in resolver.list_ui_themes():
        table.add_row(info.name, info.label, "yes" if info.dark else "-", "yes" if info.light else "-")
    console.print(table)


def _print_syntax_themes(console: Console, resolver: ThemeResolver) -> None:
    table = Table(title="Syntax themes")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Source", overflow="fold")
    for entry in resolver.list_syntax_themes():
        source = entry.source.value if entry.source is ThemeSource.EMBEDDED else str(entry.path)
        table.add_row(entry.name, source)
    console.print(table)


def _print_resolved(console: Console, resolved: ResolvedThemes) -> None:
    ui = resolved.ui
    console.print(f"[bold]UI theme:[/bold] {escape(ui.name)} ({escape(ui.label)}, {ui.mode.value})")
    if resolved.syntax is None:
        console.print("[bold]Syntax theme:[/bold] off")
    else:
        syntax = resolved.syntax
        console.print(
            f"[bold]Syntax theme:[/bold] {escape(syntax.identifier)} "
            f"({escape(syntax.document.name)}, {syntax.source.value})"
        )

    table = Table(title="Palette")
    table.add_column("Token")
    table.add_column("Color")
    table.add_column("")
    for token, color in ui.colors.items():
        table.add_row(token, color, Text("    ", style=f"on {_swatch_color(color)}"))
    console.print(table)


def _swatch_color(color: str) -> str:
    """Convert a palette color to the ``#rrggbb`` form rich accepts.

    Short ``#rgb`` colors are expanded and the alpha of ``#rrggbbaa`` is dropped.
    """
    if len(color) == 4:
        return "#" + "".join(channel * 2 for channel in color[1:])
    return color[:7]


def main(args: argparse.Namespace) -> int:
    """Resolve themes or list them.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Process exit code.
    """
    settings = load_settings().with_overrides(
        theme=args.theme,
        theme_mode=ThemeMode(args.theme_mode) if args.theme_mode else None,
        syntax_theme=args.syntax_theme,
        syntax_mode=SyntaxMode.OFF if args.no_syntax else None,
    )
    add_stderr_sink(args.log_level or settings.log_level)

    console = Console()
    resolver = ThemeResolver()

    if args.list_themes:
        _print_ui_themes(console, resolver)
        return 0
    if args.list_syntax_themes:
        _print_syntax_themes(console, resolver)
        return 0

    try:
        resolved = resolver.resolve_all(settings.ui_theme, settings.syntax)
    except ThemeError as exc:
        logger.debug(f"Theme resolution failed: {exc}")
        Console(stderr=True).print(f"[bold red]error:[/bold red] {escape(str(exc))}")
        return EXIT_THEME_ERROR

    _print_resolved(console, resolved)
    return 0


def run() -> None:
    """Run the CLI with standard Python tracebacks."""
    args = parse_args()
    try:
        code = main(args)
    except Exception:
        # Print standard Python traceback instead of Rich's fancy one
        traceback.print_exc()
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    run()
