"""Shared console helpers for the RAG prompt generator.

All user-facing output goes through the module-level Rich consoles; there
is no separate logging configuration. ``console`` writes to stdout and
``err_console`` to stderr. Errors and warnings always go to stderr, so
stdout can carry the raw document when it is piped. The generated document
itself is never passed through Rich markup.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rag_prompt.config import TECH_LAYERS, ProjectConfig

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def config_summary(config: ProjectConfig) -> dict[str, str]:
    """Flatten *config* into display rows for ``print_summary_table``."""
    rows: dict[str, str] = {
        "Project": config.project_name or "-",
        "Client": config.client_name or "-",
    }
    for layer in TECH_LAYERS:
        rows[layer.title()] = config.tech_stack.joined(layer) or "-"
    rows["AI model"] = config.ai_model.label
    rows["Vector database"] = config.vector_database.label
    rows["WhatsApp provider"] = config.whatsapp_provider.label
    enabled = [feature.label for feature, on in config.features.items() if on]
    rows["Features"] = ", ".join(enabled) or "-"
    return rows


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    err_console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
