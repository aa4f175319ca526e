"""Command line entry point for the RAG prompt generator.

Usage::

    rag-prompt generate --project-name "Atendimento X" --client-name "Empresa XYZ"
    rag-prompt generate --config project.json --enable analytics --copy
    rag-prompt generate --stdout > prompt.md
    rag-prompt interactive --output-dir ./prompts
    rag-prompt options
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.markdown import Markdown
from rich.table import Table

from rag_prompt import __version__
from rag_prompt.config import (
    TECH_LAYERS,
    AIModel,
    Feature,
    ProjectConfig,
    RagPromptError,
    Settings,
    VectorDatabase,
    WhatsAppProvider,
)
from rag_prompt.export import copy_to_clipboard, download_filename, write_document
from rag_prompt.renderer import get_renderer
from rag_prompt.utils import (
    config_summary,
    console,
    err_console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)
from rag_prompt.wizard import run_questionnaire, split_list

_ENUM_OPTIONS = (
    ("ai_model", "--ai-model", AIModel),
    ("vector_database", "--vector-database", VectorDatabase),
    ("whatsapp_provider", "--whatsapp-provider", WhatsAppProvider),
)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON configuration file used as the starting point",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--output", "-o",
        default=None,
        help="Write the document to this file",
    )
    target.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the document, named after the project "
             "(default: $RAG_PROMPT_OUTPUT_DIR or the current directory)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the raw markdown to stdout instead of writing a file",
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        help="Also copy the document to the system clipboard",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered markdown in the terminal (ignored with --stdout)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``rag-prompt`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="rag-prompt",
        description="Generate a detailed technical prompt for a WhatsApp RAG chatbot project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  rag-prompt generate --project-name 'Bot Atendimento' --copy\n"
            "  rag-prompt generate --config project.json --disable admin_dashboard\n"
            "  rag-prompt interactive --output-dir ./prompts\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Render the prompt from options and/or a config file")
    _add_output_arguments(gen)
    gen.add_argument("--project-name", default=None, help="Project name")
    gen.add_argument("--client-name", default=None, help="Client name")
    gen.add_argument("--description", default=None, help="Project description")
    for layer in TECH_LAYERS:
        gen.add_argument(
            f"--{layer}",
            default=None,
            metavar="LIST",
            help=f"Comma-separated {layer} technologies ('' for none)",
        )
    for _, flag, enum_cls in _ENUM_OPTIONS:
        gen.add_argument(flag, default=None, choices=[m.value for m in enum_cls])
    feature_names = [f.value for f in Feature]
    gen.add_argument(
        "--enable",
        action="append",
        default=[],
        choices=feature_names,
        metavar="FEATURE",
        help=f"Enable a feature (repeatable): {', '.join(feature_names)}",
    )
    gen.add_argument(
        "--disable",
        action="append",
        default=[],
        choices=feature_names,
        metavar="FEATURE",
        help="Disable a feature (repeatable)",
    )
    gen.add_argument("--additional-requirements", default=None, help="Free-text extra requirements")

    inter = sub.add_parser("interactive", help="Answer questions, then render the prompt")
    _add_output_arguments(inter)

    sub.add_parser("options", help="List accepted values for every choice")
    return parser


# ---------------------------------------------------------------------------
# Configuration assembly
# ---------------------------------------------------------------------------


def config_from_args(args: argparse.Namespace) -> ProjectConfig:
    """Apply the ``generate`` options on top of the base configuration.

    Options that were not given leave the base value untouched.
    """
    config = ProjectConfig.load(args.config) if args.config else ProjectConfig()

    for field in ("project_name", "client_name", "description", "additional_requirements"):
        value = getattr(args, field)
        if value is not None:
            config = config.with_field(field, value)

    for layer in TECH_LAYERS:
        value = getattr(args, layer)
        if value is not None:
            config = config.with_tech_stack(layer, split_list(value))

    for field, _, _ in _ENUM_OPTIONS:
        value = getattr(args, field)
        if value is not None:
            config = config.with_field(field, value)

    for name in args.enable:
        config = config.with_feature(name, True)
    for name in args.disable:
        config = config.with_feature(name, False)
    return config


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _emit(config: ProjectConfig, args: argparse.Namespace, settings: Settings) -> None:
    """Render *config* and deliver it to every requested destination."""
    text = get_renderer().render(config)

    if args.stdout:
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        print_summary_table(config_summary(config), title="Project configuration")
        if args.preview:
            console.print(Markdown(text))
        if args.output:
            target = Path(args.output)
        else:
            if not config.project_name:
                print_warning(f"No project name given, using \"{settings.default_basename}\" for the filename")
            out_dir = Path(args.output_dir) if args.output_dir else settings.output_dir
            target = out_dir / download_filename(config, settings)
        written = write_document(text, target)
        print_success(f"Prompt written to {written}")

    if args.copy:
        copy_to_clipboard(text)
        # Keep stdout clean for the document when piping.
        if not args.stdout:
            print_success("Prompt copied to the clipboard")


def _print_options() -> None:
    table = Table(title="Accepted values", show_header=True, header_style="bold cyan")
    table.add_column("Option", no_wrap=True)
    table.add_column("Value")
    table.add_column("Label", style="dim")
    for _, flag, enum_cls in _ENUM_OPTIONS:
        for member in enum_cls:
            table.add_row(flag, member.value, member.label)
    for feature in Feature:
        table.add_row("--enable/--disable", feature.value, feature.label)
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``rag-prompt`` and ``python -m rag_prompt``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()

    try:
        if args.command == "options":
            _print_options()
            return 0
        if args.command == "interactive":
            base = ProjectConfig.load(args.config) if args.config else None
            # Questions go to stderr when stdout carries the document.
            ui = err_console if args.stdout else console
            config = run_questionnaire(ui, base=base)
        else:
            config = config_from_args(args)
        _emit(config, args, settings)
    except RagPromptError as exc:
        print_error(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
