"""Interactive questionnaire that builds a ``ProjectConfig``.

Walks through the same groups of fields as the web form: project
information, technical choices, feature toggles and additional
requirements. Every answer replaces one field through the copy-on-write
helpers, so the configuration is never partially built. Pressing Enter
keeps the current value.
"""

from __future__ import annotations

from typing import TextIO

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.rule import Rule

from rag_prompt.config import (
    TECH_LAYERS,
    AIModel,
    Feature,
    ProjectConfig,
    VectorDatabase,
    WhatsAppProvider,
)


class _LineInputMixin:
    """Strip the line terminator from answers read through *stream*.

    ``Console.input`` returns ``readline()`` verbatim for streams, so an empty
    line would otherwise not fall back to the default the way Enter does at a
    terminal.
    """

    @classmethod
    def get_input(cls, console, prompt, password, stream=None):
        return super().get_input(console, prompt, password, stream=stream).rstrip("\r\n")


class _Prompt(_LineInputMixin, Prompt):
    pass


class _Confirm(_LineInputMixin, Confirm):
    pass


def split_list(value: str) -> list[str]:
    """Split a comma-separated answer into trimmed, non-empty labels."""
    return [item.strip() for item in value.split(",") if item.strip()]


def run_questionnaire(
    console: Console,
    base: ProjectConfig | None = None,
    stream: TextIO | None = None,
) -> ProjectConfig:
    """Ask for every field and return the resulting configuration.

    Args:
        console: Console used for prompts and headings.
        base: Starting values; defaults to ``ProjectConfig()``.
        stream: Optional input stream (tests feed answers through it).
    """
    config = base or ProjectConfig()

    console.print(Rule("[bold cyan]Project information[/bold cyan]"))
    for field, question in (
        ("project_name", "Project name"),
        ("client_name", "Client"),
        ("description", "Project description"),
    ):
        answer = _Prompt.ask(question, console=console, default=getattr(config, field), stream=stream)
        config = config.with_field(field, answer)

    console.print(Rule("[bold cyan]Technical settings[/bold cyan]"))
    for layer in TECH_LAYERS:
        answer = _Prompt.ask(
            f"{layer.title()} (comma-separated)",
            console=console,
            default=config.tech_stack.joined(layer),
            stream=stream,
        )
        config = config.with_tech_stack(layer, split_list(answer))

    for field, enum_cls, question in (
        ("ai_model", AIModel, "AI model"),
        ("vector_database", VectorDatabase, "Vector database"),
        ("whatsapp_provider", WhatsAppProvider, "WhatsApp provider"),
    ):
        answer = _Prompt.ask(
            question,
            console=console,
            choices=[member.value for member in enum_cls],
            default=getattr(config, field).value,
            stream=stream,
        )
        config = config.with_field(field, answer)

    console.print(Rule("[bold cyan]Features[/bold cyan]"))
    for feature in Feature:
        enabled = _Confirm.ask(
            feature.label, console=console, default=config.is_enabled(feature), stream=stream
        )
        config = config.with_feature(feature, enabled)

    console.print(Rule("[bold cyan]Additional requirements[/bold cyan]"))
    answer = _Prompt.ask(
        "Additional requirements (leave empty for none)",
        console=console,
        default=config.additional_requirements,
        show_default=bool(config.additional_requirements),
        stream=stream,
    )
    return config.with_field("additional_requirements", answer)
