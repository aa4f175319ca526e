"""Technical prompt rendering.

``render(config)`` turns a ``ProjectConfig`` into the markdown document.
The function is pure: it reads the configuration, never mutates it, and
returns byte-identical output for identical input. Included sections are
separated by exactly one blank line and the document ends with a single
newline, so omitted sections leave no gaps behind.
"""

from __future__ import annotations

from typing import Any

from rag_prompt.config import ProjectConfig
from rag_prompt.sections import SECTIONS, Section
from rag_prompt.templates import TemplateRenderer

SECTION_SEPARATOR = "\n\n"


def build_context(config: ProjectConfig) -> dict[str, Any]:
    """Return the template variables for *config*.

    Enum fields are passed as their raw values so they are echoed verbatim.
    """
    return {
        "project_name": config.project_name,
        "client_name": config.client_name,
        "description": config.description,
        "tech_stack": config.tech_stack,
        "ai_model": config.ai_model.value,
        "vector_database": config.vector_database.value,
        "whatsapp_provider": config.whatsapp_provider.value,
        "additional_requirements": config.additional_requirements,
    }


class PromptRenderer:
    """Renders the ordered section table with a ``TemplateRenderer``."""

    def __init__(
        self,
        templates: TemplateRenderer | None = None,
        sections: tuple[Section, ...] = SECTIONS,
    ) -> None:
        self.templates = templates or TemplateRenderer()
        self.sections = sections

    def included_sections(self, config: ProjectConfig) -> list[Section]:
        """Sections emitted for *config*, in document order."""
        return [section for section in self.sections if section.applies_to(config)]

    def render_section(self, section: Section, config: ProjectConfig) -> str:
        """Render one section regardless of its guard."""
        return self.templates.render(section.template, build_context(config))

    def render(self, config: ProjectConfig) -> str:
        context = build_context(config)
        blocks = [
            self.templates.render(section.template, context)
            for section in self.included_sections(config)
        ]
        return SECTION_SEPARATOR.join(blocks) + "\n"


_default_renderer: PromptRenderer | None = None


def get_renderer() -> PromptRenderer:
    """Return the shared renderer, creating it on first use."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = PromptRenderer()
    return _default_renderer


def render(config: ProjectConfig) -> str:
    """Render the technical prompt document for *config*."""
    return get_renderer().render(config)
