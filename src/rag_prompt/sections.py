"""Ordered section table of the technical prompt document.

The document is a fixed sequence of ``Section`` descriptors. A section is
either unconditional or guarded by a predicate over the ``ProjectConfig``;
the renderer walks the sequence in order and emits only the sections whose
guard passes. Feature-dependent sections are declared once in
``FEATURE_SECTIONS`` so each optional block maps to exactly one flag.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from rag_prompt.config import Feature, ProjectConfig

Guard = Callable[[ProjectConfig], bool]


@dataclass(frozen=True)
class Section:
    """One block of the generated document.

    Attributes:
        key: Stable identifier, also the template stem under ``sections/``.
        title: Heading the block starts with (used in summaries and tests).
        guard: ``None`` for unconditional blocks, otherwise a predicate
            deciding whether the block is emitted for a configuration.
    """

    key: str
    title: str
    guard: Guard | None = None

    @property
    def template(self) -> str:
        return f"sections/{self.key}.md.j2"

    def applies_to(self, config: ProjectConfig) -> bool:
        """Return whether this section is part of the document for *config*."""
        return self.guard is None or self.guard(config)


def feature_guard(feature: Feature) -> Guard:
    """Build a guard that passes when *feature* is enabled."""

    def _guard(config: ProjectConfig) -> bool:
        return config.is_enabled(feature)

    return _guard


def _has_additional_requirements(config: ProjectConfig) -> bool:
    return config.additional_requirements != ""


# ---------------------------------------------------------------------------
# Feature-guarded sections
# ---------------------------------------------------------------------------

FEATURE_SECTIONS: tuple[tuple[Feature, Section], ...] = (
    (
        Feature.ADMIN_DASHBOARD,
        Section("admin_dashboard", "Dashboard Administrativo", feature_guard(Feature.ADMIN_DASHBOARD)),
    ),
    (
        Feature.FILE_UPLOAD,
        Section("document_management", "Gerenciamento de Documentos", feature_guard(Feature.FILE_UPLOAD)),
    ),
    (
        Feature.ANALYTICS,
        Section("analytics_dashboard", "Analytics Dashboard", feature_guard(Feature.ANALYTICS)),
    ),
    (
        Feature.MULTI_LANGUAGE,
        Section("internationalization", "9. Internacionalização", feature_guard(Feature.MULTI_LANGUAGE)),
    ),
)

_BY_FEATURE: dict[Feature, Section] = dict(FEATURE_SECTIONS)


def section_for(feature: Feature) -> Section | None:
    """Return the section toggled by *feature*, or ``None`` if it toggles none."""
    return _BY_FEATURE.get(feature)


# ---------------------------------------------------------------------------
# Document layout
# ---------------------------------------------------------------------------

SECTIONS: tuple[Section, ...] = (
    Section("header", "Prompt Técnico Detalhado: Chatbot RAG para WhatsApp"),
    Section("overview", "1. Visão Geral do Projeto"),
    Section("architecture", "2. Arquitetura Técnica"),
    Section("backend", "3. Backend Requirements (Node.js + TypeScript)"),
    Section("frontend", "4. Frontend Requirements (React + TypeScript)"),
    _BY_FEATURE[Feature.ADMIN_DASHBOARD],
    _BY_FEATURE[Feature.FILE_UPLOAD],
    Section("conversation_monitoring", "Monitoramento de Conversas"),
    _BY_FEATURE[Feature.ANALYTICS],
    Section("frontend_technologies", "4.2 Tecnologias Frontend"),
    Section("integrations", "5. Integrações e APIs"),
    Section("security", "6. Segurança e Compliance"),
    Section("performance", "7. Performance e Escalabilidade"),
    Section("deployment", "8. Deployment e DevOps"),
    _BY_FEATURE[Feature.MULTI_LANGUAGE],
    Section("testing", "10. Testing Strategy"),
    Section("deliverables", "11. Entregáveis"),
    Section("additional_requirements", "12. Requisitos Adicionais", _has_additional_requirements),
    Section("timeline", "13. Timeline e Milestones"),
    Section("objective", "Objetivo"),
)
