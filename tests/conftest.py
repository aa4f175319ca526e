"""Shared pytest fixtures for the RAG prompt generator test suite.

Provides reusable fixtures for:
- Default and fully-customised project configurations
- A JSON configuration file on disk
- A recording Rich console
"""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from rag_prompt.config import (
    AIModel,
    Feature,
    ProjectConfig,
    TechStack,
    VectorDatabase,
    WhatsAppProvider,
)


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def default_config() -> ProjectConfig:
    """The baseline configuration every session starts from."""
    return ProjectConfig()


@pytest.fixture
def custom_config() -> ProjectConfig:
    """A configuration where every field differs from its default."""
    return ProjectConfig(
        project_name="Atendimento Loja Alfa",
        client_name="Alfa Comércio Ltda",
        description="Chatbot para dúvidas sobre pedidos e trocas",
        tech_stack=TechStack(
            backend=("Python", "FastAPI"),
            frontend=("Vue",),
            database=("MongoDB",),
            deployment=("Kubernetes", "GCP"),
        ),
        features={
            Feature.RAG_ARCHITECTURE: True,
            Feature.WHATSAPP_INTEGRATION: True,
            Feature.ADMIN_DASHBOARD: False,
            Feature.FILE_UPLOAD: False,
            Feature.ANALYTICS: True,
            Feature.MULTI_LANGUAGE: True,
        },
        ai_model=AIModel.CLAUDE_3,
        vector_database=VectorDatabase.QDRANT,
        whatsapp_provider=WhatsAppProvider.TWILIO,
        additional_requirements="Needs LGPD compliance",
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A camelCase JSON export as produced by the web form."""
    path = tmp_path / "project.json"
    path.write_text(
        json.dumps(
            {
                "projectName": "Bot Clínica",
                "clientName": "Clínica Saúde",
                "techStack": {"backend": ["Go"], "database": []},
                "features": {"analytics": True, "adminDashboard": False},
                "aiModel": "gpt-4",
                "vectorDatabase": "Chroma",
            }
        ),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


@pytest.fixture
def recording_console() -> Console:
    """A Rich console that writes into memory instead of the terminal."""
    return Console(file=io.StringIO(), width=120, force_terminal=False, color_system=None)
