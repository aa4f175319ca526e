"""RAG prompt generator -- technical prompts for WhatsApp RAG chatbot projects.

Quick usage::

    from rag_prompt import ProjectConfig, render

    config = ProjectConfig(project_name="Atendimento X").with_feature("analytics", True)
    markdown = render(config)
"""

from rag_prompt.config import (
    AIModel,
    ConfigError,
    Feature,
    Features,
    ProjectConfig,
    RagPromptError,
    Settings,
    TechStack,
    VectorDatabase,
    WhatsAppProvider,
)
from rag_prompt.renderer import PromptRenderer, render

__version__ = "0.1.0"

__all__ = [
    "AIModel",
    "ConfigError",
    "Feature",
    "Features",
    "ProjectConfig",
    "PromptRenderer",
    "RagPromptError",
    "Settings",
    "TechStack",
    "VectorDatabase",
    "WhatsAppProvider",
    "render",
]
