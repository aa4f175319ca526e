"""Project configuration for the RAG prompt generator.

Typed, immutable description of the chatbot project a prompt is generated
for. All models use Pydantic v2 so a configuration can be validated at
construction time and loaded from JSON without boiler-plate. Every field has
a default, so ``ProjectConfig()`` is always a valid, renderable baseline.

Updates never mutate an instance: ``with_field``, ``with_tech_stack`` and
``with_feature`` return a new configuration and share every untouched
sub-model with the original.
"""

from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RagPromptError(Exception):
    """Base class for every error reported to the user by the CLI."""


class ConfigError(RagPromptError):
    """Raised when a configuration cannot be built, loaded or updated."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Feature(str, Enum):
    """Optional capabilities that toggle sections of the generated document."""
    RAG_ARCHITECTURE = "rag_architecture"
    WHATSAPP_INTEGRATION = "whatsapp_integration"
    ADMIN_DASHBOARD = "admin_dashboard"
    FILE_UPLOAD = "file_upload"
    ANALYTICS = "analytics"
    MULTI_LANGUAGE = "multi_language"

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``Admin Dashboard``."""
        return self.value.replace("_", " ").title()


class AIModel(str, Enum):
    """Language model used by the generation layer."""
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4 = "gpt-4"
    GPT_35_TURBO = "gpt-3.5-turbo"
    CLAUDE_3 = "claude-3"

    @property
    def label(self) -> str:
        return _AI_MODEL_LABELS[self]


class VectorDatabase(str, Enum):
    """Vector store holding the document embeddings."""
    PINECONE = "Pinecone"
    WEAVIATE = "Weaviate"
    MILVUS = "Milvus"
    CHROMA = "Chroma"
    QDRANT = "Qdrant"

    @property
    def label(self) -> str:
        return self.value


class WhatsAppProvider(str, Enum):
    """Gateway used to send and receive WhatsApp messages."""
    CLOUD_API = "WhatsApp Cloud API"
    TWILIO = "Twilio"
    DIALOG_360 = "360dialog"
    CHAT_API = "ChatAPI"

    @property
    def label(self) -> str:
        return self.value


_AI_MODEL_LABELS: dict[AIModel, str] = {
    AIModel.GPT_4_TURBO: "GPT-4 Turbo",
    AIModel.GPT_4: "GPT-4",
    AIModel.GPT_35_TURBO: "GPT-3.5 Turbo",
    AIModel.CLAUDE_3: "Claude 3",
}

TECH_LAYERS: tuple[str, ...] = ("backend", "frontend", "database", "deployment")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TechStack(BaseModel):
    """Technology labels per layer, rendered comma-joined in this order."""

    model_config = ConfigDict(frozen=True)

    backend: tuple[str, ...] = Field(default=("Node.js", "TypeScript", "Express"))
    frontend: tuple[str, ...] = Field(default=("React", "TypeScript", "Vite"))
    database: tuple[str, ...] = Field(default=("PostgreSQL", "Redis"))
    deployment: tuple[str, ...] = Field(default=("Docker", "AWS"))

    def joined(self, layer: str) -> str:
        """Return the labels of *layer* joined with ``", "``."""
        return ", ".join(getattr(self, layer))


class Features(BaseModel):
    """Enum-keyed table of the six feature flags.

    Read it like a mapping (``features[Feature.ANALYTICS]``). The table is
    frozen: ``replace`` returns a new table and leaves this one untouched.
    Keys may be given as ``Feature`` members, snake_case or camelCase.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rag_architecture: bool = True
    whatsapp_integration: bool = True
    admin_dashboard: bool = True
    file_upload: bool = True
    analytics: bool = False
    multi_language: bool = False

    @model_validator(mode="before")
    @classmethod
    def normalise_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {_snake_case(k) if isinstance(k, str) else k: v for k, v in value.items()}
        return value

    def __getitem__(self, feature: Feature | str) -> bool:
        return getattr(self, to_feature(feature).value)

    def items(self) -> list[tuple[Feature, bool]]:
        """``(feature, enabled)`` pairs in declaration order."""
        return [(feature, getattr(self, feature.value)) for feature in Feature]

    def as_dict(self) -> dict[Feature, bool]:
        """Return a fresh ``{Feature: bool}`` dict."""
        return dict(self.items())

    def replace(self, feature: Feature | str, enabled: bool) -> "Features":
        """Return a copy with the flag for *feature* set to *enabled*."""
        return self.model_copy(update={to_feature(feature).value: bool(enabled)})


DEFAULT_FEATURES: Mapping[Feature, bool] = MappingProxyType(Features().as_dict())


class ProjectConfig(BaseModel):
    """Every user-chosen parameter of the project a prompt describes.

    Field names accept both ``snake_case`` and the ``camelCase`` spelling
    used by the web form exports (``projectName``, ``techStack``...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_name: str = Field(default="", alias="projectName")
    client_name: str = Field(default="", alias="clientName")
    description: str = Field(default="")
    tech_stack: TechStack = Field(default_factory=TechStack, alias="techStack")
    features: Features = Field(default_factory=Features)
    ai_model: AIModel = Field(default=AIModel.GPT_4_TURBO, alias="aiModel")
    vector_database: VectorDatabase = Field(
        default=VectorDatabase.PINECONE, alias="vectorDatabase"
    )
    whatsapp_provider: WhatsAppProvider = Field(
        default=WhatsAppProvider.CLOUD_API, alias="whatsappProvider"
    )
    additional_requirements: str = Field(default="", alias="additionalRequirements")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_enabled(self, feature: Feature | str) -> bool:
        """Return whether *feature* is switched on.

        Raises:
            ConfigError: If *feature* is not a known feature key.
        """
        return self.features[feature]

    # ------------------------------------------------------------------
    # Copy-on-write updates
    # ------------------------------------------------------------------

    def with_field(self, name: str, value: Any) -> "ProjectConfig":
        """Return a copy with the top-level field *name* replaced by *value*.

        The value is validated (strings are coerced to enum members), and
        every other field is shared with this instance.

        Raises:
            ConfigError: If *name* is not a field or *value* is invalid.
        """
        if name not in type(self).model_fields:
            raise ConfigError(f"Unknown configuration field: {name!r}")
        data = dict(self)
        data[name] = value
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid value for {name!r}: {exc}") from exc

    def with_tech_stack(self, layer: str, items: list[str] | tuple[str, ...]) -> "ProjectConfig":
        """Return a copy with one tech-stack *layer* replaced by *items*."""
        if layer not in TECH_LAYERS:
            raise ConfigError(
                f"Unknown tech stack layer: {layer!r} (expected one of {', '.join(TECH_LAYERS)})"
            )
        stack = self.tech_stack.model_copy(update={layer: tuple(str(i) for i in items)})
        return self.model_copy(update={"tech_stack": stack})

    def with_feature(self, feature: Feature | str, enabled: bool) -> "ProjectConfig":
        """Return a copy with the flag for *feature* set to *enabled*."""
        return self.model_copy(update={"features": self.features.replace(feature, enabled)})

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        """Serialise to indented JSON using the snake_case field names."""
        return self.model_dump_json(indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "ProjectConfig":
        """Load a configuration from a JSON file.

        Missing fields take their defaults, so a file containing only
        ``{"projectName": "Bot"}`` is valid.

        Raises:
            ConfigError: If the file is missing, is not JSON, or holds
                invalid values.
        """
        file_path = Path(path)
        try:
            raw = file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read configuration file {file_path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Configuration file {file_path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {file_path} must contain a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {file_path}: {exc}") from exc


class Settings(BaseModel):
    """Application settings for the command line front end."""

    output_dir: Path = Field(default=Path("."))
    default_basename: str = Field(
        default="chatbot-rag", description="Filename stem used when the project has no name"
    )
    filename_suffix: str = Field(default="-prompt-tecnico.md")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            RAG_PROMPT_OUTPUT_DIR, RAG_PROMPT_DEFAULT_NAME.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("RAG_PROMPT_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["RAG_PROMPT_OUTPUT_DIR"])
        if os.environ.get("RAG_PROMPT_DEFAULT_NAME"):
            kwargs["default_basename"] = os.environ["RAG_PROMPT_DEFAULT_NAME"]
        return cls(**kwargs)


def _snake_case(value: str) -> str:
    """Convert ``adminDashboard`` to ``admin_dashboard``."""
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value).lower()


def to_feature(key: Feature | str) -> Feature:
    """Resolve a ``Feature`` from a member, snake_case or camelCase key.

    Raises:
        ConfigError: If *key* names no feature.
    """
    if isinstance(key, Feature):
        return key
    try:
        return Feature(_snake_case(key))
    except (TypeError, ValueError):
        raise ConfigError(
            f"Unknown feature: {key!r} (expected one of "
            f"{', '.join(f.value for f in Feature)})"
        ) from None
