"""Unit tests for ProjectConfig and related models (rag_prompt.config).

Tests cover:
- Defaults of every field
- Enum labels and values
- Feature key normalisation, default filling and rejection of unknown keys
- Copy-on-write updates (with_field, with_tech_stack, with_feature)
- JSON load / to_json
- Settings.from_env
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from rag_prompt.config import (
    DEFAULT_FEATURES,
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

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_text_fields_empty(self, default_config):
        assert default_config.project_name == ""
        assert default_config.client_name == ""
        assert default_config.description == ""
        assert default_config.additional_requirements == ""

    def test_tech_stack(self, default_config):
        stack = default_config.tech_stack
        assert stack.backend == ("Node.js", "TypeScript", "Express")
        assert stack.frontend == ("React", "TypeScript", "Vite")
        assert stack.database == ("PostgreSQL", "Redis")
        assert stack.deployment == ("Docker", "AWS")

    def test_features(self, default_config):
        assert default_config.features.as_dict() == dict(DEFAULT_FEATURES)
        assert default_config.is_enabled(Feature.ADMIN_DASHBOARD)
        assert default_config.is_enabled("file_upload")
        assert not default_config.is_enabled(Feature.ANALYTICS)
        assert not default_config.is_enabled(Feature.MULTI_LANGUAGE)

    def test_is_enabled_camel_case(self, default_config):
        assert default_config.is_enabled("adminDashboard")
        assert not default_config.is_enabled("multiLanguage")

    def test_is_enabled_unknown_feature(self, default_config):
        with pytest.raises(ConfigError, match="Unknown feature"):
            default_config.is_enabled("darkMode")

    def test_choices(self, default_config):
        assert default_config.ai_model is AIModel.GPT_4_TURBO
        assert default_config.vector_database is VectorDatabase.PINECONE
        assert default_config.whatsapp_provider is WhatsAppProvider.CLOUD_API

    def test_default_features_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_FEATURES[Feature.ANALYTICS] = True  # type: ignore[index]
        assert ProjectConfig().features == Features()

    def test_frozen(self, default_config):
        with pytest.raises(ValidationError):
            default_config.project_name = "changed"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TestEnums:
    def test_ai_model_labels(self):
        assert AIModel.GPT_4_TURBO.label == "GPT-4 Turbo"
        assert AIModel.GPT_35_TURBO.label == "GPT-3.5 Turbo"
        assert AIModel.CLAUDE_3.label == "Claude 3"

    def test_every_ai_model_has_label(self):
        assert all(model.label for model in AIModel)

    def test_provider_label_is_value(self):
        assert WhatsAppProvider.DIALOG_360.label == "360dialog"
        assert VectorDatabase.QDRANT.label == "Qdrant"

    def test_feature_label(self):
        assert Feature.ADMIN_DASHBOARD.label == "Admin Dashboard"
        assert Feature.RAG_ARCHITECTURE.label == "Rag Architecture"

    def test_closed_sets(self):
        assert len(list(AIModel)) == 4
        assert len(list(VectorDatabase)) == 5
        assert len(list(WhatsAppProvider)) == 4
        assert len(list(Feature)) == 6


# ---------------------------------------------------------------------------
# Feature validation
# ---------------------------------------------------------------------------


class TestFeatureValidation:
    def test_missing_keys_filled_with_defaults(self):
        config = ProjectConfig(features={"analytics": True})
        assert config.is_enabled(Feature.ANALYTICS)
        assert config.is_enabled(Feature.ADMIN_DASHBOARD)
        assert not config.is_enabled(Feature.MULTI_LANGUAGE)
        assert set(config.features.as_dict()) == set(Feature)

    def test_camel_case_keys_accepted(self):
        config = ProjectConfig(features={"adminDashboard": False, "multiLanguage": True})
        assert not config.is_enabled(Feature.ADMIN_DASHBOARD)
        assert config.is_enabled(Feature.MULTI_LANGUAGE)

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            ProjectConfig(features={"darkMode": True})

    def test_features_kept_in_declaration_order(self):
        config = ProjectConfig(features={"multi_language": True, "analytics": True})
        assert [feature for feature, _ in config.features.items()] == list(Feature)

    def test_feature_enum_keys_accepted(self):
        config = ProjectConfig(features={Feature.ANALYTICS: True})
        assert config.is_enabled(Feature.ANALYTICS)

    def test_unknown_ai_model_rejected(self):
        with pytest.raises(ValidationError):
            ProjectConfig(ai_model="llama-2")


# ---------------------------------------------------------------------------
# Copy-on-write updates
# ---------------------------------------------------------------------------


class TestWithField:
    def test_replaces_one_field(self, default_config):
        updated = default_config.with_field("project_name", "Bot X")
        assert updated.project_name == "Bot X"
        assert default_config.project_name == ""

    def test_other_fields_shared(self, default_config):
        updated = default_config.with_field("client_name", "ACME")
        assert updated.tech_stack is default_config.tech_stack
        assert updated.features == default_config.features

    def test_string_coerced_to_enum(self, default_config):
        updated = default_config.with_field("vector_database", "Milvus")
        assert updated.vector_database is VectorDatabase.MILVUS

    def test_invalid_value_raises_config_error(self, default_config):
        with pytest.raises(ConfigError, match="ai_model"):
            default_config.with_field("ai_model", "gpt-5")

    def test_unknown_field_raises_config_error(self, default_config):
        with pytest.raises(ConfigError, match="Unknown configuration field"):
            default_config.with_field("colour", "blue")

    def test_config_error_is_rag_prompt_error(self):
        assert issubclass(ConfigError, RagPromptError)


class TestWithTechStack:
    def test_replaces_one_layer(self, default_config):
        updated = default_config.with_tech_stack("backend", ["Python", "Django"])
        assert updated.tech_stack.backend == ("Python", "Django")
        assert updated.tech_stack.frontend == default_config.tech_stack.frontend
        assert default_config.tech_stack.backend == ("Node.js", "TypeScript", "Express")

    def test_empty_layer(self, default_config):
        updated = default_config.with_tech_stack("database", [])
        assert updated.tech_stack.database == ()
        assert updated.tech_stack.joined("database") == ""

    def test_unknown_layer(self, default_config):
        with pytest.raises(ConfigError, match="Unknown tech stack layer"):
            default_config.with_tech_stack("mobile", ["Flutter"])

    def test_joined(self):
        assert TechStack().joined("backend") == "Node.js, TypeScript, Express"


class TestWithFeature:
    def test_toggle(self, default_config):
        updated = default_config.with_feature(Feature.ANALYTICS, True)
        assert updated.is_enabled(Feature.ANALYTICS)
        assert not default_config.is_enabled(Feature.ANALYTICS)

    def test_accepts_string_key(self, default_config):
        updated = default_config.with_feature("admin_dashboard", False)
        assert not updated.is_enabled(Feature.ADMIN_DASHBOARD)

    def test_other_flags_untouched(self, default_config):
        updated = default_config.with_feature(Feature.FILE_UPLOAD, False)
        for feature in Feature:
            if feature is not Feature.FILE_UPLOAD:
                assert updated.is_enabled(feature) == default_config.is_enabled(feature)

    def test_source_flags_not_mutated(self, default_config):
        before = default_config.features
        default_config.with_feature(Feature.MULTI_LANGUAGE, True)
        assert default_config.features is before
        assert not default_config.is_enabled(Feature.MULTI_LANGUAGE)

    def test_accepts_camel_case_key(self, default_config):
        updated = default_config.with_feature("multiLanguage", True)
        assert updated.is_enabled(Feature.MULTI_LANGUAGE)

    def test_unknown_feature(self, default_config):
        with pytest.raises(ConfigError, match="Unknown feature"):
            default_config.with_feature("dark_mode", True)


class TestFeatureFlagsImmutable:
    def test_item_assignment_rejected(self, default_config):
        with pytest.raises(TypeError):
            default_config.features[Feature.ANALYTICS] = True  # type: ignore[index]

    def test_attribute_assignment_rejected(self, default_config):
        with pytest.raises(ValidationError):
            default_config.features.analytics = True

    def test_copies_do_not_share_mutable_flags(self):
        original = ProjectConfig()
        updated = original.with_tech_stack("backend", ["Go"])
        with pytest.raises(TypeError):
            updated.features[Feature.ANALYTICS] = True  # type: ignore[index]
        assert original.is_enabled(Feature.ANALYTICS) is False

    def test_as_dict_is_a_fresh_copy(self, default_config):
        flags = default_config.features.as_dict()
        flags[Feature.ANALYTICS] = True
        assert default_config.is_enabled(Feature.ANALYTICS) is False

    def test_replace(self):
        flags = Features()
        updated = flags.replace("analytics", True)
        assert updated[Feature.ANALYTICS] is True
        assert flags[Feature.ANALYTICS] is False


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


class TestSerialisation:
    def test_load_camel_case_file(self, config_file):
        config = ProjectConfig.load(config_file)
        assert config.project_name == "Bot Clínica"
        assert config.client_name == "Clínica Saúde"
        assert config.tech_stack.backend == ("Go",)
        assert config.tech_stack.database == ()
        assert config.tech_stack.frontend == ("React", "TypeScript", "Vite")
        assert config.is_enabled(Feature.ANALYTICS)
        assert not config.is_enabled(Feature.ADMIN_DASHBOARD)
        assert config.ai_model is AIModel.GPT_4
        assert config.vector_database is VectorDatabase.CHROMA
        assert config.whatsapp_provider is WhatsAppProvider.CLOUD_API

    def test_to_json_then_load(self, custom_config, tmp_path: Path):
        path = tmp_path / "saved.json"
        path.write_text(custom_config.to_json(), encoding="utf-8")
        assert ProjectConfig.load(path) == custom_config

    def test_to_json_uses_values(self, default_config):
        data = json.loads(default_config.to_json())
        assert data["ai_model"] == "gpt-4-turbo"
        assert data["features"]["admin_dashboard"] is True

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Cannot read"):
            ProjectConfig.load(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="not valid JSON"):
            ProjectConfig.load(path)

    def test_non_object_json(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            ProjectConfig.load(path)

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "bad-values.json"
        path.write_text(json.dumps({"whatsappProvider": "Telegram"}), encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            ProjectConfig.load(path)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.output_dir == Path(".")
        assert settings.default_basename == "chatbot-rag"
        assert settings.filename_suffix == "-prompt-tecnico.md"

    def test_from_env(self, tmp_path: Path):
        env = {"RAG_PROMPT_OUTPUT_DIR": str(tmp_path), "RAG_PROMPT_DEFAULT_NAME": "bot"}
        with patch.dict("os.environ", env, clear=False):
            settings = Settings.from_env()
        assert settings.output_dir == tmp_path
        assert settings.default_basename == "bot"

    def test_from_env_empty(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings.from_env()
        assert settings == Settings()
