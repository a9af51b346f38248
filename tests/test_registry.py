"""
Tests for ConfigLoader and ModelRegistry
"""
import pytest

from badge_validator import URL, Email, ISODate, MaxLength, Pattern
from badge_validator.config_loader import ConfigLoader
from badge_validator.registry import (
    ModelRegistry,
    UnknownModelError,
    get_registry,
    reset_registry,
)
from badge_validator.validators import ModelDefinitionError


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(text):
        path = tmp_path / "models.yaml"
        path.write_text(text)
        return str(path)
    return _write


@pytest.fixture
def registry():
    """Registry built from the bundled config."""
    return get_registry()


class TestConfigLoader:
    """Test ConfigLoader."""

    def test_bundled_config(self):
        """Test that the bundled config loads."""
        loader = ConfigLoader()
        assert list(loader.get_models_config()) == ["Assertion", "Badge", "Issuer"]

    def test_entry_point_default(self):
        """Test that the bundled entry point is the stub gate."""
        assert ConfigLoader().get_entry_point_config() == {"evaluate_assertion": False}

    def test_entry_point_absent(self, write_config):
        """Test that a config without entry_point gets defaults."""
        loader = ConfigLoader(write_config("models:\n  Thing:\n    a: {required: true}\n"))
        assert loader.get_entry_point_config() == {"evaluate_assertion": False}

    def test_missing_file(self, tmp_path):
        """Test that an unreadable file raises RuntimeError."""
        with pytest.raises(RuntimeError, match="Failed to load config"):
            ConfigLoader(str(tmp_path / "absent.yaml"))

    def test_bad_yaml(self, write_config):
        """Test that malformed YAML raises RuntimeError."""
        with pytest.raises(RuntimeError):
            ConfigLoader(write_config("models: [unclosed\n"))

    def test_schema_violation(self, write_config):
        """Test that a field without a required flag fails the schema."""
        path = write_config("models:\n  Thing:\n    a:\n      validators: [email]\n")
        with pytest.raises(ModelDefinitionError, match="Thing -> a"):
            ConfigLoader(path)

    def test_empty_file(self, write_config):
        """Test that an empty config fails the schema."""
        with pytest.raises(ModelDefinitionError):
            ConfigLoader(write_config(""))


class TestDeclaredModels:
    """Test the bundled model declarations."""

    def test_names(self, registry):
        """Test declared model names and order."""
        assert registry.names() == ["Assertion", "Badge", "Issuer"]

    def test_assertion(self, registry):
        """Test Assertion field table."""
        fields = registry.get("Assertion").fields
        assert list(fields) == ["recipient", "evidence", "expires", "issued_at"]
        assert fields["recipient"].required
        assert fields["recipient"].validators == (Email(),)
        assert not fields["evidence"].required
        assert fields["evidence"].validators == (URL(),)
        assert fields["expires"].validators == (ISODate(),)
        assert fields["issued_at"].validators == (ISODate(),)

    def test_badge(self, registry):
        """Test Badge field table."""
        fields = registry.get("Badge").fields
        assert list(fields) == ["version", "name", "description", "image", "criteria"]
        assert all(f.required for f in fields.values())
        assert fields["version"].validators == (Pattern(r"v?\d+\.\d+\.d+"),)
        assert fields["name"].validators == (MaxLength(128),)
        assert fields["description"].validators == (MaxLength(128),)
        assert fields["image"].validators == (URL(),)
        assert fields["criteria"].validators == (URL(),)

    def test_issuer(self, registry):
        """Test Issuer field table."""
        fields = registry.get("Issuer").fields
        assert list(fields) == ["name", "org", "contact", "url"]
        assert [f.required for f in fields.values()] == [True, False, False, False]
        assert fields["org"].validators == (MaxLength(128),)
        assert fields["contact"].validators == (Email(),)
        assert fields["url"].validators == (URL(),)

    def test_case_insensitive_lookup(self, registry):
        """Test that lookups ignore case."""
        assert registry.get("badge") is registry.get("Badge")
        assert "ISSUER" in registry

    def test_unknown_model(self, registry):
        """Test that undeclared models raise UnknownModelError."""
        with pytest.raises(UnknownModelError):
            registry.get("Recipient")

    def test_singleton(self):
        """Test that get_registry returns one shared instance."""
        assert get_registry() is get_registry()

    def test_reset(self):
        """Test that reset_registry forces a rebuild from config."""
        first = get_registry()
        reset_registry()
        second = get_registry()
        assert second is not first
        assert second.names() == first.names()

    def test_describe(self, registry):
        """Test registry description."""
        description = registry.describe()
        assert description["Badge"]["version"] == {
            "required": True,
            "validators": [{"validator": "pattern", "pattern": r"v?\d+\.\d+\.d+"}],
        }


class TestModelRegistry:
    """Test registry construction from custom configuration."""

    def test_from_dict(self):
        """Test building from a plain dict."""
        registry = ModelRegistry({
            "models": {
                "Thing": {
                    "code": {"required": True, "validators": [{"pattern": "^[A-Z]+$"}, {"max_length": 3}]},
                },
            },
        })
        thing = registry.get("Thing")
        assert thing.fields["code"].validators == (Pattern("^[A-Z]+$"), MaxLength(3))
        assert thing.errors({"code": "abcd"}) == [{"code": "length"}]

    def test_from_config_loader(self, write_config):
        """Test building from a ConfigLoader."""
        path = write_config(
            "models:\n"
            "  Contact:\n"
            "    email:\n"
            "      required: true\n"
            "      validators: [email]\n"
            "    homepage:\n"
            "      required: false\n"
            "      validators: [url]\n"
        )
        registry = ModelRegistry(ConfigLoader(path))
        assert registry.get("contact").errors({"email": "b@e.com", "homepage": "x"}) == [
            {"homepage": "regexp"}
        ]

    def test_entry_point_settings(self):
        """Test that entry point settings travel with the registry."""
        assert get_registry().entry_point == {"evaluate_assertion": False}
        wired = ModelRegistry({"entry_point": {"evaluate_assertion": True}, "models": {}})
        assert wired.entry_point == {"evaluate_assertion": True}
        assert ModelRegistry({"models": {}}).entry_point == {"evaluate_assertion": False}

    def test_unknown_validator(self):
        """Test that an unknown validator name names the offending field."""
        config = {"models": {"Thing": {"a": {"required": True, "validators": ["phone"]}}}}
        with pytest.raises(ModelDefinitionError, match="Thing.a"):
            ModelRegistry(config)

    def test_bad_bound(self):
        """Test that a bad max_length bound is rejected."""
        config = {"models": {"Thing": {"a": {"required": True, "validators": [{"max_length": "big"}]}}}}
        with pytest.raises(ModelDefinitionError):
            ModelRegistry(config)

    def test_duplicate_names(self):
        """Test that model names differing only in case are rejected."""
        config = {"models": {"Thing": {}, "thing": {}}}
        with pytest.raises(ModelDefinitionError, match="more than once"):
            ModelRegistry(config)

    def test_invalid_config_type(self):
        """Test that unsupported config objects are rejected."""
        with pytest.raises(ValueError):
            ModelRegistry(["models"])
