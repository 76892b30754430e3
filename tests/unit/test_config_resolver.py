"""
Unit tests for processor preset resolution and template data loading.
"""

import json

import pytest

from vellum.contexts.templating.config_resolver import (
    BUNDLED_PRESETS_PATH,
    load_processor_presets,
    load_template_data,
    resolve_options,
)
from vellum.contexts.templating.exceptions import InvalidTemplateOptionsError


@pytest.mark.unit
class TestLoadProcessorPresets:
    """Tests for load_processor_presets function."""

    def test_bundled_presets_flattened(self):
        """Test bundled presets are flattened to category_name keys."""
        presets = load_processor_presets(BUNDLED_PRESETS_PATH)

        assert "pipeline_full" in presets
        assert "pipeline_static" in presets
        assert presets["delimiters_double_braces"] == {"delimiters": ["{{", "}}"]}

    def test_custom_file(self, tmp_path):
        """Test presets load from an explicit file."""
        config = tmp_path / "presets.yaml"
        config.write_text("mode:\n  quiet:\n    processLoops: false\n")

        assert load_processor_presets(config) == {"mode_quiet": {"processLoops": False}}


@pytest.mark.unit
class TestResolveOptions:
    """Tests for resolve_options function."""

    def test_no_presets_gives_defaults(self):
        """Test resolving no presets yields the default options."""
        options = resolve_options([])

        assert options.remove_empty_sections is True
        assert options.process_loops is True
        assert options.process_placeholders is True
        assert options.delimiters == ("{", "}")

    def test_single_preset(self):
        """Test a single preset is applied over the defaults."""
        options = resolve_options(["pipeline_static"], config_path=BUNDLED_PRESETS_PATH)

        assert options.process_loops is False
        assert options.process_placeholders is False
        assert options.remove_empty_sections is True

    def test_later_preset_wins(self):
        """Test later presets override earlier ones."""
        options = resolve_options(["pipeline_static", "pipeline_full"], config_path=BUNDLED_PRESETS_PATH)
        assert options.process_loops is True

    def test_delimiters_become_tuple(self):
        """Test YAML delimiter lists become tuples."""
        options = resolve_options(["delimiters_double_braces"], config_path=BUNDLED_PRESETS_PATH)
        assert options.delimiters == ("{{", "}}")

    def test_overrides_win_over_presets(self):
        """Test explicit overrides are applied after presets."""
        options = resolve_options(
            ["pipeline_static"], {"processLoops": True}, config_path=BUNDLED_PRESETS_PATH
        )
        assert options.process_loops is True
        assert options.process_placeholders is False

    def test_unknown_preset(self):
        """Test an unknown preset name raises ValueError."""
        with pytest.raises(ValueError, match="not found"):
            resolve_options(["pipeline_nonexistent"], config_path=BUNDLED_PRESETS_PATH)

    def test_unknown_option_in_preset(self, tmp_path):
        """Test a preset with an unknown option raises."""
        config = tmp_path / "presets.yaml"
        config.write_text("pipeline:\n  odd:\n    minify: true\n")

        with pytest.raises(InvalidTemplateOptionsError, match="minify"):
            resolve_options(["pipeline_odd"], config_path=config)

    def test_bad_delimiters_in_preset(self, tmp_path):
        """Test a preset with malformed delimiters raises."""
        config = tmp_path / "presets.yaml"
        config.write_text("delimiters:\n  broken:\n    delimiters: ['<']\n")

        with pytest.raises(InvalidTemplateOptionsError):
            resolve_options(["delimiters_broken"], config_path=config)


@pytest.mark.unit
class TestLoadTemplateData:
    """Tests for load_template_data function."""

    def test_yaml(self, tmp_path):
        """Test YAML data files load as plain containers."""
        path = tmp_path / "data.yaml"
        path.write_text("name: Ada\nskills:\n  - name: Python\n  - name: Go\nstars: 4\n")

        assert load_template_data(path) == {
            "name": "Ada",
            "skills": [{"name": "Python"}, {"name": "Go"}],
            "stars": 4,
        }

    def test_yaml_interpolation_resolved(self, tmp_path):
        """Test OmegaConf interpolations are resolved."""
        path = tmp_path / "data.yaml"
        path.write_text("firstName: Ada\ngreeting: Hello ${firstName}\n")

        assert load_template_data(path)["greeting"] == "Hello Ada"

    def test_json(self, tmp_path):
        """Test JSON data files load, nulls included."""
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"name": "Ada", "reviews": [], "address": None}))

        assert load_template_data(path) == {"name": "Ada", "reviews": [], "address": None}

    def test_json_root_must_be_mapping(self, tmp_path):
        """Test a JSON list root raises ValueError."""
        path = tmp_path / "data.json"
        path.write_text("[1, 2]")

        with pytest.raises(ValueError):
            load_template_data(path)

    def test_yaml_root_must_be_mapping(self, tmp_path):
        """Test a YAML list root raises ValueError."""
        path = tmp_path / "data.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            load_template_data(path)
