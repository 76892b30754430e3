"""
Processor Preset Resolution

Builds ProcessorOptions from named presets stored in a YAML file. Presets are
composable: they are merged in order, later presets overriding earlier ones,
and explicit overrides win over every preset.

Examples:
    # Fill data but keep empty sections, using {{name}} tokens
    >>> resolve_options(["pipeline_keep_sections", "delimiters_double_braces"])

    # Preset plus an explicit override
    >>> resolve_options(["pipeline_static"], {"remove_empty_sections": False})
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.processor import ProcessorOptions, normalize_option_keys

load_dotenv()
BUNDLED_PRESETS_PATH = Path(__file__).parent / "config" / "presets.yaml"
PRESETS_PATH = Path(os.getenv("VELLUM_PRESETS_PATH", BUNDLED_PRESETS_PATH))


def load_processor_presets(config_path: Path = None) -> Dict[str, Dict[str, Any]]:
    """
    Load a presets YAML file and flatten it to a single-level dict.

    Collapses nested structure: pipeline.static -> pipeline_static

    Args:
        config_path: Optional path to presets file (defaults to VELLUM_PRESETS_PATH
            env variable, else the bundled presets.yaml)

    Returns:
        Flattened dict mapping preset names to option dicts
        Example: {"pipeline_static": {...}, "delimiters_double_braces": {...}}
    """
    if config_path is None:
        config_path = PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    # Flatten: category.name -> category_name
    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def resolve_options(
    preset_names: List[str],
    overrides: Optional[Dict[str, Any]] = None,
    config_path: Path = None,
) -> ProcessorOptions:
    """
    Merge named presets and overrides into validated ProcessorOptions.

    Args:
        preset_names: Preset names to apply in order (e.g., ["pipeline_static"])
        overrides: Option values applied after all presets (snake_case or camelCase)
        config_path: Optional path to presets file

    Returns:
        ProcessorOptions built from defaults, presets, then overrides

    Raises:
        ValueError: If a preset name is not defined
        InvalidTemplateOptionsError: If a preset or override uses an unknown option
            or invalid delimiters
    """
    options: Dict[str, Any] = {}
    if preset_names:
        presets_dict = load_processor_presets(config_path)
        for preset_name in preset_names:
            if preset_name not in presets_dict:
                available = list(presets_dict.keys())
                raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")
            options.update(normalize_option_keys(presets_dict[preset_name]))
            _log_debug(f"Applied preset '{preset_name}'")

    if overrides:
        options.update(normalize_option_keys(overrides))

    return ProcessorOptions(**options)


def load_template_data(path: Path) -> Dict[str, Any]:
    """
    Load template data from a YAML or JSON file as plain Python containers.

    Args:
        path: Data file (.yaml, .yml or .json)

    Returns:
        Data mapping with OmegaConf interpolations resolved

    Raises:
        ValueError: If the file does not hold a mapping at its root
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Template data must be a mapping at the root: {path}")
        config = OmegaConf.create(raw)
    else:
        config = OmegaConf.load(path)

    data = OmegaConf.to_container(config, resolve=True)
    if not isinstance(data, dict):
        raise ValueError(f"Template data must be a mapping at the root: {path}")

    _log_debug(f"Loaded template data from {path} ({len(data)} keys)")
    return data
