"""
Templating Context

Responsibilities:
- Expands loop regions against array data
- Resolves placeholder tokens with type-specific value rendering
- Prunes empty sections and blank contact/social elements
- Swaps and reorders layout blocks
- Orchestrates the ordered transformation pipeline

Owns: Marker syntax, pipeline stage order, processor options and presets
Never: Converts output to other formats (see exporting context)
"""

from vellum.contexts.templating.cleanup import cleanup_content_template_advanced, cleanup_template
from vellum.contexts.templating.config_resolver import (
    load_processor_presets,
    load_template_data,
    resolve_options,
)
from vellum.contexts.templating.elements import prune_elements
from vellum.contexts.templating.exceptions import (
    InvalidTemplateOptionsError,
    TemplateProcessingError,
)
from vellum.contexts.templating.layout import apply_layout
from vellum.contexts.templating.loops import expand_loops, expand_nested_loops
from vellum.contexts.templating.placeholders import PlaceholderResolver
from vellum.contexts.templating.processor import (
    PIPELINE_ORDER,
    PipelineStage,
    ProcessorOptions,
    TemplateProcessor,
)
from vellum.contexts.templating.sections import prune_sections, should_remove_section
from vellum.contexts.templating.value_renderer import render_value

__all__ = [
    # Orchestration
    "TemplateProcessor",
    "ProcessorOptions",
    "PipelineStage",
    "PIPELINE_ORDER",
    # Individual stages
    "expand_loops",
    "expand_nested_loops",
    "PlaceholderResolver",
    "render_value",
    "prune_elements",
    "apply_layout",
    "prune_sections",
    "should_remove_section",
    "cleanup_template",
    "cleanup_content_template_advanced",
    # Configuration
    "load_processor_presets",
    "resolve_options",
    "load_template_data",
    # Errors
    "TemplateProcessingError",
    "InvalidTemplateOptionsError",
]
