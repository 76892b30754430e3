"""
Template Processor

Orchestrates the transformation pipeline. A template passes through a fixed,
ordered tuple of named stages, each a pure str -> str transform:

    loops -> placeholders -> nested_loops -> elements -> layout -> sections -> cleanup

The order is load-bearing: placeholders must see loop output, the nested pass
must see substituted values, layout must see pruned elements, and section
pruning must run after layout splicing so block markers never hide section
markers. Stages switched off by ProcessorOptions are skipped, never reordered.

A processor holds only its frozen options, its resolver and its stage tuple.
process() keeps all intermediate text in locals, so one instance may be shared
by concurrent callers.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional, Tuple

from vellum.contexts.exporting.exporter import ExportResult, export, get_supported_export_formats
from vellum.contexts.templating.cleanup import cleanup_content_template_advanced, cleanup_template
from vellum.contexts.templating.defaults import DEFAULT_OPTIONS
from vellum.contexts.templating.elements import prune_elements
from vellum.contexts.templating.exceptions import (
    InvalidTemplateOptionsError,
    TemplateProcessingError,
)
from vellum.contexts.templating.layout import apply_layout
from vellum.contexts.templating.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_process_result,
    log_process_start,
    log_stage,
)
from vellum.contexts.templating.loops import expand_loops, expand_nested_loops
from vellum.contexts.templating.placeholders import PlaceholderResolver
from vellum.contexts.templating.sections import prune_sections

# camelCase option names accepted by ProcessorOptions.from_dict()
OPTION_ALIASES = {
    "removeEmptySections": "remove_empty_sections",
    "processLoops": "process_loops",
    "processPlaceholders": "process_placeholders",
}

PIPELINE_ORDER: Tuple[str, ...] = (
    "loops",
    "placeholders",
    "nested_loops",
    "elements",
    "layout",
    "sections",
    "cleanup",
)


def normalize_option_keys(options: Mapping) -> Dict[str, Any]:
    """
    Map option keys to ProcessorOptions field names, accepting camelCase aliases.

    Raises:
        InvalidTemplateOptionsError: On unknown keys
    """
    known = {f.name for f in fields(ProcessorOptions)}
    normalized: Dict[str, Any] = {}
    for key, value in options.items():
        name = OPTION_ALIASES.get(key, key)
        if name not in known:
            raise InvalidTemplateOptionsError(
                f"Unknown processor option '{key}'. Valid options: {sorted(known)}"
            )
        normalized[name] = value
    return normalized


@dataclass(frozen=True)
class ProcessorOptions:
    """
    Construction-time processor configuration.

    Attributes:
        remove_empty_sections: Run the section pruner
        process_loops: Run loop expansion and the nested loop pass
        process_placeholders: Run top-level placeholder resolution
        delimiters: (open, close) placeholder delimiters; loop and layout
            markers are fixed and ignore this setting
    """

    remove_empty_sections: bool = DEFAULT_OPTIONS["remove_empty_sections"]
    process_loops: bool = DEFAULT_OPTIONS["process_loops"]
    process_placeholders: bool = DEFAULT_OPTIONS["process_placeholders"]
    delimiters: Tuple[str, str] = DEFAULT_OPTIONS["delimiters"]

    def __post_init__(self):
        delimiters = self.delimiters
        if not isinstance(delimiters, (list, tuple)) or len(delimiters) != 2:
            raise InvalidTemplateOptionsError(
                f"delimiters must be an (open, close) pair, got {delimiters!r}"
            )
        if not all(isinstance(d, str) and d for d in delimiters):
            raise InvalidTemplateOptionsError(
                f"delimiters must be non-empty strings, got {delimiters!r}"
            )
        # Lists from YAML/JSON become tuples so options stay hashable
        object.__setattr__(self, "delimiters", tuple(delimiters))

    @classmethod
    def from_dict(cls, options: Mapping) -> "ProcessorOptions":
        """
        Build options from a mapping using snake_case or camelCase keys.

        Raises:
            InvalidTemplateOptionsError: On unknown keys or bad delimiters
        """
        return cls(**normalize_option_keys(options))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class PipelineStage:
    """One named pipeline step: run(text, data) -> text."""

    name: str
    run: Callable[[str, Mapping], str]
    enabled: bool = True


class TemplateProcessor:
    """
    Runs templates and data through the transformation pipeline.

    Usage:
        processor = TemplateProcessor(remove_empty_sections=False)
        html = processor.process(template, {"name": "Ada", "skills": [...]})
        markdown = processor.export(html, "markdown")
    """

    def __init__(self, options: Optional[ProcessorOptions] = None, **overrides: Any):
        """
        Args:
            options: Base options (defaults when omitted)
            **overrides: Individual option values (snake_case or camelCase)
                applied on top of options
        """
        base = (options or ProcessorOptions()).to_dict()
        base.update(normalize_option_keys(overrides))
        self.options = ProcessorOptions(**base)
        self.resolver = PlaceholderResolver(self.options.delimiters)
        self.stages: Tuple[PipelineStage, ...] = self._build_stages()

    def _build_stages(self) -> Tuple[PipelineStage, ...]:
        resolver = self.resolver
        options = self.options
        stages = (
            PipelineStage(
                "loops",
                lambda text, data: expand_loops(text, data, resolver),
                options.process_loops,
            ),
            PipelineStage(
                "placeholders",
                resolver.resolve,
                options.process_placeholders,
            ),
            PipelineStage(
                "nested_loops",
                lambda text, data: expand_nested_loops(text, data, resolver),
                options.process_loops,
            ),
            PipelineStage("elements", prune_elements),
            PipelineStage("layout", apply_layout),
            PipelineStage(
                "sections",
                lambda text, data: prune_sections(text, data, resolver),
                options.remove_empty_sections,
            ),
            PipelineStage("cleanup", lambda text, data: cleanup_template(text)),
        )
        assert tuple(stage.name for stage in stages) == PIPELINE_ORDER
        return stages

    def process(
        self, template: str, data: Optional[Mapping] = None, template_name: str = "<string>"
    ) -> str:
        """
        Transform a template into finished markup.

        Args:
            template: Markup containing placeholders, loops, sections and layout markers
            data: Template data (None is treated as empty)
            template_name: Label used in log messages and errors

        Returns:
            Processed markup

        Raises:
            TemplateProcessingError: If a stage fails unexpectedly (e.g. a data
                mapping whose lookups raise). Missing keys, malformed markers
                and odd value types never raise.
        """
        if data is not None and not isinstance(data, Mapping):
            _log_warning(f"{template_name}: data is a {type(data).__name__}, not a mapping; treating as empty")
        data = data if isinstance(data, Mapping) else {}
        start = time.perf_counter()
        log_process_start(template_name, len(template), len(data))

        text = template
        for stage in self.stages:
            if not stage.enabled:
                _log_debug(f"Stage '{stage.name}': skipped (disabled)")
                continue
            try:
                result = stage.run(text, data)
            except Exception as e:
                _log_error(f"{template_name}: stage '{stage.name}' failed: {e!r}")
                raise TemplateProcessingError(
                    f"Failed to process {template_name}",
                    stage_name=stage.name,
                    snippet=text,
                    original_error=e,
                ) from e
            log_stage(stage.name, len(text), len(result))
            text = result

        log_process_result(template_name, len(text), time.perf_counter() - start)
        return text

    def export(self, markup: str, fmt: str = "html") -> ExportResult:
        """Convert processed markup; see vellum.contexts.exporting.exporter.export."""
        return export(markup, fmt)

    @staticmethod
    def get_supported_export_formats() -> List[str]:
        return get_supported_export_formats()

    @staticmethod
    def cleanup_content_template_advanced(template: str, data: Mapping) -> str:
        """Rule-table cleanup for already-filled markup."""
        return cleanup_content_template_advanced(template, data)

    def __repr__(self) -> str:
        return f"TemplateProcessor({self.options!r})"
