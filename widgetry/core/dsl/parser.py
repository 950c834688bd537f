"""
UI Definition Parser
====================

Builds pages from declarative UI definitions written in JSON or YAML.
Every node names a catalogue constructor in its ``type`` key; the remaining
keys become the constructor's arguments and ``children`` its content.

Example (YAML)::

    page: fluid
    title: Central limit theorem
    children:
      - type: title_panel
        title: Central limit theorem
      - type: sidebar_layout
        sidebar:
          - type: numeric_input
            id: m
            label: Number of samples
            value: 2
            min: 1
            max: 100
        main:
          - type: plot_output
            id: hist
"""

from typing import Dict, List, Any, Optional, Tuple
import json
import yaml  # type: ignore[import-untyped]
import time
from abc import ABC, abstractmethod
from cerberus import Validator  # type: ignore[import-untyped]

from widgetry.config.logging import get_logger
from widgetry.core.dsl.components import (
    COMPONENTS,
    CONTAINER,
    CONTENT,
    INPUT,
    OUTPUT,
    PAGE_BUILDERS,
    PAGE_TYPES,
    ComponentSpec,
)
from widgetry.core.exceptions import UIParseError, WidgetryError
from widgetry.core.ids import is_valid_id
from widgetry.core.inputs import icon
from widgetry.core.layouts import main_panel, sidebar_panel
from widgetry.core.themes import list_themes
from widgetry.models.schemas import ParseResult

logger = get_logger(__name__)


class UIValidator:
    """Structural validation with Cerberus plus semantic checks on ids."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="validator")  # structlog.BoundLoggerBase
        self._setup_schemas()

    def _setup_schemas(self) -> None:
        """Setup validation schemas."""
        # Node schema; unknown keys are constructor arguments
        node_base = {
            "type": {"type": "string", "required": True, "allowed": list(COMPONENTS)},
            "id": {"type": "string", "nullable": True},
            "label": {"nullable": True},
            "width": {"type": ["integer", "string"], "nullable": True},
            "class": {"type": "string", "nullable": True},
        }

        # Create a copy for node schema to avoid circular reference
        self.node_schema = node_base.copy()
        self.node_schema["children"] = {  # type: ignore[assignment]
            "type": "list",
            "schema": {"type": "dict", "schema": node_base, "allow_unknown": True},
        }

        self.navbar_schema = {
            "id": {"type": "string", "nullable": True},
            "selected": {"type": "string", "nullable": True},
            "position": {"type": "string", "allowed": ["static-top", "fixed-top", "fixed-bottom"]},
            "inverse": {"type": "boolean"},
            "collapsible": {"type": "boolean"},
            "fluid": {"type": "boolean"},
            "window_title": {"type": "string", "nullable": True},
        }

        # Document schema
        self.document_schema: Dict[str, Any] = {
            "page": {"type": "string", "allowed": list(PAGE_TYPES), "default": "fluid"},
            "title": {"type": "string", "nullable": True},
            "theme": {"type": "string", "nullable": True},
            "lang": {"type": "string", "nullable": True},
            "padding": {"type": ["integer", "string", "list"], "nullable": True},
            "navbar": {"type": "dict", "schema": self.navbar_schema, "nullable": True},
            "children": {
                "type": "list",
                "required": True,
                "schema": {"type": "dict", "schema": self.node_schema, "allow_unknown": True},
            },
            "metadata": {"type": "dict", "default": {}},
            "version": {"type": "string", "default": "1.0"},
        }

    def validate_document(self, data: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
        """
        Validate UI definition structure.

        Args:
            data: Definition data to validate

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        validator = Validator(self.document_schema)  # type: ignore[misc]
        validator.allow_unknown = True  # Allow extra fields  # type: ignore[attr-defined]

        is_valid = validator.validate(data)  # type: ignore[misc]
        errors: List[str] = []
        warnings: List[str] = []

        if not is_valid:
            errors.extend(self._format_validation_errors(validator.errors))  # type: ignore[attr-defined]

        custom_errors, custom_warnings = self._perform_custom_validations(data)
        errors.extend(custom_errors)
        warnings.extend(custom_warnings)

        return bool(is_valid) and len(custom_errors) == 0, errors, warnings

    def _format_validation_errors(self, errors: Any, path: str = "") -> List[str]:
        """Format Cerberus validation errors into readable messages."""
        formatted_errors: List[str] = []

        for field, error_info in errors.items():
            current_path = f"{path}.{field}" if path else str(field)

            if isinstance(error_info, list):
                for error in error_info:
                    if isinstance(error, dict):
                        formatted_errors.extend(self._format_validation_errors(error, current_path))
                    else:
                        formatted_errors.append(f"{current_path}: {error}")
            elif isinstance(error_info, dict):
                formatted_errors.extend(self._format_validation_errors(error_info, current_path))

        return formatted_errors

    def _perform_custom_validations(self, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        """Validate nodes recursively and check ids across the whole page."""
        errors: List[str] = []
        warnings: List[str] = []
        seen_ids: Dict[str, str] = {}

        theme = data.get("theme")
        if isinstance(theme, str) and not theme.lower().endswith(".css") and theme.lower() not in list_themes():
            errors.append(f"theme: unknown theme '{theme}'")

        page = data.get("page", "fluid")
        for i, node in enumerate(data.get("children") or []):
            path = f"children[{i}]"
            if page == "navbar" and isinstance(node, dict) and node.get("type") not in ("tab_panel", "navbar_menu"):
                errors.append(f"{path}: navbar pages only take tab_panel and navbar_menu children")
            node_errors, node_warnings = self._validate_node(node, path, seen_ids)
            errors.extend(node_errors)
            warnings.extend(node_warnings)

        return errors, warnings

    def _validate_node(
        self, node: Any, path: str, seen_ids: Dict[str, str]
    ) -> Tuple[List[str], List[str]]:
        """Validate an individual node."""
        errors: List[str] = []
        warnings: List[str] = []

        if not isinstance(node, dict):
            errors.append(f"{path}: Node must be a dictionary/object, got {type(node).__name__}: {node!r}")
            return errors, warnings

        node_type = node.get("type")
        spec: Optional[ComponentSpec] = COMPONENTS.get(node_type) if isinstance(node_type, str) else None
        if spec is None:
            errors.append(f"{path}: Unknown component type '{node_type}'")
            return errors, warnings

        for key in spec.required:
            if key not in node:
                errors.append(f"{path}: '{node_type}' requires '{key}'")

        if spec.role in (INPUT, OUTPUT) and "id" in node:
            node_id = node["id"]
            if not is_valid_id(node_id):
                errors.append(
                    f"{path}: invalid id '{node_id}': only letters, numbers and underscores are allowed"
                )
            elif node_id in seen_ids:
                errors.append(f"{path}: duplicate id '{node_id}' (first used at {seen_ids[node_id]})")
            else:
                seen_ids[node_id] = path

        if node_type in ("plot_output", "image_output"):
            for key in ("click", "dblclick", "hover", "brush"):
                event_id = node.get(key)
                if event_id is None:
                    continue
                if not is_valid_id(event_id):
                    errors.append(f"{path}: invalid {key} id '{event_id}'")
                elif event_id in seen_ids:
                    errors.append(f"{path}: duplicate id '{event_id}' (first used at {seen_ids[event_id]})")
                else:
                    seen_ids[event_id] = f"{path}.{key}"

        if spec.role == INPUT and node.get("label") is None:
            warnings.append(f"{path}: '{node_type}' should have a 'label'")

        if node_type in ("tabset_panel", "navlist_panel", "navbar_menu") and node.get("id") is not None:
            tab_id = node["id"]
            if not is_valid_id(tab_id):
                errors.append(f"{path}: invalid id '{tab_id}'")
            elif tab_id in seen_ids:
                errors.append(f"{path}: duplicate id '{tab_id}' (first used at {seen_ids[tab_id]})")
            else:
                seen_ids[tab_id] = path

        children = node.get("children", [])
        if children and spec.role not in (CONTAINER, CONTENT):
            errors.append(f"{path}: Component type '{node_type}' cannot have children")
            children = []

        if node_type == "sidebar_layout":
            groups = [("sidebar", node.get("sidebar")), ("main", node.get("main"))]
        else:
            groups = [("children", children)]

        for key, group in groups:
            if isinstance(group, dict) and node_type == "sidebar_layout":
                group = group.get("children", [])
            if group is None:
                continue
            if not isinstance(group, list):
                errors.append(f"{path}.{key}: must be a list of nodes")
                continue
            for i, child in enumerate(group):
                child_path = f"{path}.{key}[{i}]"
                if spec.child_types is not None and isinstance(child, dict):
                    if child.get("type") not in spec.child_types:
                        errors.append(
                            f"{child_path}: '{node_type}' only takes {', '.join(spec.child_types)} children"
                        )
                child_errors, child_warnings = self._validate_node(child, child_path, seen_ids)
                errors.extend(child_errors)
                warnings.extend(child_warnings)

        return errors, warnings


class UIBuilder:
    """Turns a validated definition into a page by calling the constructors."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="builder")  # structlog.BoundLoggerBase

    def build_page(self, data: Dict[str, Any]) -> Any:
        page_type = data.get("page", "fluid")
        children = self.build_nodes(data.get("children", []), "children")
        options: Dict[str, Any] = {"theme": data.get("theme"), "lang": data.get("lang")}

        try:
            if page_type == "navbar":
                navbar = data.get("navbar") or {}
                return PAGE_BUILDERS["navbar"](data.get("title") or "", *children, **options, **navbar)
            if page_type == "fill" and data.get("padding") is not None:
                options["padding"] = data["padding"]
            return PAGE_BUILDERS[page_type](*children, title=data.get("title"), **options)
        except (WidgetryError, TypeError) as e:
            raise UIParseError(f"page: {e}")

    def build_nodes(self, nodes: List[Dict[str, Any]], path: str) -> List[Any]:
        return [self.build_node(node, f"{path}[{i}]") for i, node in enumerate(nodes)]

    def build_node(self, node: Dict[str, Any], path: str) -> Any:
        spec = COMPONENTS[node["type"]]
        args = {key: value for key, value in node.items() if key != "type"}
        if spec.role == INPUT:
            args.setdefault("label", None)

        if node["type"] == "sidebar_layout":
            return self._build_sidebar_layout(args, path)

        children = self.build_nodes(args.pop("children", []) or [], f"{path}.children")
        if "text" in args and spec.role in (CONTAINER, CONTENT) and "text" not in spec.positional:
            children.insert(0, args.pop("text"))
        positional = [args.pop(key) for key in spec.positional if key in args]
        kwargs = {self._argument_name(key): self._convert_value(key, value) for key, value in args.items()}

        try:
            return spec.builder(*positional, *children, **kwargs)
        except (WidgetryError, TypeError, ValueError) as e:
            raise UIParseError(f"{path} ({node['type']}): {e}")

    def _build_sidebar_layout(self, args: Dict[str, Any], path: str) -> Any:
        panels = {}
        for key, make_panel, default_width in (("sidebar", sidebar_panel, 4), ("main", main_panel, 8)):
            group = args.pop(key)
            width = default_width
            if isinstance(group, dict):
                width = group.get("width", default_width)
                group = group.get("children", [])
            try:
                panels[key] = make_panel(*self.build_nodes(group, f"{path}.{key}"), width=width)
            except WidgetryError as e:
                raise UIParseError(f"{path}.{key}: {e}")
        try:
            return COMPONENTS["sidebar_layout"].builder(panels["sidebar"], panels["main"], **args)
        except (WidgetryError, TypeError) as e:
            raise UIParseError(f"{path} (sidebar_layout): {e}")

    @staticmethod
    def _argument_name(key: str) -> str:
        if key == "class":
            return "class_"
        return key

    @staticmethod
    def _convert_value(key: str, value: Any) -> Any:
        if key == "icon" and isinstance(value, str):
            return icon(value)
        if key == "widths" and isinstance(value, list):
            return tuple(value)
        return value


class BaseUIParser(ABC):
    """Abstract base class for UI definition parsers."""

    def __init__(self) -> None:
        self.validator = UIValidator()
        self.builder = UIBuilder()

    @abstractmethod
    def load(self, content: str) -> Any:
        """Load raw content into Python data."""
        pass

    @abstractmethod
    async def validate_syntax(self, content: str) -> bool:
        """Validate syntax without building the page."""
        pass

    async def parse(self, content: str) -> ParseResult:
        """
        Parse a UI definition and build its page.

        Args:
            content: Raw definition as string

        Returns:
            ParseResult containing the page or errors
        """
        start_time = time.time()

        try:
            raw_data = self.load(content)
        except UIParseError as e:
            self.logger.error("UI definition parsing failed", error=str(e))
            return ParseResult(success=False, errors=[str(e)], processing_time=time.time() - start_time)

        if raw_data is None:
            return ParseResult(
                success=False, errors=["Empty UI definition"], processing_time=time.time() - start_time
            )

        if not isinstance(raw_data, dict):
            return ParseResult(
                success=False,
                errors=[f"UI definition must be a dictionary/object, got {type(raw_data).__name__}"],
                processing_time=time.time() - start_time,
            )

        is_valid, errors, warnings = self.validator.validate_document(raw_data)
        if not is_valid:
            self.logger.info("UI definition rejected", error_count=len(errors))
            return ParseResult(
                success=False,
                errors=errors,
                warnings=warnings,
                processing_time=time.time() - start_time,
            )

        try:
            page = self.builder.build_page(raw_data)
        except UIParseError as e:
            self.logger.error("Building page failed", error=str(e))
            return ParseResult(
                success=False, errors=[str(e)], warnings=warnings, processing_time=time.time() - start_time
            )

        self.logger.info("UI definition parsed", page=raw_data.get("page", "fluid"))
        return ParseResult(
            success=True,
            page=page,
            errors=[],
            warnings=warnings,
            processing_time=time.time() - start_time,
        )


class JSONUIParser(BaseUIParser):
    """JSON-based UI definition parser."""

    def __init__(self) -> None:
        super().__init__()
        self.logger: Any = logger.bind(parser="json")  # structlog.BoundLoggerBase

    def load(self, content: str) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise UIParseError(f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}")

    async def validate_syntax(self, content: str) -> bool:
        """
        Validate JSON syntax.

        Returns:
            True if syntax is valid, False otherwise
        """
        try:
            json.loads(content)
            return True
        except json.JSONDecodeError:
            return False


class YAMLUIParser(BaseUIParser):
    """YAML-based UI definition parser."""

    def __init__(self) -> None:
        super().__init__()
        self.logger: Any = logger.bind(parser="yaml")  # structlog.BoundLoggerBase

    def load(self, content: str) -> Any:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise UIParseError(f"Invalid YAML syntax: {e}")

    async def validate_syntax(self, content: str) -> bool:
        """
        Validate YAML syntax.

        Returns:
            True if syntax is valid, False otherwise
        """
        try:
            # Only check if YAML can be parsed - structure validation belongs in full parsing
            yaml.safe_load(content)
            return True
        except yaml.YAMLError:
            return False


class UIParserFactory:
    """Factory for creating UI definition parsers based on content type."""

    _parsers = {
        "json": JSONUIParser,
        "yaml": YAMLUIParser,
    }

    @classmethod
    def create_parser(cls, parser_type: str) -> BaseUIParser:
        """
        Create a UI definition parser instance.

        Args:
            parser_type: Type of parser ("json", "yaml")

        Raises:
            ValueError: If parser type is not supported
        """
        if parser_type not in cls._parsers:
            raise ValueError(f"Unsupported parser type: {parser_type}")

        return cls._parsers[parser_type]()

    @classmethod
    def detect_parser_type(cls, content: str) -> str:
        """Detect the definition format from its content."""
        content = content.strip()
        if content.startswith(("{", "[")):
            return "json"
        elif content.startswith(("---", "- ")) or "\n-" in content[:100]:
            return "yaml"
        else:
            # Try to parse as JSON first, fallback to YAML
            try:
                json.loads(content)
                return "json"
            except json.JSONDecodeError:
                return "yaml"


async def parse_ui(content: str, parser_type: Optional[str] = None) -> ParseResult:
    """
    Parse a UI definition using the appropriate parser.

    Args:
        content: Raw definition
        parser_type: Optional parser type override

    Returns:
        ParseResult containing the built page or errors
    """
    if not content or not content.strip():
        return ParseResult(success=False, errors=["Empty UI definition provided"], processing_time=0.0)

    if not parser_type:
        parser_type = UIParserFactory.detect_parser_type(content)

    try:
        parser = UIParserFactory.create_parser(parser_type)
        return await parser.parse(content)
    except ValueError as e:
        return ParseResult(success=False, errors=[str(e)], processing_time=0.0)


async def validate_ui_syntax(content: str, parser_type: Optional[str] = None) -> bool:
    """Validate definition syntax without building the page."""
    if not content or not content.strip():
        return False

    if not parser_type:
        parser_type = UIParserFactory.detect_parser_type(content)

    try:
        parser = UIParserFactory.create_parser(parser_type)
        return await parser.validate_syntax(content)
    except ValueError:
        return False


async def get_validation_suggestions(content: str, errors: List[str]) -> List[str]:
    """
    Generate suggestions for fixing the given errors.

    Returns:
        Up to five suggestions, most relevant first
    """
    suggestions: List[str] = []

    for error in errors:
        if "JSON syntax" in error:
            suggestions.extend(
                [
                    "Check for missing commas between object properties",
                    "Ensure all strings are properly quoted",
                    "Verify bracket and brace matching",
                ]
            )
        elif "YAML syntax" in error:
            suggestions.extend(
                [
                    "Check indentation consistency (use spaces, not tabs)",
                    "Ensure proper key-value separator usage (:)",
                    "Verify list item format (- item)",
                ]
            )
        elif "invalid id" in error:
            suggestions.append("Ids may only contain letters, numbers and underscores (no spaces, dashes or dots)")
        elif "duplicate id" in error:
            suggestions.append("Give every input and output its own id")
        elif "cannot have children" in error:
            suggestions.append("Only layout components (rows, columns, panels, tabs) and markup can have children")
        elif "unknown theme" in error:
            suggestions.append(f"Use one of the registered themes: {', '.join(list_themes())}")
        elif "unallowed value" in error:
            suggestions.append("Check the 'type' of each node against the supported component types")
        elif "required" in error.lower() or "requires" in error:
            suggestions.append("Ensure all required fields are present: type for nodes, id for inputs and outputs")

    if "children" not in content:
        suggestions.append("UI definition should contain a 'children' list")

    unique_suggestions: List[str] = []
    for suggestion in suggestions:
        if suggestion not in unique_suggestions:
            unique_suggestions.append(suggestion)

    return unique_suggestions[:5]


def get_supported_component_types() -> List[str]:
    """List the node types a definition may use."""
    return list(COMPONENTS)


def get_ui_schema_info() -> Dict[str, Any]:
    """
    Get schema information for documentation/tooling.

    Returns:
        Dictionary containing schema information
    """
    validator = UIValidator()

    return {
        "version": "1.0",
        "supported_formats": ["json", "yaml"],
        "page_types": list(PAGE_TYPES),
        "component_types": get_supported_component_types(),
        "inputs": [name for name, spec in COMPONENTS.items() if spec.role == INPUT],
        "outputs": [name for name, spec in COMPONENTS.items() if spec.role == OUTPUT],
        "themes": list_themes(),
        "document_schema": validator.document_schema,
        "node_schema": validator.node_schema,
        "example_minimal": {
            "page": "fluid",
            "children": [
                {"type": "text_input", "id": "name", "label": "What's your name?"},
                {"type": "text_output", "id": "greeting"},
            ],
        },
    }
