"""Template Parser - wire documents to Template models with binding detection."""

from typing import Any

from pydantic import ValidationError

from evento.binding.paths import BindingPath, BindingPathError, full_reference, interpolation_paths
from evento.core.errors import InvalidTemplate, RequestValidationError
from evento.core.json import JSONParseError, loads_object
from evento.core.logging_config import get_logger

from .models import Interpolation, LiteralValue, PropertyValue, Reference, Template, TemplateNode
from .validation import Violation, ViolationKind

logger = get_logger(__name__)

REF_KEY = "$ref"


class TemplateParser:
    """
    Parses template documents into the arena model.

    Supports two layouts:
    - Nested: {"components": [{type, id?, props, children: [...]}]} as sent by the builder
    - Arena: {"nodes": {id: {type, properties, children: [ids]}}, "rootIds": [...]}
    """

    def __init__(self):
        self._id_counter = 0
        self._violations: list[Violation] = []

    def parse(self, document: Any, template_id: str | None = None) -> Template:
        """
        Parse a decoded template document.

        Args:
            document: Decoded JSON object
            template_id: Id to assign (a new one is generated when None)

        Returns:
            Template (not yet validated against the registry)

        Raises:
            RequestValidationError: If the document is not a template object
            InvalidTemplate: For duplicate node ids or malformed binding paths
        """
        self._id_counter = 0
        self._violations = []

        if not isinstance(document, dict):
            logger.error("invalid_format", type=type(document).__name__)
            raise RequestValidationError("Invalid template: expected JSON object")

        if not document.get("name"):
            logger.error("missing_field", field="name")
            raise RequestValidationError("Template name is required")

        if "nodes" in document:
            nodes, root_ids = self._parse_arena(document["nodes"], _pick(document, "rootIds", "root_ids", default=None))
        else:
            nodes, root_ids = self._parse_nested(_pick(document, "components", "children", default=[]))

        if self._violations:
            logger.warning("template_parse_failed", violations=len(self._violations))
            raise InvalidTemplate(self._violations)

        fields: dict[str, Any] = {
            "name": document["name"],
            "description": document.get("description", ""),
            "nodes": nodes,
            "root_ids": tuple(root_ids),
            "preview_data": _parse_preview_data(_pick(document, "previewData", "preview_data", "previewDataSets")),
        }
        for key in ("category", "status", "thumbnail"):
            if document.get(key) is not None:
                fields[key] = document[key]
        if template_id is not None:
            fields["id"] = template_id

        try:
            return Template(**fields)
        except ValidationError as e:
            logger.error("template_model_invalid", errors=e.error_count())
            raise RequestValidationError(f"Invalid template: {_first_error(e)}") from e

    # ------------------------------------------------------------------
    # Layouts
    # ------------------------------------------------------------------

    def _parse_nested(self, components: Any) -> tuple[dict[str, TemplateNode], list[str]]:
        """Flatten nested components into an arena, pre-order, without recursion."""
        if not isinstance(components, list):
            raise RequestValidationError("'components' must be a list")

        nodes: dict[str, TemplateNode] = {}
        root_ids: list[str] = []
        # (raw component, parent child-id list or None for roots)
        pending: list[tuple[Any, list[str] | None]] = [(c, None) for c in reversed(components)]
        child_lists: dict[str, list[str]] = {}
        raw_nodes: list[tuple[str, dict[str, Any]]] = []

        while pending:
            raw, siblings = pending.pop()
            if not isinstance(raw, dict):
                raise RequestValidationError(f"Component must be an object, got {type(raw).__name__}")

            node_id = self._node_id(raw)
            if node_id in child_lists:
                self._violations.append(Violation(
                    kind=ViolationKind.DUPLICATE_ID,
                    node_id=node_id,
                    message=f"Duplicate node id '{node_id}'",
                ))
                continue

            (root_ids if siblings is None else siblings).append(node_id)
            child_lists[node_id] = []
            raw_nodes.append((node_id, raw))

            children = raw.get("children") or []
            if not isinstance(children, list):
                raise RequestValidationError(f"'children' of {node_id} must be a list")
            pending.extend((c, child_lists[node_id]) for c in reversed(children))

        for node_id, raw in raw_nodes:
            nodes[node_id] = self._build_node(node_id, raw, child_lists[node_id])
        return nodes, root_ids

    def _parse_arena(self, raw_nodes: Any, root_ids: Any) -> tuple[dict[str, TemplateNode], list[str]]:
        if isinstance(raw_nodes, dict):
            items = [(key, value) for key, value in raw_nodes.items()]
        elif isinstance(raw_nodes, list):
            items = [(None, value) for value in raw_nodes]
        else:
            raise RequestValidationError("'nodes' must be an object or a list")

        nodes: dict[str, TemplateNode] = {}
        for key, raw in items:
            if not isinstance(raw, dict):
                raise RequestValidationError(f"Node must be an object, got {type(raw).__name__}")
            node_id = raw.get("id") or key or self._node_id(raw)
            if node_id in nodes:
                self._violations.append(Violation(
                    kind=ViolationKind.DUPLICATE_ID,
                    node_id=node_id,
                    message=f"Duplicate node id '{node_id}'",
                ))
                continue
            children = raw.get("children") or []
            if not isinstance(children, list) or not all(isinstance(c, str) for c in children):
                raise RequestValidationError(f"'children' of {node_id} must be a list of node ids")
            nodes[node_id] = self._build_node(node_id, raw, children)

        if root_ids is None:
            # Roots default to nodes no other node claims, in arena order
            claimed = {cid for node in nodes.values() for cid in node.children}
            root_ids = [nid for nid in nodes if nid not in claimed]
        elif not isinstance(root_ids, list):
            raise RequestValidationError("'rootIds' must be a list")

        return nodes, list(root_ids)

    # ------------------------------------------------------------------
    # Nodes and values
    # ------------------------------------------------------------------

    def _node_id(self, raw: dict[str, Any]) -> str:
        node_id = raw.get("id")
        if node_id:
            return str(node_id)
        node_id = f"{raw.get('type', 'node')}-{self._id_counter}"
        self._id_counter += 1
        return node_id

    def _build_node(self, node_id: str, raw: dict[str, Any], children: list[str]) -> TemplateNode:
        if not raw.get("type") or not isinstance(raw["type"], str):
            raise RequestValidationError(f"Node {node_id} is missing a component type")

        props = _pick(raw, "properties", "props", default={}) or {}
        if not isinstance(props, dict):
            raise RequestValidationError(f"Properties of {node_id} must be an object")

        properties: dict[str, PropertyValue] = {}
        for name, value in props.items():
            parsed = self._parse_value(node_id, name, value)
            if parsed is not None:
                properties[name] = parsed

        fields: dict[str, Any] = {
            "id": node_id,
            "type": raw["type"],
            "properties": properties,
            "children": tuple(children),
            "z_index": _pick(raw, "zIndex", "z_index", default=0) or 0,
            "styles": raw.get("styles") or {},
        }
        frame = _pick(raw, "frame", "position")
        if frame is not None:
            fields["frame"] = frame

        try:
            return TemplateNode(**fields)
        except ValidationError as e:
            raise RequestValidationError(f"Invalid node {node_id}: {_first_error(e)}") from e

    def _parse_value(self, node_id: str, name: str, value: Any) -> PropertyValue | None:
        """Classify one wire value; returns None (and records a violation) on a bad path."""
        try:
            return parse_property_value(value)
        except BindingPathError as e:
            self._violations.append(Violation(
                kind=ViolationKind.INVALID_BINDING,
                node_id=node_id,
                property=name,
                message=str(e),
            ))
            return None


def parse_property_value(value: Any) -> PropertyValue:
    """
    Classify a wire property value.

    - {"$ref": "a.b"} or exactly "{{a.b}}" -> Reference
    - text embedding {{path}} segments -> Interpolation
    - anything else -> LiteralValue

    Raises:
        BindingPathError: If a binding path is malformed
    """
    if isinstance(value, dict) and set(value) == {REF_KEY}:
        return Reference(path=BindingPath.parse(value[REF_KEY]).raw)

    if isinstance(value, str) and "{{" in value:
        whole = full_reference(value)
        if whole is not None:
            return Reference(path=BindingPath.parse(whole).raw)
        paths = interpolation_paths(value)
        if paths:
            for path in paths:
                BindingPath.parse(path)
            return Interpolation(text=value)

    return LiteralValue(value=value)


def parse_template(document: Any, template_id: str | None = None) -> Template:
    """Convenience wrapper around TemplateParser.parse."""
    return TemplateParser().parse(document, template_id)


def parse_template_json(content: str | bytes, template_id: str | None = None) -> Template:
    """Parse a template from JSON text."""
    try:
        document = loads_object(content)
    except JSONParseError as e:
        logger.error("json_parse_failed", error=str(e))
        raise RequestValidationError(f"Invalid JSON: {e}") from e
    return parse_template(document, template_id)


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key among camelCase / snake_case aliases."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _parse_preview_data(raw: Any) -> dict[str, dict[str, Any]]:
    """Accept {name: data} or [{name, data}] preview sets."""
    if raw is None:
        return {}
    if isinstance(raw, dict):
        sets = raw
    elif isinstance(raw, list):
        sets = {}
        for item in raw:
            if not isinstance(item, dict) or "name" not in item:
                raise RequestValidationError("Preview data sets need a name")
            sets[item["name"]] = item.get("data", {})
    else:
        raise RequestValidationError("Preview data must be an object or a list")

    for name, data in sets.items():
        if not isinstance(data, dict):
            raise RequestValidationError(f"Preview data '{name}' must be an object")
    return dict(sets)


def _first_error(e: ValidationError) -> str:
    error = e.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


__all__ = [
    "REF_KEY",
    "TemplateParser",
    "parse_property_value",
    "parse_template",
    "parse_template_json",
]
