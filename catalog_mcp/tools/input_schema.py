"""Turn pydantic argument models into MCP tool input schemas."""

from typing import Any

from pydantic import BaseModel


def input_schema_for(model: type[BaseModel]) -> dict[str, Any]:
    """Build a self-contained JSON schema for a tool's arguments.

    Pydantic's output is flattened for hosts: ``$ref`` targets are inlined,
    ``X | None`` optionals collapse to ``X``, and generated titles and null
    defaults are dropped.

    Args:
        model: Pydantic model describing the tool arguments.

    Returns:
        JSON schema object with ``properties`` and ``required``.
    """
    schema = model.model_json_schema()
    definitions = schema.pop("$defs", {})
    simplified = _simplify(schema, definitions)
    simplified.setdefault("properties", {})
    return simplified


def _simplify(node: Any, definitions: dict[str, Any]) -> Any:
    if isinstance(node, list):
        return [_simplify(item, definitions) for item in node]
    if not isinstance(node, dict):
        return node

    if "$ref" in node:
        target = definitions[node["$ref"].rsplit("/", 1)[-1]]
        rest = {key: value for key, value in node.items() if key != "$ref"}
        return _simplify({**target, **rest}, definitions)

    any_of = node.get("anyOf")
    if any_of:
        branches = [branch for branch in any_of if branch.get("type") != "null"]
        if len(branches) == 1:
            rest = {key: value for key, value in node.items() if key != "anyOf"}
            return _simplify({**branches[0], **rest}, definitions)

    result: dict[str, Any] = {}
    for key, value in node.items():
        if key == "title":
            continue
        if key == "default" and value is None:
            continue
        if key == "properties":
            # property names are data, never schema keywords
            result[key] = {
                name: _simplify(prop, definitions) for name, prop in value.items()
            }
        else:
            result[key] = _simplify(value, definitions)
    return result
