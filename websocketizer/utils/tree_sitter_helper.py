from typing import List, Optional

from tree_sitter import Node

from websocketizer.config.rest_constants import JavaParsingConstants, RestAnnotationConfig


def extract_content(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def find_child_by_type(node: Node, child_type: str) -> Optional[Node]:
    """Find first child node with specified type."""
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def extract_annotations(node: Node) -> List[Node]:
    """Annotation nodes attached to a declaration through its ``modifiers`` child."""
    modifiers = find_child_by_type(node, 'modifiers')
    if not modifiers:
        return []
    return [child for child in modifiers.children if child.type in JavaParsingConstants.ANNOTATION_NODE_TYPES]


def simple_name(qualified_name: str) -> str:
    return qualified_name.split(".")[-1]


def annotation_name(annotation_node: Node) -> str:
    """Simple name of an annotation: ``@javax.ws.rs.GET`` -> ``GET``."""
    name_node = annotation_node.child_by_field_name('name')
    if not name_node:
        return ""
    return simple_name(extract_content(name_node))


def annotation_arguments(annotation_node: Node) -> List[Node]:
    if annotation_node.type == 'marker_annotation':
        return []
    arguments = annotation_node.child_by_field_name('arguments')
    return list(arguments.named_children) if arguments else []


def is_marker_annotation(annotation_node: Node) -> bool:
    """``@GET`` and ``@GET()`` both count as markers."""
    return not annotation_arguments(annotation_node)


def single_string_value(annotation_node: Node) -> Optional[str]:
    """
    Literal value of a single-value annotation.

    Handles formats like:
    - @Path("/users")
    - @Path(value = "/users")
    - @Path with a text block, surrounding whitespace trimmed

    Returns None when the annotation has no arguments, several arguments, or
    an argument that is not a plain string literal.
    """
    arguments = annotation_arguments(annotation_node)
    if len(arguments) != 1:
        return None

    value_node = arguments[0]
    if value_node.type == 'element_value_pair':
        key = value_node.child_by_field_name('key')
        if not key or extract_content(key) != RestAnnotationConfig.VALUE_ATTRIBUTE:
            return None
        value_node = value_node.child_by_field_name('value')

    if value_node is None or value_node.type != 'string_literal':
        return None
    return unquote(extract_content(value_node))


def unquote(literal: str) -> str:
    if len(literal) >= 6 and literal.startswith('"""') and literal.endswith('"""'):
        return literal[3:-3].strip()
    if len(literal) >= 2 and literal[0] == '"' and literal[-1] == '"':
        return literal[1:-1]
    return literal
