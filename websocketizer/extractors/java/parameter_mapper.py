from typing import List, Optional, Tuple

from loguru import logger
from tree_sitter import Node

from websocketizer.config.rest_constants import JavaParsingConstants, RestAnnotationConfig
from websocketizer.models.domain_models import InputParam, ParamType
from websocketizer.utils.tree_sitter_helper import (
    annotation_name,
    extract_annotations,
    extract_content,
    find_child_by_type,
    simple_name,
    single_string_value,
)


class ParameterMapper:
    """Maps the declared parameters of a method to wire inputs."""

    def map_parameters(self, parameters_node: Optional[Node]) -> Tuple[InputParam, ...]:
        if parameters_node is None:
            return ()

        inputs: List[InputParam] = []
        for param_node in parameters_node.named_children:
            if param_node.type not in JavaParsingConstants.PARAMETER_NODE_TYPES:
                continue
            param = self.map_parameter(param_node)
            if param:
                inputs.append(param)
        return tuple(inputs)

    def map_parameter(self, param_node: Node) -> Optional[InputParam]:
        name, type_node = self._name_and_type(param_node)
        if not name or type_node is None:
            logger.debug(f"Skipping parameter without name or type: {extract_content(param_node)}")
            return None

        data_type = self.data_type_name(type_node)
        if param_node.type == 'formal_parameter':
            # C-style array declarator: String tags[]
            data_type += self._compact(find_child_by_type(param_node, 'dimensions'))
        elif param_node.type == 'spread_parameter':
            data_type += "..."

        annotation = self._wire_annotation(param_node)
        if annotation is not None:
            return InputParam(
                name=name,
                key=single_string_value(annotation),
                data_type=data_type,
                param_type=ParamType.from_annotation(annotation_name(annotation)),
            )

        return InputParam(name=name, key=name, data_type=data_type, param_type=ParamType.BODY)

    def _wire_annotation(self, param_node: Node) -> Optional[Node]:
        """
        Single-value string annotation naming the wire key.

        A known origin annotation wins over others such as @DefaultValue("1").
        """
        candidates = [a for a in extract_annotations(param_node) if single_string_value(a) is not None]
        for annotation in candidates:
            if annotation_name(annotation) in RestAnnotationConfig.PARAM_ANNOTATIONS:
                return annotation
        return candidates[0] if candidates else None

    def data_type_name(self, type_node: Node) -> str:
        """
        Simple name of a declared type as the wire data type.

        - int -> int
        - com.x.Foo -> Foo
        - List<String> -> List
        - String[] -> String[]
        """
        if type_node.type in JavaParsingConstants.PRIMITIVE_TYPE_NODES or type_node.type == 'type_identifier':
            return extract_content(type_node)

        if type_node.type == 'scoped_type_identifier':
            return simple_name(extract_content(type_node))

        if type_node.type == 'generic_type':
            raw_type = type_node.named_children[0] if type_node.named_children else None
            return self.data_type_name(raw_type) if raw_type else extract_content(type_node)

        if type_node.type == 'array_type':
            element = type_node.child_by_field_name('element')
            dimensions = type_node.child_by_field_name('dimensions')
            element_name = self.data_type_name(element) if element else ""
            return element_name + self._compact(dimensions)

        return self._compact(type_node)

    def _name_and_type(self, param_node: Node) -> Tuple[Optional[str], Optional[Node]]:
        if param_node.type == 'formal_parameter':
            name_node = param_node.child_by_field_name('name')
            type_node = param_node.child_by_field_name('type')
        else:
            declarator = find_child_by_type(param_node, 'variable_declarator')
            name_node = declarator.child_by_field_name('name') if declarator else None
            type_node = next(
                (child for child in param_node.named_children
                 if child.type not in ('modifiers', 'variable_declarator')),
                None,
            )
        return (extract_content(name_node) if name_node else None), type_node

    def _compact(self, node: Optional[Node]) -> str:
        return "".join(extract_content(node).split()) if node else ""
