from dataclasses import replace
from typing import List, Optional

from loguru import logger
from tree_sitter import Node

from websocketizer.config.rest_constants import SourceLayoutConstants
from websocketizer.models.domain_models import Framework, ImportDeclaration, ServiceBlueprint
from websocketizer.utils.tree_sitter_helper import extract_content, find_child_by_type


class ImportResolver:
    """
    Qualifies parameter data types and tags the framework of one file's blueprints.

    Resolution is a plain simple-name match against the file's imports:
    wildcard imports, same-package types and shadowed names keep their
    simple name.
    """

    def __init__(self, framework_marker: str = SourceLayoutConstants.SPRING_FRAMEWORK_MARKER):
        self.framework_marker = framework_marker

    @staticmethod
    def parse_import(import_node: Node) -> Optional[ImportDeclaration]:
        name_node = find_child_by_type(import_node, 'scoped_identifier') or \
                    find_child_by_type(import_node, 'identifier')
        if not name_node:
            return None
        return ImportDeclaration(
            qualified_name=extract_content(name_node),
            is_static=find_child_by_type(import_node, 'static') is not None,
            is_wildcard=find_child_by_type(import_node, 'asterisk') is not None,
        )

    def detect_framework(self, imports: List[ImportDeclaration]) -> Framework:
        if any(self.framework_marker in imp.qualified_name for imp in imports):
            return Framework.SPRING
        return Framework.DEFAULT

    def qualify(self, data_type: str, imports: List[ImportDeclaration]) -> str:
        for imp in imports:
            if imp.is_static:
                continue
            if imp.simple_name == data_type:
                return imp.qualified_name
        return data_type

    def resolve(self, blueprints: List[ServiceBlueprint],
                imports: List[ImportDeclaration]) -> List[ServiceBlueprint]:
        if not blueprints:
            return []

        framework = self.detect_framework(imports)
        resolved = []
        for blueprint in blueprints:
            inputs = tuple(
                replace(param, data_type=self.qualify(param.data_type, imports))
                for param in blueprint.inputs
            )
            resolved.append(replace(blueprint, inputs=inputs, framework=framework))

        logger.debug(f"Resolved {len(resolved)} blueprints against {len(imports)} imports ({framework.value})")
        return resolved
