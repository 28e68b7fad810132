from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from loguru import logger
from tree_sitter import Node

from websocketizer.config.config import configs
from websocketizer.config.rest_constants import JavaParsingConstants, RestAnnotationConfig
from websocketizer.extractors.java.import_resolver import ImportResolver
from websocketizer.extractors.java.parameter_mapper import ParameterMapper
from websocketizer.models.domain_models import (
    BufferPolicy,
    FileOutcome,
    FileScanState,
    MethodType,
    OutcomeStatus,
    RestRequestContext,
    RestRequestHandler,
    ServiceBlueprint,
)
from websocketizer.parser.java_parser import JavaParseError, JavaSourceParser
from websocketizer.utils.dir_explorer import DirExplorer
from websocketizer.utils.path_locator import PathLocator
from websocketizer.utils.tree_sitter_helper import (
    annotation_name,
    extract_annotations,
    extract_content,
    find_child_by_type,
    is_marker_annotation,
    single_string_value,
)

DiagnosticsSink = Callable[[FileOutcome], None]


class RestServiceExtractor:
    """
    Extracts the HTTP interface of JAX-RS style services as blueprints.

    Each source file is traversed once, depth first. Methods are seen before
    the class that declares them is finalized, so every annotated method first
    becomes a candidate blueprint in the per-file buffer; when the enclosing
    class carries a ``@Path`` root annotation the candidates are prefixed with
    the class path and promoted. Parameter types are then qualified through
    the file's imports.

    Files that cannot be read or parsed are skipped and reported to the
    optional diagnostics sink; ``extract_blueprints`` never raises.
    """

    def __init__(self,
                 parser: Optional[JavaSourceParser] = None,
                 parameter_mapper: Optional[ParameterMapper] = None,
                 import_resolver: Optional[ImportResolver] = None,
                 path_locator: Optional[PathLocator] = None,
                 extension: Optional[str] = None,
                 buffer_policy: Optional[BufferPolicy] = None,
                 diagnostics: Optional[DiagnosticsSink] = None):
        self.parser = parser or JavaSourceParser()
        self.parameter_mapper = parameter_mapper or ParameterMapper()
        self.import_resolver = import_resolver or ImportResolver(configs.FRAMEWORK_MARKER)
        self.path_locator = path_locator or PathLocator()
        self.extension = extension or configs.SOURCE_EXTENSION
        self.buffer_policy = buffer_policy or BufferPolicy(configs.BUFFER_POLICY)
        self.diagnostics = diagnostics

    def extract_blueprints(self, project_dir: Path) -> List[ServiceBlueprint]:
        logger.info(f"Extracting REST service blueprints from {project_dir}")
        result: List[ServiceBlueprint] = []

        def handle(level: int, path: str, file: Path) -> None:
            blueprints, outcome = self.extract_file(file)
            result.extend(blueprints)
            self._report(outcome)

        try:
            DirExplorer(lambda level, path, file: path.endswith(self.extension), handle).explore(Path(project_dir))
        except Exception:
            logger.exception(f"Directory walk aborted under {project_dir}")

        logger.info(f"Extracted {len(result)} blueprints")
        return result

    def extract_file(self, file_path: Path) -> Tuple[List[ServiceBlueprint], FileOutcome]:
        location = str(Path(file_path).absolute())
        try:
            tree = self.parser.parse_file(Path(file_path))
            state = self.scan_compilation_unit(tree.root_node, location)
            blueprints = self.import_resolver.resolve(state.promoted, state.imports)
        except JavaParseError as e:
            return [], self._skip(location, f"invalid syntax: {e}")
        except OSError as e:
            return [], self._skip(location, f"unreadable: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error extracting {location}")
            return [], self._skip(location, f"unexpected error: {e}")

        logger.debug(f"{location}: {len(blueprints)} blueprints")
        return blueprints, FileOutcome(location, OutcomeStatus.EXTRACTED, blueprint_count=len(blueprints))

    def scan_compilation_unit(self, root_node: Node, file_path: str) -> FileScanState:
        """Traverse one parsed file and return its accumulated state."""
        return self._visit(root_node, FileScanState(), file_path)

    def _visit(self, node: Node, state: FileScanState, file_path: str) -> FileScanState:
        if node.type == 'package_declaration':
            name_node = find_child_by_type(node, 'scoped_identifier') or find_child_by_type(node, 'identifier')
            state.package_name = extract_content(name_node) if name_node else ""
            return state

        if node.type == 'import_declaration':
            declaration = self.import_resolver.parse_import(node)
            if declaration:
                state.imports.append(declaration)
            return state

        is_service_scope = node.type in JavaParsingConstants.SERVICE_NODE_TYPES
        if is_service_scope:
            state.scope_marks.append(len(state.buffer))

        for child in node.named_children:
            state = self._visit(child, state, file_path)

        if node.type == 'method_declaration':
            state.buffer.extend(self.method_candidates(node))

        if is_service_scope:
            self._finalize_service(node, state, file_path)
        return state

    def method_candidates(self, method_node: Node) -> List[ServiceBlueprint]:
        """One candidate blueprint per HTTP verb marker on the method."""
        return_type = method_node.child_by_field_name('type')
        if return_type is None or return_type.type in JavaParsingConstants.NON_REFERENCE_RETURN_TYPES:
            return []

        method_path = ""
        method_types: List[MethodType] = []
        for annotation in extract_annotations(method_node):
            name = annotation_name(annotation)
            if is_marker_annotation(annotation):
                method_type = MethodType.from_annotation(name)
                if method_type and method_type not in method_types:
                    method_types.append(method_type)
            elif name == RestAnnotationConfig.PATH_ANNOTATION:
                value = single_string_value(annotation)
                if value is None:
                    logger.debug(f"Ignoring non-literal method path: {extract_content(annotation)}")
                else:
                    method_path = value

        if not method_types:
            return []

        method_name = extract_content(method_node.child_by_field_name('name'))
        inputs = self.parameter_mapper.map_parameters(method_node.child_by_field_name('parameters'))
        return [
            ServiceBlueprint(
                endpoint=f"{method_path}/{method_type.name}",
                inputs=inputs,
                handler=RestRequestHandler(method_name, method_type),
            )
            for method_type in method_types
        ]

    def root_path(self, class_node: Node) -> Optional[str]:
        """Class-level ``@Path`` value, ``/`` when it has no literal, ``None`` without one."""
        for annotation in extract_annotations(class_node):
            if annotation_name(annotation) == RestAnnotationConfig.PATH_ANNOTATION:
                value = single_string_value(annotation)
                return value if value is not None else RestAnnotationConfig.DEFAULT_ROOT_PATH
        return None

    def _finalize_service(self, class_node: Node, state: FileScanState, file_path: str) -> None:
        mark = state.scope_marks.pop()
        if self.buffer_policy is BufferPolicy.PER_CLASS:
            candidates = state.buffer[mark:]
            del state.buffer[mark:]
        else:
            candidates = list(state.buffer)

        class_path = self.root_path(class_node)
        class_name = extract_content(class_node.child_by_field_name('name'))
        if class_path is None:
            if candidates and self.buffer_policy is BufferPolicy.PER_CLASS:
                logger.debug(f"{class_name} has no @Path, dropping {len(candidates)} candidates")
            return

        package = state.package_name
        context = RestRequestContext(f"{package}.{class_name}" if package else class_name)
        source_dir = self.path_locator.source_root(file_path)
        output_dir = self.path_locator.output_dir(file_path)

        for index, candidate in enumerate(candidates):
            endpoint = class_path + candidate.endpoint
            if self.buffer_policy is BufferPolicy.SHARED:
                # later root classes in the file prefix the already prefixed endpoint
                state.buffer[index] = replace(candidate, endpoint=endpoint)
            state.promoted.append(replace(
                candidate,
                endpoint=endpoint,
                class_name=class_name,
                package_name=package,
                request_context=context,
                source_dir=source_dir,
                autogenerated_path=output_dir,
            ))

    def _skip(self, location: str, reason: str) -> FileOutcome:
        logger.warning(f"Skipping {location}: {reason}")
        return FileOutcome(location, OutcomeStatus.SKIPPED, reason=reason)

    def _report(self, outcome: FileOutcome) -> None:
        if self.diagnostics is None:
            return
        try:
            self.diagnostics(outcome)
        except Exception:
            logger.exception(f"Diagnostics sink failed for {outcome.path}")
