from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from websocketizer.config.rest_constants import RestAnnotationConfig


class MethodType(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    @classmethod
    def from_annotation(cls, annotation_name: str) -> Optional["MethodType"]:
        """Resolve a marker annotation name such as ``GET`` to its verb, or ``None``."""
        verb = RestAnnotationConfig.HTTP_METHOD_ANNOTATIONS.get(annotation_name)
        return cls(verb) if verb else None


class ParamType(Enum):
    PATH = "PATH"
    QUERY = "QUERY"
    HEADER = "HEADER"
    COOKIE = "COOKIE"
    FORM = "FORM"
    MATRIX = "MATRIX"
    BODY = "BODY"

    @classmethod
    def from_annotation(cls, annotation_name: str) -> "ParamType":
        """Resolve a parameter annotation name; unknown names fall back to BODY."""
        origin = RestAnnotationConfig.PARAM_ANNOTATIONS.get(annotation_name)
        return cls(origin) if origin else cls.BODY


class Framework(Enum):
    DEFAULT = "DEFAULT"
    SPRING = "SPRING"


class BufferPolicy(Enum):
    PER_CLASS = "per_class"
    SHARED = "shared"


class OutcomeStatus(Enum):
    EXTRACTED = "extracted"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class InputParam:
    name: str
    key: str
    data_type: str
    param_type: ParamType = ParamType.BODY

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "key": self.key,
            "data_type": self.data_type,
            "param_type": self.param_type.value,
        }


@dataclass(frozen=True)
class RestRequestHandler:
    method_name: str
    method_type: MethodType

    def to_dict(self) -> Dict:
        return {"method_name": self.method_name, "method_type": self.method_type.value}


@dataclass(frozen=True)
class RestRequestContext:
    class_path: str

    def to_dict(self) -> Dict:
        return {"class_path": self.class_path}


@dataclass(frozen=True)
class ServiceBlueprint:
    endpoint: str
    inputs: Tuple[InputParam, ...]
    handler: RestRequestHandler
    framework: Framework = Framework.DEFAULT
    class_name: str = ""
    package_name: str = ""
    request_context: Optional[RestRequestContext] = None
    source_dir: str = ""
    autogenerated_path: str = ""

    @property
    def method_type(self) -> MethodType:
        return self.handler.method_type

    def to_dict(self) -> Dict:
        """Convert the blueprint to a JSON-serializable dictionary."""
        return {
            "endpoint": self.endpoint,
            "method_type": self.method_type.value,
            "inputs": [param.to_dict() for param in self.inputs],
            "handler": self.handler.to_dict(),
            "framework": self.framework.value,
            "class_name": self.class_name,
            "package_name": self.package_name,
            "request_context": self.request_context.to_dict() if self.request_context else None,
            "source_dir": self.source_dir,
            "autogenerated_path": self.autogenerated_path,
        }


@dataclass
class FileOutcome:
    path: str
    status: OutcomeStatus
    reason: str = ""
    blueprint_count: int = 0

    @property
    def skipped(self) -> bool:
        return self.status is OutcomeStatus.SKIPPED

    def to_dict(self) -> Dict:
        return {
            "path": self.path,
            "status": self.status.value,
            "reason": self.reason,
            "blueprint_count": self.blueprint_count,
        }


@dataclass
class ImportDeclaration:
    qualified_name: str
    is_static: bool = False
    is_wildcard: bool = False

    @property
    def simple_name(self) -> str:
        return "*" if self.is_wildcard else self.qualified_name.split(".")[-1]


@dataclass
class FileScanState:
    """Per-file accumulator threaded through one traversal of a compilation unit.

    ``buffer`` holds candidate blueprints of visited methods that have not been
    merged with a class yet; ``scope_marks`` records the buffer length at the
    entry of each enclosing class or interface so a class can find the
    candidates of the methods it declares.
    """
    package_name: str = ""
    imports: List[ImportDeclaration] = field(default_factory=list)
    buffer: List[ServiceBlueprint] = field(default_factory=list)
    scope_marks: List[int] = field(default_factory=list)
    promoted: List[ServiceBlueprint] = field(default_factory=list)
