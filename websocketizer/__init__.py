"""
Web-Socketizer - REST service blueprint extraction for Java projects.

This package scans annotated JAX-RS style service classes and describes each
endpoint (path, verb, inputs, handler and source location) as a
ServiceBlueprint for downstream transport code generation.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Public API
from websocketizer.extractors.java.rest_service_extractor import RestServiceExtractor
from websocketizer.models.domain_models import (
    FileOutcome,
    Framework,
    InputParam,
    MethodType,
    ParamType,
    ServiceBlueprint,
)

__all__ = [
    "RestServiceExtractor",
    "ServiceBlueprint",
    "InputParam",
    "MethodType",
    "ParamType",
    "Framework",
    "FileOutcome",
]
