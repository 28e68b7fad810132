import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from websocketizer.parser.java_parser import JavaSourceParser


@pytest.fixture(scope="session")
def java_parser() -> JavaSourceParser:
    return JavaSourceParser()


@pytest.fixture
def write_java(tmp_path):
    """Write a Java source under ``tmp_path/project`` and return its path."""
    project = tmp_path / "project"

    def _write(relative_path: str, source: str) -> Path:
        target = project / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(source, encoding="utf-8")
        return target

    _write.root = project
    return _write
