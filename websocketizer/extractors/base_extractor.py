from pathlib import Path
from typing import List, Protocol

from websocketizer.models.domain_models import ServiceBlueprint


class ServiceExtractor(Protocol):
    def extract_blueprints(self, project_dir: Path) -> List[ServiceBlueprint]: ...
