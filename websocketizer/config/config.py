import os

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

from websocketizer.config.rest_constants import SourceLayoutConstants

load_dotenv()


class Configs(BaseSettings):

    # extraction
    SOURCE_EXTENSION: str = os.getenv("SOURCE_EXTENSION", SourceLayoutConstants.JAVA_EXTENSION)
    FRAMEWORK_MARKER: str = os.getenv("FRAMEWORK_MARKER", SourceLayoutConstants.SPRING_FRAMEWORK_MARKER)
    BUFFER_POLICY: str = os.getenv("BUFFER_POLICY", "per_class")

    # logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "websocketizer.log")

    def validate_extraction_config(self) -> None:
        """Validate that the extraction settings are usable."""
        if not self.SOURCE_EXTENSION:
            raise ValueError("SOURCE_EXTENSION must not be empty.")
        if self.BUFFER_POLICY not in ("per_class", "shared"):
            raise ValueError(
                f"BUFFER_POLICY must be 'per_class' or 'shared', got '{self.BUFFER_POLICY}'."
            )

    class Config:
        case_sensitive = True


configs = Configs()
