"""
Repository settings schema.

Pydantic models for choosing and configuring the sneaker repository from a
configuration dictionary or a YAML file.

Example YAML:
    repository:
      backend: firestore                # firestore | stub
      collection: "sneaker_collection"  # Firestore collection name
      project: "${FIREBASE_PROJECT_ID}"
      emulator_host: "localhost:8080"   # optional
      credentials_path: "/secrets/sa.json"  # optional
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class RepositoryBackendType(str, Enum):
    """Supported repository backends."""

    FIRESTORE = "firestore"
    STUB = "stub"


class RepositorySettings(BaseModel):
    """
    Pydantic model for repository settings.

    Attributes:
        backend: Repository backend type (firestore, stub)
        collection: Firestore collection name for sneaker documents
        project: Firebase project ID. None falls back to FIREBASE_PROJECT_ID.
        emulator_host: Firestore emulator address. None falls back to
                       FIRESTORE_EMULATOR_HOST.
        credentials_path: Service account JSON path. None falls back to
                          GOOGLE_APPLICATION_CREDENTIALS.

    Example:
        >>> settings = RepositorySettings(backend="STUB")
        >>> settings.backend
        'stub'
    """

    backend: RepositoryBackendType = Field(
        default=RepositoryBackendType.FIRESTORE,
        description="Repository backend type",
    )

    collection: str = Field(
        default="sneaker_collection",
        min_length=1,
        description="Firestore collection name for sneaker documents",
    )

    project: Optional[str] = Field(default=None, description="Firebase project ID")

    emulator_host: Optional[str] = Field(
        default=None, description="Firestore emulator address"
    )

    credentials_path: Optional[str] = Field(
        default=None, description="Path to a service account JSON file"
    )

    @field_validator("backend", mode="before")
    @classmethod
    def validate_backend(cls, v):
        """Accept string values and convert to enum."""
        if isinstance(v, str):
            try:
                return RepositoryBackendType(v.lower())
            except ValueError:
                valid = [e.value for e in RepositoryBackendType]
                raise ValueError(f"Invalid backend '{v}'. Valid options: {valid}")
        return v

    @field_validator("project", "emulator_host", "credentials_path", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty strings (e.g. unset ``${VAR:-}``) as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = {"use_enum_values": True}


def parse_repository_settings(config: dict) -> Optional[RepositorySettings]:
    """
    Parse repository settings from a configuration dictionary.

    Args:
        config: Configuration dictionary with a 'repository' key.

    Returns:
        RepositorySettings if repository configuration is present and valid,
        None otherwise.

    Example:
        >>> parse_repository_settings({"repository": {"backend": "stub"}}).backend
        'stub'
    """
    repository_config = config.get("repository")
    if not isinstance(repository_config, dict):
        return None

    try:
        return RepositorySettings(**repository_config)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid repository settings: {e}")
        return None


def load_settings_file(path: Union[str, Path]) -> Optional[RepositorySettings]:
    """
    Load repository settings from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        return None
    return parse_repository_settings(config)
