"""
Network snapshot loader.

Reads a network from JSON or YAML. Two layouts are accepted:

    # full network
    id: family
    name: Family
    people:
      - id: alice
        name: Alice
        relationships:
          bob: [sibling, sibling]
    groups:
      - id: cousins
        memberIds: [alice]

    # bare list of people (network id defaults to the file stem)
    - id: alice
      name: Alice
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from relnet.core.errors import NetworkLoadError
from relnet.core.models.person import Network
from relnet.utils.logging import get_logger

logger = get_logger("storage.loader")

_SUFFIXES = {".json", ".yaml", ".yml"}


def parse_network(data: Any, default_id: str = "network") -> Network:
    """Validate already-deserialized data into a :class:`Network`.

    Raises:
        ValueError: The data does not describe a network
        ValidationError: A record failed validation
    """
    if isinstance(data, list):
        data = {"id": default_id, "name": default_id, "people": data}
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping or a list of people, got {type(data).__name__}")

    data = dict(data)
    data.setdefault("id", default_id)
    return Network.model_validate(data)


def load_network(path: str | Path) -> Network:
    """Load a network snapshot from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        NetworkLoadError: The file is missing, malformed or invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in _SUFFIXES:
        raise NetworkLoadError(path, f"unsupported file type '{suffix or path.name}'")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise NetworkLoadError(path, str(e)) from e

    try:
        if suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise NetworkLoadError(path, f"malformed {suffix[1:].upper()}: {e}") from e

    try:
        network = parse_network(data, default_id=path.stem)
    except ValidationError as e:
        raise NetworkLoadError(path, f"invalid network: {e.error_count()} validation error(s)") from e
    except ValueError as e:
        raise NetworkLoadError(path, str(e)) from e

    logger.info(f"Loaded network '{network.id}' with {len(network.people)} people from {path.name}")
    return network
