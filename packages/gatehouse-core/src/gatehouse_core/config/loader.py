"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import GatehouseConfig


def load_config(cli_path: str | None = None) -> GatehouseConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    An explicit ``cli_path`` must exist; a missing file raises ``ValueError``
    rather than falling back to another policy source.
    """
    candidates = [Path("./gatehouse.yaml"), Path.home() / ".gatehouse" / "config.yaml"]
    if cli_path:
        explicit = Path(cli_path)
        if not explicit.is_file():
            raise ValueError(f"Config file not found: {explicit}")
        candidates.insert(0, explicit)

    for path in candidates:
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            return GatehouseConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return GatehouseConfig()


def _read_yaml(path: Path) -> object:
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `gatehouse config init`
DEFAULT_CONFIG_TEMPLATE = """\
# gatehouse.yaml

# Bootstrap policy, applied to a fresh registry on load
policy:
  # Permissions are written as "object:action"
  permissions:
    - "doc:read"
    - "doc:write"

  # Role -> permissions granted to it
  roles:
    viewer:
      - "doc:read"
    editor:
      - "doc:read"
      - "doc:write"

  # User -> roles assigned to it (roles must be declared above)
  users:
    alice:
      - "editor"
    bob:
      - "viewer"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
