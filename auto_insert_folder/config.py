"""Configuration loading and vault registry."""

import logging
from functools import lru_cache
from pathlib import Path
import yaml

from auto_insert_folder.constants import CONFIG_PATH, SETTINGS_FILENAME
from auto_insert_folder.data_models import VaultMetadata, VaultConfiguration

logger = logging.getLogger(__name__)


def _resolve(raw_path: str) -> Path:
    resolved_path = Path(raw_path).expanduser()
    try:
        resolved_path = resolved_path.resolve(strict=False)
    except RuntimeError:
        # resolve can raise if underlying filesystem is inaccessible; fall back to expanded path
        pass
    return resolved_path


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Expected layout::

        default: personal
        vaults:
          personal:
            path: ~/Obsidian/Personal
            description: Day to day notes
            settings: ~/Obsidian/Personal/.auto-insert-folder.yaml  # optional

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
            next to the package, or the ``AUTO_INSERT_FOLDER_CONFIG`` environment variable.

    Returns:
        A fully populated :class:`VaultConfiguration`.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    try:
        raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Vault configuration at {config_path} is not valid YAML: {exc}") from exc

    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = _resolve(raw_path)

        raw_settings = entry.get("settings")
        if raw_settings is None:
            settings_path = resolved_path / SETTINGS_FILENAME
        elif isinstance(raw_settings, str) and raw_settings.strip():
            settings_path = _resolve(raw_settings)
        else:
            raise ValueError(f"Vault '{name}' has an invalid 'settings' path")

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=(entry.get("description") or "").strip(),
            exists=resolved_path.is_dir(),
            settings_path=settings_path,
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    logger.info("Loaded %d vault(s) from %s (default=%s)", len(processed), config_path, default_vault)
    return VaultConfiguration(default_vault=default_vault, vaults=processed)


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Return the process-wide vault registry, loading it on first use."""
    return load_vault_configuration()
