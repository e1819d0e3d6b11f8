"""Module-level constants for the auto insert folder service."""

import os
from pathlib import Path

# Configuration
CONFIG_ENV_VAR = "AUTO_INSERT_FOLDER_CONFIG"
CONFIG_PATH = Path(os.environ.get(CONFIG_ENV_VAR, Path(__file__).parent.parent / "vaults.yaml"))
SETTINGS_FILENAME = ".auto-insert-folder.yaml"

# Note handling
NOTE_SUFFIX = ".md"
SETTLE_DELAY_SECONDS = 0.2
ROOT_FOLDER_NAME = "Root"
ROOT_FOLDER_PATH = "/"
FRONTMATTER_MARKER = "---"

# Logging
LOG_LEVEL = "INFO"
