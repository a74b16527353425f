"""
Centralized constants for touchgrass.

Keeps the palette's tuning values and the on-disk locations in one place.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

# Settings, logs and exported files live here unless overridden
TOUCHGRASS_CONFIG_DIR = Path(
    os.environ.get("TOUCHGRASS_CONFIG_DIR", Path.home() / ".config" / "touchgrass")
)

# Directory holding KJV.json, crossrefs.json and topics.json
TOUCHGRASS_DATA_DIR_ENV = "TOUCHGRASS_DATA_DIR"
BUNDLED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

SETTINGS_FILENAME = "settings.json"
LOG_FILENAME = "touchgrass.log"
EXPORT_FILENAME = "TouchGrassBibleSettings.json"

TRANSLATION_FILES = {"KJV": "KJV.json"}
CROSS_REFERENCES_FILENAME = "crossrefs.json"
TOPICS_FILENAME = "topics.json"

# =============================================================================
# PALETTE TUNING
# =============================================================================

DEFAULT_MAX_RESULTS = 100  # Result-count ceiling per render pass
FUZZY_THRESHOLD_RATIO = 0.3  # Accept when edit distance < ratio * len(query)

# Row truncation in the TUI
TITLE_TRUNCATE_LENGTH = 60
DESCRIPTION_TRUNCATE_LENGTH = 70

# =============================================================================
# DOMAIN DEFAULTS
# =============================================================================

DEFAULT_TRANSLATION = "KJV"
DEFAULT_BOOKMARK_TAG = "Start Up Verses"

APP_NAME = "Touch Grass Bible"
APP_AUTHOR = "Justice Vellacott"
APP_LICENSE = "MIT"
APP_DESCRIPTION = (
    "The bible app that keeps you grounded in the word while letting you into "
    "some functionality."
)
WELCOME_QUERY = "Welcome to Touch Grass Bible!"
WELCOME_DESCRIPTION = (
    "From here you can search for verses, topics, and more.  "
    "Remember to take breaks!  Touch grass!"
)

# OSIS references saved under the default tag on first run
DEFAULT_BOOKMARKS = {
    DEFAULT_BOOKMARK_TAG: [
        "Gen.1.1",
        "John.3.16",
        "Ps.23.2",
        "1Cor.13.4",
        "Phil.4.13",
        "Rom.8.28",
    ],
}
