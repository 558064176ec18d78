"""Centralized constants for gamedetector.

Values shared by several scanners live here so that tuning one of them does
not require hunting through every adapter.
"""

# =============================================================================
# BASE DIRECTORIES
# =============================================================================

# Names a candidate root may be relative to (see DetectorConfig.base_dir)
BASE_DIR_NAMES = ("home", "config", "cache", "data")

# XDG defaults, relative to $HOME
DEFAULT_CONFIG_DIR = ".config"
DEFAULT_CACHE_DIR = ".cache"
DEFAULT_DATA_DIR = ".local/share"

# =============================================================================
# ARTWORK
# =============================================================================

# Tried in this order when a stem has no fixed extension
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")

# Steam library cache file names
STEAM_BOX_ART_SUFFIX = "_library_600x900.jpg"
STEAM_ICON_SUFFIX = "_icon.jpg"
STEAM_BOX_ART_NAMES = ("library_600x900.jpg", "library_capsule.jpg")

# Newer Steam clients store icons as <sha1>.jpg (40 hex chars + ".jpg")
STEAM_ICON_NAME_LENGTH = 44

# Directory depth searched below appcache/librarycache/<appid>
STEAM_LIBRARY_CACHE_DEPTH = 2

# =============================================================================
# TITLES
# =============================================================================

# Removed from every detected title
TITLE_NOISE = ("™", "®")

# Separators replaced with spaces when deriving a title from a slug
SLUG_SEPARATORS = ("-", "_")

MINECRAFT_TITLE_PREFIX = "Minecraft: "

# =============================================================================
# LOGGING
# =============================================================================

DEFAULT_LOG_LEVEL = "WARNING"

# Environment variables consulted when the config does not set them
ENV_LOG_LEVEL = "GAMEDETECTOR_LOG_LEVEL"
ENV_LOG_FILE = "GAMEDETECTOR_LOG_FILE"

# =============================================================================
# REPORT
# =============================================================================

REPORT_VERSION = "1.0.0"
