# fancygit/constants.py

"""
Names shared by the stores, the prompts and the CLI: config file locations,
commit types, npm version kinds, prompt choice labels and process exit codes.
"""

APP_NAME = "fancygit"
APP_AUTHOR = "fancygit"

# --- File System Constants ---
CONFIG_DIR_NAME = ".fancygit"
SETTINGS_FILE_NAME = "settings.json"
FORMATS_FILE_NAME = "formats.json"
LOG_FILE_NAME = "fancygit.log"
NPM_MANIFEST = "package.json"

# --- Default formatter ---
DEFAULT_STYLE = "clean"
DEFAULT_STYLES = ["clean", "compact", "modern"]
PLACEHOLDER_TYPE = "[type]"
PLACEHOLDER_MESSAGE = "[message]"
PLACEHOLDER_DESCRIPTION = "[description]"

# --- Commit types ---
# Offered when composing a commit message.
COMMIT_TYPES = ["feat", "fix", "chore", "docs", "style", "refactor"]
# Prompted for when creating a custom format.
FORMAT_COMMIT_TYPES = COMMIT_TYPES + ["test"]

VERSION_OPTIONS = [
    "patch",
    "minor",
    "major",
    "prepatch",
    "preminor",
    "premajor",
    "prerelease",
]

MIN_FORMATTED_MESSAGE_LENGTH = 6
DEFAULT_REMOTE = "origin"

# --- Exit codes ---
EXIT_OK = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_NOT_A_REPOSITORY = 2
EXIT_CANCELLED = 130

# --- Menu Options (Single Source of Truth) ---
OPT_ADD_ALL = "All files"
OPT_ADD_SPECIFIC = "Specific files"
OPT_ADD_NONE = "No files"

OPT_NO_CHANGES_PUSH = "push"
OPT_NO_CHANGES_NPM = "npm"
OPT_NO_CHANGES_CANCEL = "cancel"

GOODBYE_MESSAGE = "\nGoodbye my friend 👋"
