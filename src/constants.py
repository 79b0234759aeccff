"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INPUT_ERROR = 2
    NOT_RESOLVED = 3


class OutputModes(Enum):
    """Output modes supported by the CLI.

    Args:
        Enum (string): Output modes supported by the CLI.
    """

    CHAT = "chat"
    CREATE = "create"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    Values may be overridden at runtime from the YAML config (see cli_config).
    """

    USER_AGENT = "depfetch-script"
    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    GITHUB_API_BASE = "https://api.github.com"
    GITHUB_RAW_BASE = "https://raw.githubusercontent.com"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    CODE_EXTENSIONS = ["jsx", "tsx", "js", "ts", "less", "css", "scss", "sass"]
    MODES = [OutputModes.CHAT.value, OutputModes.CREATE.value]
    OUTPUT_FORMATS = ["raw", "json"]
    FALLBACK_BRANCHES = ["main", "master"]

    PACKAGE_JSON_FILE = "package.json"
    PACKAGE_LOCK_FILE = "package-lock.json"
    SHRINKWRAP_FILE = "npm-shrinkwrap.json"
    NODE_MODULES_DIR = "node_modules"
    PROJECT_ROOT_MAX_DEPTH = 20

    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_LOG_LEVEL = "DEPFETCH_LOG_LEVEL"
    ENV_CONFIG = "DEPFETCH_CONFIG"
    CONFIG_FILE_NAMES = ["depfetch.yml", "depfetch.yaml"]
    USER_CONFIG_PATH = "~/.config/depfetch/config.yml"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ERROR_BODY_PREVIEW = 300
