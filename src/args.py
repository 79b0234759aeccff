"""Argument parsing functionality for depfetch."""

import argparse
from constants import Constants


def build_parser():
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="depfetch",
        description=(
            "depfetch - fetch the original source of a file inside an npm "
            "dependency from the GitHub repository that backs it"
        ),
        add_help=True,
    )

    parser.add_argument("--file-path",
                        dest="FILE_PATH",
                        help='Import path, e.g. "@scope/package/sub/path/name" or "package/sub/path"',
                        action="store", type=str,
                        required=True)
    parser.add_argument("--mode",
                        dest="MODE",
                        help="chat prints the source; create writes it to --output (default: chat)",
                        action="store", type=str,
                        default=Constants.MODES[0])
    parser.add_argument("--extension",
                        dest="EXTENSION",
                        help="Required file extension: " + " | ".join(Constants.CODE_EXTENSIONS),
                        action="store", type=str)
    parser.add_argument("--call-path",
                        dest="CALL_PATH",
                        help="Caller file path from project root (used for the suggested import in create mode)",
                        action="store", type=str)
    parser.add_argument("--output",
                        dest="OUTPUT",
                        help="Output directory or file path from project root (create mode only)",
                        action="store", type=str)
    parser.add_argument("--project-root",
                        dest="PROJECT_ROOT",
                        help="Project root (auto-detected from the nearest package.json if omitted)",
                        action="store", type=str)
    parser.add_argument("--repo",
                        dest="REPO",
                        help="GitHub repository URL override, e.g. https://github.com/org/repo",
                        action="store", type=str)
    parser.add_argument("--ref",
                        dest="REF",
                        help="Git ref override (commit/tag/branch)",
                        action="store", type=str)
    parser.add_argument("--prefer-latest",
                        dest="PREFER_LATEST",
                        help="Prefer npm latest metadata and default/main/master branches first",
                        action="store_true")
    parser.add_argument("--source-prefix",
                        dest="SOURCE_PREFIX",
                        help="Preferred source root used as a tiebreak, e.g. src",
                        action="store", type=str)
    parser.add_argument("--output-format",
                        dest="OUTPUT_FORMAT",
                        help="Chat mode output: raw or json (default: raw)",
                        action="store", type=str,
                        default=Constants.OUTPUT_FORMATS[0])
    parser.add_argument("--github-token",
                        dest="GITHUB_TOKEN",
                        help="GitHub token (or use the GITHUB_TOKEN environment variable)",
                        action="store", type=str)
    parser.add_argument("--preset",
                        dest="PRESET",
                        help="Named package preset from the config file",
                        action="store", type=str)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML config file",
                        action="store", type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
