"""depfetch - fetch the source of a file inside an npm dependency from GitHub.

    Given an import path such as ``@scope/pkg/sub/path/name``, locate the
    GitHub repository and git ref matching the installed version and print
    (chat mode) or write (create mode) the best matching source file.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import Constants, ExitCodes, OutputModes
from common.errors import InputValidationError, ResolutionError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import apply_config, find_config_path, get_github_token, get_preset, load_config
from output import (
    build_output_file,
    chat_payload,
    create_report,
    dumps_report,
    write_output_file,
)
from registry.npm.manifest import detect_project_root
from repository.github import GitHubClient
from resolution.fetcher import FetchRequest, fetch_source, prepare
from resolution.import_path import strip_quotes
from resolution.reporter import Reporter

logger = logging.getLogger(__name__)


def expected_input_format():
    """Help text appended to input validation failures."""
    return "\n".join([
        "Expected input format:",
        'File path : "@gofynd/theme-template/page-layouts/single-checkout/shipment/single-page-shipment"',
        'Extension : "jsx"',
        'Call path : "theme/page-layouts/single-checkout/checkout/checkout.jsx"',
        'mode : "chat" | "create" (default: "chat")',
        'Output : "theme/page-layouts/single-checkout" (optional, used in create mode)',
    ])


def fail(message, exit_code=ExitCodes.NOT_RESOLVED):
    """Print a message to stderr and exit."""
    sys.stderr.write(f"{message}\n")
    sys.exit(exit_code.value)


def fail_with_format(message):
    fail(f"{message}\n\n{expected_input_format()}", ExitCodes.INPUT_ERROR)


def unresolved_message(import_path, package_name, err):
    """Terminal failure text: what was tried and which hosts must be reachable."""
    lines = [
        f'Could not resolve source for "{import_path}" from remote GitHub for package "{package_name}".',
        str(err),
    ]
    if err.attempted_refs:
        lines.append(f"Refs attempted ({len(err.attempted_refs)}): {', '.join(err.attempted_refs)}")
    lines.extend([
        "",
        "This tool fetches only from GitHub (no local fallback). It requires network access to:",
        "  - api.github.com",
        "  - raw.githubusercontent.com",
        "  - registry.npmjs.org (optional, for package metadata)",
        "",
        "If running in an automated or sandboxed environment (e.g. agent), ensure outbound network "
        "is allowed for this command, or run it locally and use the output.",
    ])
    return "\n".join(lines)


def build_fetch_request(args, project_root, preset):
    """Merge CLI flags over preset values into a FetchRequest."""
    manual_repo = strip_quotes(args.REPO) or (preset.repo if preset else None)
    manual_ref = strip_quotes(args.REF) or (preset.ref if preset else None)
    source_prefix = strip_quotes(args.SOURCE_PREFIX) or (preset.source_prefix if preset else None)
    return FetchRequest(
        import_path=strip_quotes(args.FILE_PATH),
        project_root=project_root,
        extension=strip_quotes(args.EXTENSION) or None,
        source_prefix=source_prefix or None,
        manual_repo=manual_repo or None,
        manual_ref=manual_ref or None,
        prefer_latest=bool(args.PREFER_LATEST),
        lockfile_only=bool(preset.lockfile_only) if preset else False,
    )


def emit_chat(resolved, package_name, import_path, output_format):
    if output_format == "json":
        logger.info("Returning source code in chat mode (JSON output)")
        sys.stdout.write(json.dumps(chat_payload(resolved, package_name, import_path)))
    else:
        logger.info("Returning source code in chat mode")
        sys.stdout.flush()
        sys.stdout.buffer.write(resolved.content)
    sys.stdout.flush()


def emit_create(args, resolved, project_root, package_name, import_path, requested_ext):
    output_file = build_output_file(
        project_root,
        args.OUTPUT,
        import_path,
        resolved.repo_path,
        requested_ext,
    )
    try:
        write_output_file(output_file, resolved.content)
    except OSError as e:
        logger.error("Output file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    report = create_report(
        resolved,
        project_root,
        output_file,
        package_name,
        import_path,
        call_path=strip_quotes(args.CALL_PATH) or None,
    )
    logger.info('File created at "%s"', report["outputFile"])
    sys.stdout.write(dumps_report(report))


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    mode = strip_quotes(args.MODE).lower() or OutputModes.CHAT.value
    if mode not in Constants.MODES:
        fail_with_format(f'Invalid --mode "{args.MODE}". Use "chat" or "create".')

    output_format = strip_quotes(args.OUTPUT_FORMAT).lower() or Constants.OUTPUT_FORMATS[0]
    if output_format not in Constants.OUTPUT_FORMATS:
        fail_with_format(f'Invalid --output-format "{args.OUTPUT_FORMAT}". Use "raw" or "json".')

    import_path = strip_quotes(args.FILE_PATH)
    if not import_path:
        fail_with_format(
            'Missing --file-path. Expected "<package>/<path>" or "@scope/package/<path>".'
        )

    project_root = os.path.abspath(strip_quotes(args.PROJECT_ROOT) or detect_project_root())
    config = load_config(find_config_path(strip_quotes(args.CONFIG) or None, project_root))
    apply_config(config)

    try:
        preset = get_preset(strip_quotes(args.PRESET) or None, config)
        request = build_fetch_request(args, project_root, preset)
        package_ref, requested_ext = prepare(request)
        if preset and preset.package and preset.package != package_ref.name:
            raise InputValidationError(
                f'Preset "{preset.name}" is for package "{preset.package}", '
                f'not "{package_ref.name}".'
            )
    except InputValidationError as err:
        fail_with_format(str(err))

    logger.info(
        'Executing in "%s" mode for "%s" (package: %s)', mode, import_path, package_ref.name
    )

    reporter = Reporter(logging.getLogger("resolution"))
    github = GitHubClient(token=get_github_token(strip_quotes(args.GITHUB_TOKEN), config))
    try:
        resolved = fetch_source(request, github=github, reporter=reporter)
    except ResolutionError as err:
        logger.debug(
            "Final failure",
            extra=extra_context(
                event="finalFailure",
                component="cli",
                package=package_ref.name,
                target=import_path,
                count=len(err.attempted_refs),
            ),
        )
        fail(unresolved_message(import_path, package_ref.name, err))

    if mode == OutputModes.CHAT.value:
        emit_chat(resolved, package_ref.name, import_path, output_format)
    else:
        emit_create(args, resolved, project_root, package_ref.name, import_path, requested_ext)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
