# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
CLI entrypoint for envvar.

Usage:
    envvar --version
    envvar --help
    envvar --get NAME
    envvar --has NAME
    envvar --list [--yaml]
"""

import argparse
import json
import logging
import platform
import sys

from envvar import __version__
from envvar.errors import EnvvarError, ExitCode, InvalidVariableFormatError, UnsupportedBackendError
from envvar.platform import PLATFORM_NAME
from envvar.selection import BACKEND_ENV_VAR, BACKENDS, default_backend_name, get_environment


def get_version_string() -> str:
    """Generate a detailed version string."""
    python_version = platform.python_version()
    os_info = f"{PLATFORM_NAME} {platform.release()}"
    return (
        f"envvar {__version__}\n"
        f"  python: {python_version}\n"
        f"  platform: {os_info}\n"
        f"  native backend: {default_backend_name()}"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for envvar."""
    parser = argparse.ArgumentParser(
        prog="envvar",
        description="Inspect the process environment through the native OS API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  envvar --get PATH
  envvar --has HOME && echo set
  envvar --list --yaml
  envvar --backend process --list

The backend defaults to ${BACKEND_ENV_VAR}, then to the platform's native API.
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=get_version_string(),
    )

    parser.add_argument(
        "--get",
        dest="get_name",
        metavar="NAME",
        default=None,
        help="Print the value of a variable",
    )

    parser.add_argument(
        "--has",
        dest="has_name",
        metavar="NAME",
        default=None,
        help="Exit 0 if a variable is set, 2 otherwise",
    )

    parser.add_argument(
        "--list",
        action="store_true",
        dest="list_vars",
        help="Output all variables (JSON)",
    )

    parser.add_argument(
        "-y", "--yaml",
        action="store_true",
        help="Output in YAML format",
    )

    parser.add_argument(
        "--backend",
        choices=sorted(BACKENDS),
        default=None,
        help="Environment backend to use",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    """Map the -v count onto the root log level."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def format_mapping(variables: dict[str, str], as_yaml: bool) -> str:
    """Render an environment mapping as JSON or YAML."""
    if as_yaml:
        import yaml
        return yaml.safe_dump(variables, default_flow_style=False, sort_keys=True).rstrip("\n")
    return json.dumps(variables, indent=2, sort_keys=True)


def main(args: list[str] | None = None) -> int:
    """Main entrypoint for envvar CLI."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.get_name is None and parsed.has_name is None and not parsed.list_vars:
        parser.print_help()
        return ExitCode.SUCCESS

    configure_logging(parsed.verbose)

    try:
        env = get_environment(parsed.backend)

        if parsed.get_name is not None:
            value = env.get(parsed.get_name)
            if value is None:
                return ExitCode.NOT_FOUND
            print(value)
            return ExitCode.SUCCESS

        if parsed.has_name is not None:
            return ExitCode.SUCCESS if env.contains(parsed.has_name) else ExitCode.NOT_FOUND

        print(format_mapping(env.to_map(), parsed.yaml))
        return ExitCode.SUCCESS

    except InvalidVariableFormatError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.FORMAT_ERROR
    except UnsupportedBackendError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.UNSUPPORTED
    except EnvvarError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return ExitCode.KEYBOARD_INTERRUPT


if __name__ == "__main__":
    sys.exit(main())
