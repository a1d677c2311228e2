"""Command-line interface for watchhttp.

Parses tool flags, merges them into the settings and serves the latest
STDOUT of the user command over HTTP.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from watchhttp.args import ArgsError, flag_args, parse_duration, split_command

logger = logging.getLogger(__name__)

DOC = """\
Run command periodically and expose latest STDOUT as HTTP endpoint

Examples:
  $ watchhttp -t 1s -p 9000 -- ls -la
  $ watchhttp vmstat
  $ watchhttp tail /var/log/system.log
  $ watchhttp -json -- cat myfile.json
  $ watchhttp -p 9000 -json -- kubectl get pod mypod -o=json
  $ watchhttp -p 9000 -yaml -d -- kubectl get pod mypod -o=yaml
  $ watchhttp curl ...
  $ watchhttp -json -d -- /bin/sh -c 'curl ... | jq'
"""


def _duration(value: str) -> float:
    try:
        return parse_duration(value)
    except ArgsError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="watchhttp",
        usage="%(prog)s [flags] -- <cmd> [cmd-args...]",
        description=DOC,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-p", dest="port", type=int, default=None,
        help="port (default: 9000)",
    )
    parser.add_argument(
        "-t", dest="interval", type=_duration, default=None,
        help="interval to execute command (units: ns, us, µs, ms, s, m, h, d, w, y) (default: 1s)",
    )
    parser.add_argument(
        "-json", dest="json", action="store_true",
        help="set Content-Type: application/json",
    )
    parser.add_argument(
        "-yaml", dest="yaml", action="store_true",
        help="set Content-Type: text/yaml",
    )
    parser.add_argument(
        "-d", dest="delta", action="store_true",
        help="render JSON or YAML as HTML page highlighting changed numbers (requires -json or -yaml)",
    )
    parser.add_argument(
        "-host", dest="host", default=None,
        help="address to bind (default: 0.0.0.0)",
    )
    parser.add_argument(
        "-title", dest="title", default=None,
        help="HTML page title (default: the command)",
    )
    parser.add_argument(
        "-c", dest="config", type=Path, default=None,
        help="path to YAML configuration file (default: watchhttp.yaml)",
    )
    parser.add_argument(
        "-v", dest="verbose", action="store_true",
        help="enable debug logging",
    )
    return parser


def parse_args(argv: list[str]) -> tuple[argparse.Namespace, list[str]]:
    """Parse tool flags and extract the user command from argv.

    Flags are only parsed when present, so ``watchhttp ls -la`` runs
    ``ls -la`` untouched. Unknown flags and stray tokens before ``--``
    are usage errors and exit with status 2.
    """
    command, has_flags = split_command(argv)
    parser = build_parser()
    args = parser.parse_args(flag_args(argv) if has_flags else [])
    return args, command


def apply_args(settings, args: argparse.Namespace, command: list[str]) -> list[str]:
    """Apply command line flags on top of the loaded settings.

    Returns:
        The command to run.

    Raises:
        ArgsError: On conflicting flags, out of range values or a missing
            command.
    """
    if args.json and args.yaml:
        raise ArgsError("-json and -yaml are mutually exclusive")
    if args.interval is not None and args.interval <= 0:
        raise ArgsError("interval must be positive")

    try:
        if args.port is not None:
            settings.server.port = args.port
        if args.host is not None:
            settings.server.host = args.host
        if args.interval is not None:
            settings.runner.interval = args.interval
        if args.json:
            settings.render.format = "json"
        if args.yaml:
            settings.render.format = "yaml"
        if args.delta:
            settings.render.delta = True
        if args.title is not None:
            settings.render.title = args.title
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err["loc"])
        raise ArgsError(f"invalid value for {field}: {err['msg']}") from e

    if settings.render.delta and settings.render.format == "raw":
        raise ArgsError("-d requires -json or -yaml")

    command = command or settings.runner.command
    if not command:
        raise ArgsError("missing command")
    settings.runner.command = list(command)
    return list(command)


def build_app(settings, command: list[str]):
    """Wire runner, optional delta renderer and HTTP front together."""
    from watchhttp.endpoint.server import create_app
    from watchhttp.htmldelta import JSONDeltaRenderer, YAMLDeltaRenderer
    from watchhttp.snapshot import CommandRunner, RenderCache

    runner = CommandRunner(command, interval=settings.runner.interval)

    cache = None
    render = settings.render
    if render.delta:
        title = render.title or " ".join(command)
        if render.format == "json":
            renderer = JSONDeltaRenderer(title=title)
        else:
            renderer = YAMLDeltaRenderer(title=title)
        cache = RenderCache(runner, renderer)

    return create_app(runner, content_type=render.content_type, cache=cache)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the watchhttp CLI."""
    if argv is None:
        argv = sys.argv[1:]
    args, command = parse_args(argv)

    from watchhttp.config.settings import load_settings
    from watchhttp.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    try:
        command = apply_args(settings, args, command)
    except ArgsError as e:
        logger.critical("%s", e)
        sys.exit(1)

    import uvicorn

    app = build_app(settings, command)
    logger.info(
        "serving at port=%d with interval=%gs latest STDOUT of command: %s",
        settings.server.port, settings.runner.interval, " ".join(command),
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
