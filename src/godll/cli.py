"""
Command-line interface for godll.

This module provides the `godll` CLI tool for building Go DLLs together with
their .def and .lib linking files.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from rich.console import Console

from godll import __version__
from godll.build import BuildOrchestrator, BuildParams
from godll.config import ConfigError, FileSet, OutputName
from godll.output import init_timer, log_artifact, log_build_complete, log_error, log_header, log_warning, set_verbose
from godll.packages import TargetArch


@dataclass
class BuildArgs:
    """Arguments for a build."""

    files: FileSet
    output: OutputName
    arch: Optional[TargetArch] = None
    verbose: bool = False


class FilesAction(argparse.Action):
    """Adds a delimited sub-list of files to the FileSet held in dest."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: Optional[str] = None,
    ) -> None:
        getattr(namespace, self.dest).add(values)


class OutputAction(argparse.Action):
    """Assigns the OutputName held in dest; a second assignment is an error."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: Optional[str] = None,
    ) -> None:
        try:
            getattr(namespace, self.dest).set(values)
        except ConfigError as e:
            raise argparse.ArgumentError(self, str(e)) from e


def configure_logging(verbose: bool = False) -> None:
    """Send godll log records to stderr; DEBUG when verbose, INFO otherwise."""
    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger("godll")
    root.setLevel(level)
    root.propagate = False

    # Reset handlers so repeated invocations in one process don't duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)


def build_command(args: BuildArgs, orchestrator: Optional[BuildOrchestrator] = None) -> None:
    """Build a DLL and its linking files.

    Examples:
        godll -f main.go                      # go.def, go.lib, go.dll
        godll -f "a.go,b.go" -o mylib         # mylib.def, mylib.lib, mylib.dll
        godll -f a.go -f b.go -o out/mylib.dll
        godll -f main.go --arch 386           # 32-bit import library
    """
    console = Console(stderr=True, highlight=False)
    log_header("godll", __version__)

    if len(args.files) == 0:
        log_warning("No source files given; go build will build the package in the current directory")

    try:
        params = BuildParams.create(args.files, args.output, arch=args.arch)
        orchestrator = orchestrator or BuildOrchestrator()
        result = orchestrator.build(params)

        if result.success:
            console.print()
            console.print("[bold green]✓ Build successful![/bold green]")
            if result.def_path:
                log_artifact("DEF", result.def_path)
            if result.lib_path:
                log_artifact("LIB", result.lib_path)
            if result.dll_path:
                log_artifact("DLL", result.dll_path)
            log_build_complete(result.build_time)
            sys.exit(0)
        else:
            console.print()
            stage = result.stage.value if result.stage else "build"
            console.print(f"[bold red]✗ Build failed ({stage})![/bold red]")
            console.print()
            log_error(result.message)
            if result.stderr:
                console.print()
                console.print(result.stderr, markup=False)
            sys.exit(1)

    except KeyboardInterrupt:
        console.print()
        console.print("[bold yellow]✗ Build interrupted[/bold yellow]")
        sys.exit(130)  # Standard exit code for SIGINT

    except Exception as e:
        console.print()
        console.print("[bold red]✗ Unexpected error[/bold red]")
        console.print()
        log_error(f"{type(e).__name__}: {e}")

        if args.verbose:
            import traceback

            console.print()
            console.print("Traceback:")
            console.print(traceback.format_exc(), markup=False)

        sys.exit(1)


def create_parser() -> argparse.ArgumentParser:
    """Return the godll argument parser.

    Each call creates fresh FileSet and OutputName state.
    """
    parser = argparse.ArgumentParser(
        prog="godll",
        description="Build Go sources into a DLL with matching .def and .lib files",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"godll {__version__}",
    )
    parser.add_argument(
        "-f",
        "-files",
        "--files",
        dest="files",
        action=FilesAction,
        default=FileSet(),
        metavar="FILES",
        help="Comma, space or semicolon separated files to compile into a DLL (repeatable)",
    )
    parser.add_argument(
        "-o",
        "-out",
        "-output",
        "--out",
        "--output",
        dest="output",
        action=OutputAction,
        default=OutputName(),
        metavar="NAME",
        help="Output name for the DLL (default: go.dll); may be given once",
    )
    parser.add_argument(
        "--arch",
        choices=[arch.value for arch in TargetArch],
        default=None,
        help="Target architecture for the import library (default: host)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose build output",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """godll - build Go DLLs for consumption from C/C++ on Windows."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    configure_logging(parsed_args.verbose)
    set_verbose(parsed_args.verbose)
    init_timer()

    args = BuildArgs(
        files=parsed_args.files,
        output=parsed_args.output,
        arch=TargetArch(parsed_args.arch) if parsed_args.arch else None,
        verbose=parsed_args.verbose,
    )
    build_command(args)


if __name__ == "__main__":
    main()
