"""CLI application framework.

Provides a declarative way to build CLI applications with:
- Command registration via decorators
- Command groups for nested commands (``app schedule next``)
- Common arguments (--verbose, --quiet, --output) on the top-level parser
- Logging setup and consistent error handling
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .cli_errors import CLIError, ExitCode, handle_error
from .cli_output import OutputConfig, OutputFormat, OutputWriter


CommandFunc = Callable[[argparse.Namespace], int]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass
class Argument:
    """Definition of a CLI argument."""
    name_or_flags: tuple
    kwargs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandDef:
    """Definition of a CLI command."""
    name: str
    func: CommandFunc
    help: str = ""
    description: str = ""
    arguments: List[Argument] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)
    parent: Optional[str] = None


def configure_logging(verbose: bool = False, quiet: bool = False) -> int:
    """Map --verbose/--quiet onto the root logger level; returns the level."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    return level


class CLIApp:
    """Declarative argparse application.

    Example usage:
        app = CLIApp("inclusivo", "Campus accessibility helper")

        # @argument decorators go BEFORE @command (decorators apply bottom-up)
        @app.command("route", help="Route between two locations")
        @app.argument("origin")
        @app.argument("destination")
        def cmd_route(args):
            ...
            return 0
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        version: Optional[str] = None,
        epilog: Optional[str] = None,
        add_common_args: bool = True,
    ):
        self.name = name
        self.description = description
        self.version = version
        self.epilog = epilog
        self.add_common_args = add_common_args

        self._commands: Dict[str, CommandDef] = {}
        self._groups: Dict[str, "CommandGroup"] = {}
        self._global_arguments: List[Argument] = []
        self._parser: Optional[argparse.ArgumentParser] = None
        self._pending_arguments: List[Argument] = []

    def command(
        self,
        name: str,
        *,
        help: str = "",
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> Callable[[CommandFunc], CommandFunc]:
        """Decorator to register a top-level command."""
        def decorator(func: CommandFunc) -> CommandFunc:
            arguments = list(reversed(self._pending_arguments))
            self._pending_arguments.clear()
            self._commands[name] = CommandDef(
                name=name,
                func=func,
                help=help,
                description=description or help,
                arguments=arguments,
                aliases=aliases or [],
            )
            return func
        return decorator

    def argument(self, *name_or_flags: str, **kwargs: Any) -> Callable[[CommandFunc], CommandFunc]:
        """Decorator to add an argument to the next registered command."""
        def decorator(func: CommandFunc) -> CommandFunc:
            self._pending_arguments.append(Argument(name_or_flags, kwargs))
            return func
        return decorator

    def global_argument(self, *name_or_flags: str, **kwargs: Any) -> None:
        """Add an argument to the top-level parser (before the command name)."""
        self._global_arguments.append(Argument(name_or_flags, kwargs))

    def group(self, name: str, *, help: str = "", description: str = "") -> "CommandGroup":
        """Create a command group for nested commands."""
        group = CommandGroup(self, name, help=help, description=description)
        self._groups[name] = group
        return group

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            epilog=self.epilog,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if self.version:
            parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {self.version}")
        if self.add_common_args:
            self._add_common_arguments(parser)
        for arg in self._global_arguments:
            parser.add_argument(*arg.name_or_flags, **arg.kwargs)

        if self._commands or self._groups:
            subparsers = parser.add_subparsers(dest="command", metavar="<command>")
            for group_name, group in self._groups.items():
                group_parser = subparsers.add_parser(group_name, help=group.help, description=group.description)
                group._build_subparsers(group_parser)
            for cmd_def in self._commands.values():
                cmd_parser = subparsers.add_parser(
                    cmd_def.name,
                    help=cmd_def.help,
                    description=cmd_def.description,
                    aliases=cmd_def.aliases,
                )
                self._add_command_arguments(cmd_parser, cmd_def)
                cmd_parser.set_defaults(_cmd_func=cmd_def.func)

        self._parser = parser
        return parser

    def _add_common_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
        parser.add_argument("--quiet", "-q", action="store_true", help="Suppress non-essential output")
        parser.add_argument(
            "--output", "-o",
            choices=[f.value for f in OutputFormat],
            default=OutputFormat.TEXT.value,
            help="Output format (default: text)",
        )

    @staticmethod
    def _add_command_arguments(parser: argparse.ArgumentParser, cmd_def: CommandDef) -> None:
        for arg in cmd_def.arguments:
            parser.add_argument(*arg.name_or_flags, **arg.kwargs)

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse argv, set up logging and output, dispatch the command."""
        parser = self.build_parser()
        args = parser.parse_args(argv)

        verbose = bool(getattr(args, "verbose", False))
        quiet = bool(getattr(args, "quiet", False))
        configure_logging(verbose=verbose, quiet=quiet)
        args._output = OutputWriter(
            OutputConfig(
                format=OutputFormat(getattr(args, "output", OutputFormat.TEXT.value)),
                verbose=verbose,
                quiet=quiet,
            )
        )

        cmd_func = getattr(args, "_cmd_func", None)
        if cmd_func is None:
            parser.print_help()
            return ExitCode.USAGE

        try:
            return int(cmd_func(args))
        except CLIError as e:
            return handle_error(e, verbose=verbose)
        except KeyboardInterrupt as e:
            return handle_error(e)
        except Exception as e:
            return handle_error(e, verbose=verbose)


class CommandGroup:
    """A group of related commands (e.g. "schedule" containing "week", "next")."""

    def __init__(self, app: CLIApp, name: str, *, help: str = "", description: str = ""):
        self.app = app
        self.name = name
        self.help = help
        self.description = description or help
        self._commands: Dict[str, CommandDef] = {}

    def command(
        self,
        name: str,
        *,
        help: str = "",
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> Callable[[CommandFunc], CommandFunc]:
        def decorator(func: CommandFunc) -> CommandFunc:
            arguments = list(reversed(self.app._pending_arguments))
            self.app._pending_arguments.clear()
            self._commands[name] = CommandDef(
                name=name,
                func=func,
                help=help,
                description=description or help,
                arguments=arguments,
                aliases=aliases or [],
                parent=self.name,
            )
            return func
        return decorator

    def argument(self, *name_or_flags: str, **kwargs: Any) -> Callable[[CommandFunc], CommandFunc]:
        return self.app.argument(*name_or_flags, **kwargs)

    def _build_subparsers(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(dest=f"{self.name}_cmd", metavar="<subcommand>")
        for cmd_name, cmd_def in self._commands.items():
            cmd_parser = subparsers.add_parser(
                cmd_name,
                help=cmd_def.help,
                description=cmd_def.description,
                aliases=cmd_def.aliases,
            )
            self.app._add_command_arguments(cmd_parser, cmd_def)
            cmd_parser.set_defaults(_cmd_func=cmd_def.func)
