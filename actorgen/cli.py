import argparse
import sys
from pathlib import Path

from .compiletime.errors import CompileError, ErrorHandler
from .config import ConfigError, ExpansionConfig, validate_path_exists, validate_indent, write_output
from .emitter import emit
from .expansion import expand, capability_interface
from .utils.helpers import parse


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="actorgen", description="GameActor code generation for Rust-style declarations")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="print the structural model of one declaration")
    parse_cmd.add_argument("file", type=Path)
    parse_cmd.add_argument("--emit", action="store_true", default=False, help="print the canonical source instead")
    parse_cmd.add_argument("--no-color", action="store_true", default=False)

    expand_cmd = commands.add_parser("expand", help="expand marked declarations in a source file")
    expand_cmd.add_argument("file", type=Path)
    expand_cmd.add_argument("-o", "--output", type=Path, default=None)
    expand_cmd.add_argument("--allow-missing-fields", action="store_true", default=False,
                            help="derive GameActor without checking for health/mana")
    expand_cmd.add_argument("--no-color", action="store_true", default=False)
    expand_cmd.add_argument("--verbose", action="store_true", default=False)
    expand_cmd.add_argument("--indent", type=int, default=4)

    check_cmd = commands.add_parser("check", help="compile declarations and impls with the LLVM backend")
    check_cmd.add_argument("file", type=Path)
    check_cmd.add_argument("--emit-ir", action="store_true", default=False)
    check_cmd.add_argument("--no-color", action="store_true", default=False)

    interface_cmd = commands.add_parser("interface", help="print the GameActor trait")
    interface_cmd.add_argument("--indent", type=int, default=4)

    return parser


def read_source(path: Path) -> str:
    validate_path_exists(path, "FILE")
    return path.read_text(encoding="utf-8")


def run_parse(args) -> int:
    source = read_source(args.file)
    handler = ErrorHandler(source, str(args.file), color=not args.no_color)
    try:
        defn = parse(source, str(args.file))
    except CompileError as exc:
        handler.report(exc)
        return 1
    print(emit(defn) if args.emit else repr(defn))
    return 0


def run_expand(args) -> int:
    config = ExpansionConfig.from_args(args)
    source = read_source(args.file)
    handler = ErrorHandler(source, str(args.file), color=config.color)
    try:
        expanded = expand(source, config, filename=str(args.file), handler=handler)
    except CompileError:
        return 1
    if args.output is not None:
        write_output(args.output, expanded)
        if config.verbose:
            print(f"[actorgen] wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(expanded)
    return 0


def run_check(args) -> int:
    # Imported here so the other commands do not load LLVM.
    from .codegen import ActorCompiler

    source = read_source(args.file)
    compiler = ActorCompiler(source, str(args.file), color=not args.no_color, quiet=False)
    try:
        compiler.compile_source(source)
    except CompileError:
        return 1
    if args.emit_ir:
        print(compiler.generate_ir())
    else:
        print(f"{args.file}: ok ({len(compiler.struct_types)} struct(s), {len(compiler.methods)} method(s))")
    return 0


def run_interface(args) -> int:
    print(emit(capability_interface(), validate_indent(args.indent)))
    return 0


COMMANDS = {
    "parse": run_parse,
    "expand": run_expand,
    "check": run_check,
    "interface": run_interface,
}


def main(argv=None) -> int:
    args = build_argument_parser().parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}", file=sys.stderr)
        if err.suggestion:
            print(f"Hint: {err.suggestion}", file=sys.stderr)
        return 2
