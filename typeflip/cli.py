#!/usr/bin/env python3
"""
typeflip command line.

Usage:
    typeflip get-conditionals types.ts
    typeflip ternary-to-fn types.ts
    typeflip fn-to-ternary branches.txt [--tolerant]
    typeflip serve [--port 5002]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from typeflip.config import settings
from typeflip.services import get_translator
from typeflip.services.translator import TranslationError, TranslationMode

logger = logging.getLogger(__name__)

NO_CONDITIONALS_MESSAGE = "No conditional type aliases were found."
NO_FUNCTIONS_MESSAGE = "No valid function definitions found in this file to convert."


def read_source(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def get_conditionals(args) -> int:
    declarations = get_translator().extract_conditional_declarations(read_source(args.file))
    if not declarations:
        print(NO_CONDITIONALS_MESSAGE)
        return 0
    print("\n\n".join(declarations))
    return 0


def ternary_to_fn(args) -> int:
    results = get_translator().expression_to_branches(read_source(args.file), TranslationMode.STRICT)
    if not results:
        print(NO_CONDITIONALS_MESSAGE)
        return 0
    print(f"// From File: {args.file}")
    print("\n\n".join(results))
    return 0


def fn_to_ternary(args) -> int:
    mode = TranslationMode.TOLERANT if args.tolerant else TranslationMode.STRICT
    results = get_translator().branches_to_expression_list(read_source(args.file), mode)
    if not results:
        print(NO_FUNCTIONS_MESSAGE)
        return 0
    print("\n\n".join(results))
    return 0


def serve(args) -> int:
    import uvicorn
    uvicorn.run(
        "typeflip.main:app",
        host=settings.SERVICE_HOST,
        port=args.port,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typeflip",
        description="Translate between TypeScript conditional types and if/else functions",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at debug level")
    commands = parser.add_subparsers(dest="command", required=True)

    command = commands.add_parser("get-conditionals", help="Print every conditional type alias in a file")
    command.add_argument("file", help="TypeScript source file")
    command.set_defaults(handler=get_conditionals)

    command = commands.add_parser("ternary-to-fn", help="Convert conditional type aliases to if/else functions")
    command.add_argument("file", help="TypeScript source file")
    command.set_defaults(handler=ternary_to_fn)

    command = commands.add_parser("fn-to-ternary", help="Convert if/else functions to conditional type aliases")
    command.add_argument("file", help="File with function-like branch code")
    command.add_argument(
        "--tolerant",
        action="store_true",
        help="Replace functions that fail to convert with an error comment instead of stopping",
    )
    command.set_defaults(handler=fn_to_ternary)

    command = commands.add_parser("serve", help="Run the HTTP API")
    command.add_argument("--port", "-p", type=int, default=settings.SERVICE_PORT, help="Port to listen on")
    command.set_defaults(handler=serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        return args.handler(args)
    except TranslationError as e:
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot read {getattr(args, 'file', '')}: {e.strerror or e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
