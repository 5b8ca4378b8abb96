"""
AbleScript - parse a source file and dump its AST as JSON.
"""

import sys
import argparse
import os

from .compiler import compile_file, parse_source, ast_to_json, CompilationError


def _arg_parser():
    parser = argparse.ArgumentParser(prog="ablescript", description=__doc__.strip())
    parser.add_argument("input", help="AbleScript source file")
    parser.add_argument(
        "-o", "--output",
        help="JSON destination; '-' for stdout (default: <input>.ast.json)",
    )
    parser.add_argument("--tdark", action="store_true", help="rewrite 'lang' to 'script'")
    parser.add_argument("--debug", action="store_true", help="log phases to stderr")
    return parser


def main(argv=None):
    args = _arg_parser().parse_args(argv)
    output = args.output or os.path.splitext(args.input)[0] + ".ast.json"

    try:
        if output == "-":
            with open(args.input, "r", encoding="utf-8") as f:
                nodes = parse_source(f.read(), tdark=args.tdark, debug=args.debug)
            print(ast_to_json(nodes))
        else:
            compile_file(args.input, output, tdark=args.tdark, debug=args.debug)
    except FileNotFoundError:
        print(f"ablescript: no such file: {args.input}", file=sys.stderr)
        sys.exit(1)
    except CompilationError as e:
        print(f"ablescript: {args.input}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
