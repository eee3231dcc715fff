"""Command-line interface for tagval.

Evaluates a single binary operation given as three arguments and prints the
canonical text of the result. Operands are literals: integers, decimals,
double-quoted strings, `true` and `false`.

Exit status is 0 on success, 1 when the operation produces an Invalid value
and 2 for unusable arguments.
"""

import argparse
import logging
import sys

import tagval


def find_operator(symbol):
    """Look up an arithmetic or comparison operator by its symbol.

    Args:
        symbol: (str) Operator symbol like "+" or ">="
    Returns:
        (OpKind | CmpKind | None) Operator kind, None if unknown
    """
    for kinds in (tagval.OpKind, tagval.CmpKind):
        try:
            return kinds(symbol)
        except ValueError:
            continue
    return None


def format_result(result: tagval.Variable, show_type: bool = False) -> str:
    """Format a successful result for display."""
    text = result.value.format()
    if show_type:
        return f"{result.type} {text}"
    return text


def main(argv=None):
    symbols = [kind.value for kind in tagval.OpKind] + [kind.value for kind in tagval.CmpKind]
    parser = argparse.ArgumentParser(
        prog="tagval",
        description="Evaluate one binary operation on runtime values.",
    )
    parser.add_argument("left", help="Left operand literal")
    parser.add_argument("op", help=f"Operator, one of: {' '.join(symbols)}")
    parser.add_argument("right", help="Right operand literal")
    parser.add_argument("--type", dest="show_type", action="store_true",
                        help="Prefix the result with its runtime type")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log operator failures to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    kind = find_operator(args.op)
    if kind is None:
        print(f"Error: unknown operator {args.op!r}", file=sys.stderr)
        return 2

    try:
        left = tagval.parse_literal(args.left)
        right = tagval.parse_literal(args.right)
    except tagval.ParseError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    result = tagval.apply(kind, left, right)
    if result.is_invalid:
        print(f"Invalid: {result.value.reason}", file=sys.stderr)
        return 1

    print(format_result(result, args.show_type))
    return 0


if __name__ == "__main__":
    sys.exit(main())
