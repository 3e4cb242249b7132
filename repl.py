import argparse
import logging
from typing import Optional

from shuntcalc.runtime import evaluate_expression
from shuntcalc.tokenizer import is_allowed_char
from shuntcalc.utils import EvaluationError

EXIT_CHAR = "q"


def read_expression(prompt: str) -> Optional[str]:
    """Reads one line, returns None when the user wants to quit"""
    try:
        line = input(prompt)
    except EOFError:
        return None
    if EXIT_CHAR in line:
        return None
    return "".join(c for c in line if is_allowed_char(c))


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive arithmetic calculator")
    parser.add_argument("--prompt", default="Calc> ", help="input prompt")
    parser.add_argument("--debug", action="store_true", help="log tokens and postfix sequences")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("shuntcalc")
    print(f"Input {EXIT_CHAR!r} to terminate.\n")

    while True:
        code = read_expression(args.prompt)
        if code is None:
            break

        try:
            result = evaluate_expression(code)
        except EvaluationError as e:
            print(e)
            continue

        print(result)


if __name__ == "__main__":
    main()
