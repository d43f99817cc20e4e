import argparse
import contextlib
import sys
from pathlib import Path
from typing import TextIO

from termcolor import colored

from monkey.environment import Environment, new_environment
from monkey.parser import parse_program
from monkey.runtime import evaluate, is_error
from monkey.tokenizer import tokenize
from monkey.value import Error

PROMPT = ">> "

# every monkey call takes several python frames
MAX_RECURSION_DEPTH = 10_000

MONKEY_FACE = r"""            __,__
   .--.  .-"     "-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-\"' '"/-./, -' /
    '-' /_   ^ ^   _\ '-'
       |  \._   _./  |
       \   \ '~' /   /
        '._ '-=-' _.'
           '~---~'
"""


def _paint(text: str, color: bool) -> str:
    return colored(text, "red", attrs=["bold"]) if color else text


def print_parser_errors(output: TextIO, errors: list[str], color: bool = True) -> None:
    output.write(MONKEY_FACE)
    output.write("Whoops! We ran into some monkey business here!\n")
    output.write(" parser errors:\n")
    for msg in errors:
        output.write("\t" + _paint(msg, color) + "\n")


def execute(code: str, env: Environment, output: TextIO, color: bool = True, trace: bool = False) -> bool:
    """Runs one chunk of source against env and prints its outcome. Returns False if it failed"""
    program, errors = parse_program(tokenize(code), trace=trace)
    if errors:
        print_parser_errors(output, errors, color=color)
        return False

    try:
        # builtins such as puts print to stdout
        with contextlib.redirect_stdout(output):
            result = evaluate(program, env)
    except RecursionError:
        result = Error("maximum recursion depth exceeded")

    if result is not None:
        text = result.inspect()
        output.write((_paint(text, color) if is_error(result) else text) + "\n")
    return not is_error(result)


def start(
    stdin: TextIO,
    output: TextIO,
    env: Environment | None = None,
    color: bool = True,
    trace: bool = False,
) -> None:
    if env is None:
        env = new_environment()

    while True:
        output.write(PROMPT)
        output.flush()
        try:
            line = stdin.readline()
        except KeyboardInterrupt:
            output.write("\n")
            return
        if not line:
            return
        execute(line, env, output, color=color, trace=trace)


def main(argv: list[str] | None = None) -> int:
    arg_parser = argparse.ArgumentParser(prog="monkey", description="Interpreter for the Monkey programming language")
    arg_parser.add_argument("file", nargs="?", type=Path, help="source file to run instead of starting the repl")
    arg_parser.add_argument("--no-color", action="store_true", help="print errors without ANSI colors")
    arg_parser.add_argument("--trace", action="store_true", help="trace parser routines to stderr")
    arg_parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_RECURSION_DEPTH,
        help=f"python recursion limit for evaluation, default {MAX_RECURSION_DEPTH}",
    )
    args = arg_parser.parse_args(argv)
    sys.setrecursionlimit(args.max_depth)

    color = not args.no_color
    if args.file is not None:
        try:
            code = args.file.read_text()
        except OSError as e:
            print(f"Could not read {str(args.file)!r}: {e.strerror}", file=sys.stderr)
            return 1
        ok = execute(code, new_environment(), sys.stdout, color=color, trace=args.trace)
        return 0 if ok else 1

    print("Hey! This is the Monkey repl!")
    print("Feel free to type any Monkey commands")
    start(sys.stdin, sys.stdout, color=color, trace=args.trace)
    return 0
