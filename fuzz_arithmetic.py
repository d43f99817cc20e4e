import random
import re
import string
import warnings

from monkey.environment import new_environment
from monkey.parser import parse_program
from monkey.runtime import evaluate
from monkey.tokenizer import tokenize
from monkey.value import Error, Integer

warnings.filterwarnings("ignore")


def eval_py(code: str) -> int | str:
    try:
        res = eval(code)
    except Exception as e:
        return str(e)
    return res if isinstance(res, int) else repr(res)


def eval_my(code: str) -> int | str:
    program, errors = parse_program(tokenize(code))
    if errors:
        return "; ".join(errors)
    res = evaluate(program, new_environment())
    if isinstance(res, Integer):
        return res.v
    elif isinstance(res, Error):
        return res.message
    else:
        return repr(res)


if __name__ == "__main__":
    # no division: python floors while monkey truncates toward zero
    alphabet = string.digits + "()+-* "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"(^|[(+\-*])\s*\+", code):
            continue  # monkey has no unary plus

        if re.findall(r"[\d)]\s+\d", code):
            continue  # separate statements in monkey (1 2)

        if re.findall(r"\(\s*\)", code):
            continue  # empty tuple in python

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, int) and isinstance(res_my, int) and res_py == res_my:
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
