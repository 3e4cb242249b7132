import math
import random
import re
import warnings

from shuntcalc.runtime import evaluate_expression

warnings.filterwarnings("ignore")


def eval_py(code: str) -> float | str:
    try:
        return eval(code)
    except Exception as e:
        return str(e)


def eval_my(code: str) -> float | str:
    try:
        return evaluate_expression(code)
    except Exception as e:
        return str(e)


if __name__ == "__main__":
    alphabet = "0123456789.()+-*/ "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"/\s*/", code):
            continue  # avoid generating int devision (10 // 3)

        if re.findall(r"(^|[^\d.])\.", code):
            continue  # python accepts .5, we don't

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, (int, float)) and isinstance(res_my, float) and math.isclose(res_my, res_py):
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        if res_py in ("division by zero", "float division by zero") and isinstance(res_my, float):
            continue  # we follow IEEE-754 and return inf/nan
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
