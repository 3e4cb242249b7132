from shuntcalc.parser import ParserError, rpn_to_ast, to_rpn
from shuntcalc.runtime import evaluate
from shuntcalc.tokenizer import Tokenizer, UnexpectedCharacterError, tokenize

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 + -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "80225/+2",
    "7/6/2000",
    "5^2",
    "2^3^2",
    "-2^2",
    "2^-2",
    "1 + 14 * (54^2)",
    "10 / 5/ 2",
    "1 / 0",
    "(-8)^0.5",
    "1.2.3",
    "(1 + 2",
    "1 + 2)",
    "2 3",
    "",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except UnexpectedCharacterError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")

    try:
        rpn = to_rpn(Tokenizer(code))
        print(f"rpn: {' '.join(str(t) for t in rpn)}")
        ast = rpn_to_ast(rpn, code=code)
    except ParserError as e:
        print(e)
        continue
    print(f"ast: {ast}")
    print(f"result: {evaluate(ast)}")
