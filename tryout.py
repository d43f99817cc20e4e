from monkey.environment import new_environment
from monkey.parser import parse_program
from monkey.runtime import evaluate
from monkey.tokenizer import tokenize

for code in [
    "5",
    "-1",
    "1 + 1",
    "!-a",
    "5 + 5 * 2 - 10",
    "(5 + 5) * 2",
    "7 / 2; -7 / 2",
    '"foo" == "foo"',
    "5 + true;",
    "let x = 5 * 5; x",
    "let x 5; let y = 2;",
    "(fn(x) { x + 1; })(4)",
    "let counter = 0; let inc = fn() { counter = counter + 1 }; inc(); inc(); counter",
    "let fact = fn(n) { if (n < 2) { return 1; } n * fact(n - 1) }; fact(10)",
    'len("hello") + len(1)',
    "foobar;",
]:
    print("=" * 10)
    print(f"code: {code!r}")

    print(f"tokens: {' '.join(str(t) for t in tokenize(code))}")

    program, errors = parse_program(tokenize(code))
    if errors:
        errors_str = "\n".join(f" {i + 1:> 2}: {err}" for i, err in enumerate(errors))
        print(f"parser errors:\n{errors_str}")
    statements_str = "\n".join(f" {i + 1:> 2}: {stmt}" for i, stmt in enumerate(program.statements))
    print(f"ast:\n{statements_str}")

    env = new_environment()
    result = evaluate(program, env)
    print(f"result: {result.inspect() if result is not None else None}")
    print(f"variables: { {name: value.inspect() for name, value in env.store.items()} }")
