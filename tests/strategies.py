"""Shared hypothesis strategies for exprcc property-based testing.

Provides strategies at three levels:

- **Lexer**: digit runs, operator sequences and arbitrary text
- **Expressions**: source strings paired with their expected value,
  computed independently with Python integer arithmetic
- **Token soups**: grammatical expressions without parentheses, for
  checking precedence against the direct evaluator
"""

from __future__ import annotations

from hypothesis import strategies as st

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# ---------------------------------------------------------------------------
# Lexer strategies
# ---------------------------------------------------------------------------

# Digit strings that fit in 64 bits
digit_string = st.integers(min_value=0, max_value=(1 << 64) - 1).map(str) | st.from_regex(
    r"0{1,5}[0-9]{0,10}", fullmatch=True
)

# Digit strings that do not fit in 64 bits
oversized_digit_string = st.integers(min_value=1 << 64, max_value=1 << 80).map(str)

# Any digit run, leading zeros included, up to a few times 64 bits
any_digit_string = st.text(alphabet="0123456789", min_size=1, max_size=80)

operator_symbol = st.sampled_from(["+", "-", "*", "/", "(", ")", "==", "!=", "<", "<=", ">", ">="])

spaces = st.text(alphabet=" ", min_size=1, max_size=3)

# Any mixture of valid lexemes, each preceded by one or more spaces
lexeme_soup = st.lists(
    st.tuples(spaces, operator_symbol | st.integers(0, 10_000).map(str)),
    min_size=0,
    max_size=20,
)

# Arbitrary text that might stress the lexer (fuzz-like)
arbitrary_source = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=0,
    max_size=100,
)

# ---------------------------------------------------------------------------
# Expression strategies
# ---------------------------------------------------------------------------

small_literal = st.integers(min_value=0, max_value=1000)


def _wrap(value: int) -> int:
    value &= (1 << 64) - 1
    return value - (1 << 64) if value >> 63 else value


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


_PY_OPS = {
    "+": lambda a, b: _wrap(a + b),
    "-": lambda a, b: _wrap(a - b),
    "*": lambda a, b: _wrap(a * b),
    "==": lambda a, b: int(a == b),
    "!=": lambda a, b: int(a != b),
    "<": lambda a, b: int(a < b),
    "<=": lambda a, b: int(a <= b),
    ">": lambda a, b: int(a > b),
    ">=": lambda a, b: int(a >= b),
}


@st.composite
def parenthesized_expression(draw, max_leaves: int = 12) -> tuple[str, int]:
    """A fully parenthesized expression and its value.

    Division is generated only with a non-zero divisor that cannot
    overflow, so every expression evaluates without faulting.
    """
    leaves = draw(st.integers(min_value=1, max_value=max_leaves))
    return draw(_expression(leaves))


@st.composite
def _expression(draw, leaves: int) -> tuple[str, int]:
    if leaves == 1:
        value = draw(small_literal)
        if draw(st.booleans()):
            return f"-{value}", -value
        return str(value), value

    left_leaves = draw(st.integers(min_value=1, max_value=leaves - 1))
    left_src, left = draw(_expression(left_leaves))
    right_src, right = draw(_expression(leaves - left_leaves))

    ops = list(_PY_OPS)
    if right != 0 and not (left == INT64_MIN and right == -1):
        ops.append("/")
    op = draw(st.sampled_from(ops))
    value = _trunc_div(left, right) if op == "/" else _PY_OPS[op](left, right)
    return f"({left_src} {op} {right_src})", value


# Flat expressions without parentheses: operand (op operand)*
flat_operator = st.sampled_from(["+", "-", "*", "==", "!=", "<", "<=", ">", ">="])

flat_expression = st.lists(
    st.tuples(flat_operator, small_literal.map(str)),
    min_size=0,
    max_size=10,
).flatmap(
    lambda rest: small_literal.map(
        lambda first: str(first) + "".join(f" {op} {num}" for op, num in rest)
    )
)
