"""
Condition expressions for {{#if ...}} blocks.

Grammar:

    condition := "!" path
               | path
               | path ("===" | "!==") literal
    literal   := 'text' | "text" | word

Paths are dotted variable paths. Comparison is strict: only a string value
equal to the literal matches, so `count === '3'` is false when count is the
number 3. Anything outside the grammar makes the condition false.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from folio.contexts.templating.document import is_truthy, lookup_path
from folio.contexts.templating.exceptions import ConditionSyntaxError
from folio.contexts.templating.logger import _log_debug

TOKEN_PATTERN = re.compile(
    r"""\s*(?:
        (?P<operator>===|!==)
      | (?P<negate>!)
      | (?P<string>'[^']*'|"[^"]*")
      | (?P<word>[\w$.\-]+)
    )""",
    re.VERBOSE,
)
PATH_PATTERN = re.compile(r"[\w$\-]+(?:\.[\w$\-]+)*")


@dataclass(frozen=True)
class Condition:
    path: str
    negate: bool = False
    operator: Optional[str] = None
    literal: Optional[str] = None

    def evaluate(self, variables: Any) -> bool:
        value = lookup_path(variables, self.path)

        if self.operator is not None:
            matches = isinstance(value, str) and value == self.literal
            return matches if self.operator == "===" else not matches

        return not is_truthy(value) if self.negate else is_truthy(value)


def tokenize_condition(expression: str) -> List[Tuple[str, str, int]]:
    """Split an expression into (kind, text, offset) tokens."""
    tokens = []
    position = 0
    end = len(expression.rstrip())

    while position < end:
        match = TOKEN_PATTERN.match(expression, position)
        if not match or match.end() == position:
            raise ConditionSyntaxError("Unexpected character", expression, position)
        kind = match.lastgroup
        tokens.append((kind, match.group(kind), match.start(kind)))
        position = match.end()

    return tokens


class _ConditionParser:
    def __init__(self, expression: str):
        self.expression = expression
        self.tokens = tokenize_condition(expression)
        self.index = 0

    def _peek(self) -> Optional[Tuple[str, str, int]]:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def _take(self, *kinds: str) -> Tuple[str, str, int]:
        token = self._peek()
        if token is None or token[0] not in kinds:
            position = token[2] if token else len(self.expression)
            raise ConditionSyntaxError(f"Expected {' or '.join(kinds)}", self.expression, position)
        self.index += 1
        return token

    def _path(self) -> str:
        _, text, position = self._take("word")
        if not PATH_PATTERN.fullmatch(text):
            raise ConditionSyntaxError(f"Invalid variable path '{text}'", self.expression, position)
        return text

    def _literal(self) -> str:
        kind, text, _ = self._take("string", "word")
        return text[1:-1] if kind == "string" else text

    def parse(self) -> Condition:
        if not self.tokens:
            raise ConditionSyntaxError("Empty condition", self.expression)

        token = self._peek()
        if token[0] == "negate":
            self.index += 1
            condition = Condition(path=self._path(), negate=True)
        else:
            path = self._path()
            if self._peek() is not None and self._peek()[0] == "operator":
                operator = self._take("operator")[1]
                condition = Condition(path=path, operator=operator, literal=self._literal())
            else:
                condition = Condition(path=path)

        trailing = self._peek()
        if trailing is not None:
            raise ConditionSyntaxError("Unexpected trailing input", self.expression, trailing[2])

        return condition


def parse_condition(expression: str) -> Condition:
    """
    Parse an {{#if}} expression.

    Raises:
        ConditionSyntaxError: If the expression is outside the grammar
    """
    return _ConditionParser(expression).parse()


def evaluate_condition(expression: str, variables: Any) -> bool:
    """Evaluate an {{#if}} expression; unparseable expressions are false."""
    try:
        condition = parse_condition(expression)
    except ConditionSyntaxError as e:
        _log_debug(f"Treating condition as false: {e}")
        return False
    return condition.evaluate(variables)
