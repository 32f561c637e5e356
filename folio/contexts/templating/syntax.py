"""
Template Syntax

Tokenizer and recursive-descent parser for the template mini-language
embedded in string leaves of a document:

    {{name}}                      variable reference (dotted path)
    {{#each path}} ... {{/each}}  loop over a list
    {{#if expr}} ... {{/if}}      conditional block

Blocks nest. A tag body is any run of characters without braces, so "{{}}"
and "{{ {x} }}" are plain text. Tags that cannot be paired (an opener with
no closer, a closer with no opener) and unknown "#"/"/" tags are kept as
literal text, which lets render_source() reproduce the input exactly.

Examples:
    >>> parse("Hi {{user.name}}!")
    [Text(text='Hi '), Variable(name='user.name', raw='{{user.name}}'), Text(text='!')]
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

TAG_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")
EACH_OPEN_PATTERN = re.compile(r"#each\s+(.+)", re.DOTALL)
IF_OPEN_PATTERN = re.compile(r"#if\s+(.+)", re.DOTALL)

# Token kinds
TEXT = "text"
VARIABLE = "variable"
EACH_OPEN = "each_open"
EACH_CLOSE = "each_close"
IF_OPEN = "if_open"
IF_CLOSE = "if_close"

# Opening kind -> (block kind, expected closing kind)
OPENERS = {
    EACH_OPEN: ("each", EACH_CLOSE),
    IF_OPEN: ("if", IF_CLOSE),
}
CLOSERS = {EACH_CLOSE, IF_CLOSE}


@dataclass(frozen=True)
class Token:
    kind: str
    raw: str
    value: str = ""


@dataclass
class Text:
    text: str


@dataclass
class Variable:
    name: str
    raw: str


@dataclass
class Block:
    """
    A paired {{#each}}/{{#if}} block.

    Attributes:
        kind: "each" or "if"
        argument: List path for "each", condition expression for "if"
        open_raw: Opening tag as written
        close_raw: Closing tag as written
        children: Parsed block body
    """

    kind: str
    argument: str
    open_raw: str
    close_raw: str
    children: List["Node"] = field(default_factory=list)


Node = Union[Text, Variable, Block]


def _classify(raw: str, body: str) -> Token:
    stripped = body.strip()

    match = EACH_OPEN_PATTERN.fullmatch(stripped)
    if match:
        return Token(EACH_OPEN, raw, match.group(1).strip())

    match = IF_OPEN_PATTERN.fullmatch(stripped)
    if match:
        return Token(IF_OPEN, raw, match.group(1).strip())

    if stripped == "/each":
        return Token(EACH_CLOSE, raw)
    if stripped == "/if":
        return Token(IF_CLOSE, raw)

    # Unknown control tags ({{#with x}}, {{/unless}}, {{#if}}) stay literal
    if stripped.startswith(("#", "/")):
        return Token(TEXT, raw)

    return Token(VARIABLE, raw, stripped)


def tokenize(text: str) -> List[Token]:
    """Split text into literal-text and tag tokens."""
    tokens = []
    position = 0

    for match in TAG_PATTERN.finditer(text):
        if match.start() > position:
            tokens.append(Token(TEXT, text[position : match.start()]))
        tokens.append(_classify(match.group(0), match.group(1)))
        position = match.end()

    if position < len(text):
        tokens.append(Token(TEXT, text[position:]))

    return tokens


@dataclass
class _OpenBlock:
    token: Optional[Token]
    kind: str = ""
    closer: Optional[str] = None
    nodes: List["Node"] = field(default_factory=list)


def _unwind(stack: List[_OpenBlock]) -> None:
    """Pop an unterminated block, keeping its opener and body as plain nodes."""
    block = stack.pop()
    stack[-1].nodes.append(Text(block.token.raw))
    stack[-1].nodes.extend(block.nodes)


def _parse_nodes(tokens: List[Token]) -> List[Node]:
    """
    Build the node tree with an explicit stack of open blocks.

    A closer that matches the innermost open block closes it. A closer that
    matches an enclosing block first unwinds every block above that one as
    unterminated. Any other closer is literal text, as are the openers of
    blocks still open when the tokens run out.
    """
    stack = [_OpenBlock(token=None)]

    for token in tokens:
        if token.kind in OPENERS:
            kind, closer = OPENERS[token.kind]
            stack.append(_OpenBlock(token=token, kind=kind, closer=closer))

        elif token.kind in CLOSERS:
            if not any(block.closer == token.kind for block in stack):
                stack[-1].nodes.append(Text(token.raw))
                continue
            while stack[-1].closer != token.kind:
                _unwind(stack)
            block = stack.pop()
            stack[-1].nodes.append(
                Block(block.kind, block.token.value, block.token.raw, token.raw, block.nodes)
            )

        elif token.kind == VARIABLE:
            stack[-1].nodes.append(Variable(token.value, token.raw))

        else:
            stack[-1].nodes.append(Text(token.raw))

    while len(stack) > 1:
        _unwind(stack)

    return stack[0].nodes


def parse(text: str) -> List[Node]:
    """Parse a template string into a node tree."""
    return _parse_nodes(tokenize(text))


def render_source(nodes: List[Node]) -> str:
    """Reproduce the template text a node tree was parsed from."""
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, Variable):
            parts.append(node.raw)
        else:
            parts.append(node.open_raw + render_source(node.children) + node.close_raw)
    return "".join(parts)


def iter_variables(nodes: List[Node]):
    """Yield every Variable node, descending into blocks, in source order."""
    for node in nodes:
        if isinstance(node, Variable):
            yield node
        elif isinstance(node, Block):
            yield from iter_variables(node.children)
