"""Pure lambda calculus scanner and parser.

Formally, the accepted grammar is

```
<expr>   ::= <single>                    ; a lone atom
           | <single> <single>           ; application of exactly two atoms (*)
<single> ::= <name>                      ; must be bound by an enclosing abstraction
           | "(" <expr> ")"
           | "λ" <name> "." <expr>       ; abstraction bodies are greedy: λx.x y = λx.(x y)
```

Variables are resolved while parsing: a name becomes the index of its nearest binder in the context, so the produced
tree is nameless apart from the hints kept on abstractions.

(*) Each <expr> groups at most two atoms. `a b c` is not an expression: after `a b` the parser expects ")" or the end
of input. Longer applications must be spelled out with parentheses, e.g. `((a b) c)`.
"""

import re
from collections import deque

from untyped.lang.error import ExpectedIdentifier, ExpectedToken, UndefinedVariable, UnexpectedToken
from untyped.pure.term import Abstraction, Application, Variable


class Builtin:
    """Built-in lambda calculus tokens: 'λ', '.', '(', ')'"""
    LAMBDA = "λ"
    PERIOD = "."
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    TOKENS = [LAMBDA, PERIOD, OPEN_PAREN, CLOSE_PAREN]

    EOF = "EOF"  # stands in for the missing token in error messages


# a builtin on its own, or a run of anything that is neither a builtin nor ASCII whitespace
TOKEN_RE = re.compile(r"[()λ.]|[^()λ.\t\n\f\r ]+")


def scan(source):
    """Splits source into tokens. Never fails: validating identifiers is left to the parser."""
    return TOKEN_RE.findall(source)


def expect(token, tokens):
    """Consumes token from the front of tokens, returns the rest."""
    if not tokens:
        raise ExpectedToken(token, Builtin.EOF)
    head = tokens.popleft()
    if head != token:
        raise ExpectedToken(token, head)
    return tokens


def parse_abstraction(context, tokens):
    """Parses `<name> . <expr>`, the leading λ having been consumed already."""
    if not tokens:
        raise ExpectedIdentifier(Builtin.EOF)
    name = tokens.popleft()
    tokens = expect(Builtin.PERIOD, tokens)
    body, tokens = parse_expr((name,) + context, tokens)
    return Abstraction(name, body), tokens


def parse_paren_expr(context, tokens):
    """Parses `<expr> )`, the opening parenthesis having been consumed already."""
    term, tokens = parse_expr(context, tokens)
    return term, expect(Builtin.CLOSE_PAREN, tokens)


def parse_single(context, tokens):
    """Parses one atom off the front of the deque tokens. Returns (term, remaining tokens)."""
    if not tokens:
        raise UnexpectedToken(Builtin.EOF)
    token = tokens.popleft()

    if token in (Builtin.CLOSE_PAREN, Builtin.PERIOD):
        raise UnexpectedToken(token)
    elif token == Builtin.OPEN_PAREN:
        return parse_paren_expr(context, tokens)
    elif token == Builtin.LAMBDA:
        return parse_abstraction(context, tokens)

    try:
        return Variable(context.index(token)), tokens
    except ValueError:
        raise UndefinedVariable(token) from None


def parse_expr(context, tokens):
    """Parses an atom, or an application of two atoms. Returns (term, remaining tokens)."""
    first, tokens = parse_single(context, tokens)
    if not tokens or tokens[0] == Builtin.CLOSE_PAREN:
        return first, tokens

    second, tokens = parse_single(context, tokens)
    return Application(first, second), tokens


def parse(source, context=()):
    """Parses all of source into a LambdaTerm. context names the free variables source may use, innermost first."""
    term, tokens = parse_expr(tuple(context), deque(scan(source)))
    if tokens:
        raise ExpectedToken(Builtin.EOF, tokens[0])
    return term
