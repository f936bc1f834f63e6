"""Parser for curried-calc expressions and ``let`` definitions.

Precedence has exactly two tiers. Distributive operators (``* / ^ &`` and
implicit juxtaposition such as ``2x`` or ``2(x+1)``) chain to the left over
single factors. Non-distributive operators (``+ > < | =``) close the left side
and take the whole remaining expression as their right operand. ``a-b`` is
read as ``a + (-b)``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .ast import BinaryOp, Call, Conditional, Expr, Literal, Symbol
from .config import KEYWORD_ELSE, KEYWORD_LET, KEYWORD_THEN, is_reserved
from .errors import (
    DuplicateParameterError,
    EmptyArgumentError,
    IncompleteExpressionError,
    InvalidCharacterError,
    MismatchedConditionalError,
    MissingBodyError,
    NestingTooDeepError,
    ReservedNameError,
    UnmatchedParenthesisError,
)
from .function import Function
from .lexer import Token, tokenize
from .operators import Operator

logger = logging.getLogger(__name__)


@dataclass
class _Parser:
    tokens: list[Token]
    index: int = 0
    # Number of enclosing ``if`` rules still waiting for their ``else``.
    depth: int = 0

    def parse_expression_only(self) -> Expr:
        if self._peek().kind == "EOF":
            self._error(self._peek())
        expr = self._parse_expression()
        tok = self._peek()
        if tok.kind != "EOF":
            self._error(tok)
        return expr

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _previous(self) -> Token | None:
        return self.tokens[self.index - 1] if self.index > 0 else None

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _is_trailing_keyword(self, tok: Token, word: str) -> bool:
        # A keyword that ends the input has no trailing space and lexes as a NAME.
        return tok.kind == "NAME" and tok.text == word and self.tokens[self.index + 1].kind == "EOF"

    def _error(self, tok: Token) -> None:
        if tok.kind == "EOF":
            raise IncompleteExpressionError(tok.pos)
        if tok.kind == "RPAREN":
            raise UnmatchedParenthesisError(tok.pos)
        if tok.kind in {"THEN", "ELSE"} or (tok.kind == "NAME" and tok.text in {KEYWORD_THEN, KEYWORD_ELSE}):
            if self.depth == 0:
                raise MismatchedConditionalError(f"{tok.text!r} without matching 'if'", tok.pos)
            raise MismatchedConditionalError(f"Unexpected {tok.text!r} in conditional", tok.pos)
        raise InvalidCharacterError(tok.text[0], tok.pos)

    def _is_juxtaposed(self, tok: Token) -> bool:
        if tok.kind == "LPAREN":
            return True
        prev = self._previous()
        return tok.kind == "NAME" and prev is not None and prev.kind == "NUMBER" and prev.end == tok.pos

    def _parse_expression(self) -> Expr:
        # Operands waiting for the right-hand side of a non-distributive operator.
        pending: list[tuple[Expr, Operator]] = []
        left = self._parse_term()

        while True:
            tok = self._peek()
            if tok.kind == "MINUS":
                self._advance()
                left = BinaryOp(left, Operator.PLUS, self._parse_negated_term())
                continue

            if tok.kind == "OP" and not Operator(tok.text).distributive:
                self._advance()
                pending.append((left, Operator(tok.text)))
                left = self._parse_term()
                continue

            break

        for operand, op in reversed(pending):
            left = BinaryOp(operand, op, left)
        return left

    def _parse_term(self) -> Expr:
        left = self._parse_factor()

        while True:
            tok = self._peek()
            if tok.kind == "OP" and Operator(tok.text).distributive:
                self._advance()
                left = BinaryOp(left, Operator(tok.text), self._parse_factor())
                continue

            if self._is_juxtaposed(tok):
                left = BinaryOp(left, Operator.TIMES, self._parse_factor())
                continue

            return left

    def _parse_negated_term(self) -> Expr:
        term = self._parse_term()
        return replace(term, negate=True)

    def _parse_factor(self) -> Expr:
        tok = self._peek()

        if tok.kind == "NUMBER":
            self._advance()
            return Literal(int(tok.text))

        if tok.kind == "NAME":
            self._advance()
            if is_reserved(tok.text):
                raise ReservedNameError(tok.text, tok.pos)
            nxt = self._peek()
            if nxt.kind == "LPAREN" and nxt.pos == tok.end:
                return self._parse_call(tok)
            return Symbol(tok.text)

        if tok.kind == "LPAREN":
            self._advance()
            if self._peek().kind == "RPAREN":
                raise IncompleteExpressionError(self._peek().pos)
            expr = self._parse_expression()
            close = self._peek()
            if close.kind == "RPAREN":
                self._advance()
                return expr
            if close.kind == "EOF":
                raise UnmatchedParenthesisError(tok.pos)
            self._error(close)

        if tok.kind == "MINUS":
            self._advance()
            return self._parse_negated_term()

        if tok.kind == "IF":
            return self._parse_conditional()

        self._error(tok)
        raise AssertionError("unreachable")

    def _parse_conditional(self) -> Conditional:
        if_tok = self._advance()
        self.depth += 1

        predicate = self._parse_expression()
        then_tok = self._peek()
        if then_tok.kind != "THEN":
            if then_tok.kind in {"EOF", "ELSE"}:
                raise MismatchedConditionalError("Mismatched if-then statement", if_tok.pos)
            if self._is_trailing_keyword(then_tok, KEYWORD_THEN):
                raise MismatchedConditionalError("Mismatched then-else statement", then_tok.pos)
            self._error(then_tok)
        self._advance()

        when_true = self._parse_expression()
        else_tok = self._peek()
        if else_tok.kind != "ELSE":
            if else_tok.kind == "EOF":
                raise MismatchedConditionalError("Mismatched then-else statement", then_tok.pos)
            if self._is_trailing_keyword(else_tok, KEYWORD_ELSE):
                raise MismatchedConditionalError("Missing else expression", else_tok.pos)
            self._error(else_tok)
        self._advance()

        if self._peek().kind == "EOF":
            raise MismatchedConditionalError("Missing else expression", else_tok.pos)
        when_false = self._parse_expression()

        self.depth -= 1
        return Conditional(predicate, when_true, when_false)

    def _parse_call(self, name_tok: Token) -> Call:
        open_tok = self._advance()
        args: list[Expr] = []

        if self._peek().kind == "RPAREN":
            self._advance()
            return Call(name_tok.text, ())

        while True:
            tok = self._peek()
            if tok.kind in {"COMMA", "RPAREN"}:
                raise EmptyArgumentError(tok.pos)
            if tok.kind == "EOF":
                raise UnmatchedParenthesisError(open_tok.pos)
            args.append(self._parse_expression())

            tok = self._advance()
            if tok.kind == "COMMA":
                continue
            if tok.kind == "RPAREN":
                return Call(name_tok.text, tuple(args))
            if tok.kind == "EOF":
                raise UnmatchedParenthesisError(open_tok.pos)
            self._error(tok)


def parse(source: str, start: int = 0) -> Expr:
    """Parse ``source[start:]``; error indexes refer to ``source``."""
    tokens = tokenize(source, start)
    logger.debug("tokens: %s", tokens)
    parser = _Parser(tokens=tokens)
    try:
        expr = parser.parse_expression_only()
    except RecursionError as exc:
        # Groups, conditionals and unary minus still nest through Python frames.
        raise NestingTooDeepError(parser._peek().pos) from exc
    logger.debug("ast: %s", expr)
    return expr


def parse_expression(source: str) -> Expr:
    return parse(source)


def _skip_space(source: str, i: int) -> int:
    while i < len(source) and source[i].isspace():
        i += 1
    return i


def _scan_word(source: str, start: int, predicate) -> tuple[str, int]:
    i = start
    while i < len(source) and predicate(source[i]):
        i += 1
    if i < len(source) and not (source[i].isspace() or source[i] == "="):
        raise InvalidCharacterError(source[i], i)
    return source[start:i], i


def parse_function_definition(source: str, context: Mapping[str, object] | None = None) -> Function:
    """Parse ``let <name> <params...> = <body>`` into a validated Function.

    ``context`` is accepted for symmetry with the evaluation entry points;
    a definition never closes over it, so every symbol in the body must be
    one of the declared parameters.
    """
    i = _skip_space(source, 0)
    for expected in KEYWORD_LET:
        if i >= len(source):
            raise IncompleteExpressionError(i)
        if source[i].lower() != expected:
            raise InvalidCharacterError(source[i], i)
        i += 1
    if i >= len(source):
        raise MissingBodyError(i)
    if not source[i].isspace():
        raise InvalidCharacterError(source[i], i)

    i = _skip_space(source, i)
    if i >= len(source):
        raise MissingBodyError(i)
    if not source[i].isalpha():
        raise InvalidCharacterError(source[i], i)
    name_pos = i
    # Names are letter runs like NAME tokens, so a defined function is always callable.
    name, i = _scan_word(source, i, str.isalpha)
    if is_reserved(name):
        raise ReservedNameError(name, name_pos)

    parameters: list[str] = []
    while True:
        i = _skip_space(source, i)
        if i >= len(source):
            raise MissingBodyError(i)
        ch = source[i]
        if ch == "=":
            i += 1
            break
        if not ch.isalpha():
            raise InvalidCharacterError(ch, i)
        param_pos = i
        param, i = _scan_word(source, i, str.isalpha)
        if is_reserved(param):
            raise ReservedNameError(param, param_pos)
        if param in parameters:
            raise DuplicateParameterError(param, param_pos)
        parameters.append(param)

    if not source[i:].strip():
        raise MissingBodyError(i)
    body = parse(source, i)
    function = Function(name=name, parameters=tuple(parameters), body=body).validate()
    logger.debug("parsed definition %s", function)
    return function
