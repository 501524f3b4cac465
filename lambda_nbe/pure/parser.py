"""Recursive descent parser for pure lambda calculus.

```
term        := application
application := atom atom*                      ; associating by left: a b c d = (((a b) c) d)
atom        := <identifier>
             | "λ" <identifier> "." term       ; abstraction bodies are greedy: λx.x y = λx.(x y) != (λx.x) y
             | "(" term ")"
```

Parsing is all-or-nothing: the first error aborts the parse and no partial tree is returned. The whole token
sequence must be consumed.
"""

from lambda_nbe.lang.error import GenericException
from lambda_nbe.pure.lexer import TokenType, tokenize
from lambda_nbe.pure.term import Abstraction, Application, Variable


class ParseError(GenericException):
    """Superclass of all syntactic errors. token is the offending token (None at end of input)."""

    def __init__(self, msg, token, source):
        self.token = token
        if token is None:
            start, end = len(source), len(source) + 1
        else:
            start, end = token.pos, token.pos + len(token.text)
        super().__init__(msg, (source, token.text if token else ""), start=start, end=end)


class UnexpectedToken(ParseError):
    MSG = "'{}' has unexpected token '{}'"

    def __init__(self, token, source, expected=None):
        self.expected = expected
        msg = self.MSG
        if expected is not None:
            msg += f" (expected '{expected.value}')"
        super().__init__(msg, token, source)


class TrailingInput(UnexpectedToken):
    MSG = "'{}' has trailing input starting at '{}'"

    def __init__(self, token, source):
        super().__init__(token, source)


class UnexpectedEndOfInput(ParseError):
    def __init__(self, source):
        super().__init__("'{}' ended unexpectedly", None, source)


class InvalidExpression(ParseError):
    def __init__(self, token, source):
        super().__init__("'{}' has a λ-term starting with '{}'", token, source)


class Parser:

    def __init__(self, source):
        self.source = source
        self.tokens = tokenize(source)
        self.current = 0

    def parse(self):
        """Returns the LambdaTerm represented by self.source."""
        term = self.term()
        if not self.is_at_end():
            raise TrailingInput(self.peek(), self.source)
        return term

    def term(self):
        return self.application()

    def application(self):
        term = self.atom()
        while not self.is_at_end() and self.peek().type is not TokenType.RIGHT_PAREN:
            term = Application(term, self.atom())
        return term

    def atom(self):
        token = self.advance()
        if token is None:
            raise UnexpectedEndOfInput(self.source)

        if token.type is TokenType.IDENTIFIER:
            return Variable(token.value)
        elif token.type is TokenType.LAMBDA:
            return self.abstraction()
        elif token.type is TokenType.LEFT_PAREN:
            term = self.term()
            self.consume(TokenType.RIGHT_PAREN)
            return term
        raise InvalidExpression(token, self.source)

    def abstraction(self):
        param = self.consume(TokenType.IDENTIFIER)
        self.consume(TokenType.DOT)
        return Abstraction(param.value, self.term())

    def advance(self):
        """Returns the current token and moves past it, or None at end of input."""
        token = self.peek()
        if token is not None:
            self.current += 1
        return token

    def peek(self):
        if self.is_at_end():
            return None
        return self.tokens[self.current]

    def consume(self, expected):
        """Advances past a token of type expected and returns it, raising if the next token is anything else."""
        token = self.peek()
        if token is None:
            raise UnexpectedEndOfInput(self.source)
        if token.type is not expected:
            raise UnexpectedToken(token, self.source, expected)
        return self.advance()

    def is_at_end(self):
        return self.current >= len(self.tokens)


def parse(source):
    return Parser(source).parse()
