"""Pure lambda calculus token generator.

Tokens are the only thing the parser ever sees:

```
<lambda>      ::= "\\" | "λ"          ; both spellings denote abstraction
<period>      ::= "."
<open_paren>  ::= "("
<close_paren> ::= ")"
<identifier>  ::= <alpha>+            ; maximal run, no digits/underscores/hyphens
```

Whitespace separates tokens but never produces one. The lexer is a single forward pass with one character of
lookahead and never backtracks.
"""

from dataclasses import dataclass, field
from enum import Enum

from lambda_nbe.lang.error import GenericException


class TokenType(Enum):
    LAMBDA = "λ"
    DOT = "."
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    IDENTIFIER = "<identifier>"


@dataclass(frozen=True)
class Token:
    """A single token. pos is the offset of the token's first character in the source and is ignored by ==."""
    type: TokenType
    value: str = None
    pos: int = field(default=0, compare=False)

    @property
    def text(self):
        return self.value if self.type is TokenType.IDENTIFIER else self.type.value

    def __repr__(self):
        if self.type is TokenType.IDENTIFIER:
            return f"Identifier({self.value!r})"
        return f"Token('{self.type.value}')"


class UnexpectedCharacter(GenericException):
    """Raised when a character starts no token."""

    def __init__(self, char, pos, source):
        self.char = char
        self.pos = pos
        super().__init__("'{}' contains unexpected character '{}'", (source, char), start=pos, end=pos + 1)


class Lexer:
    LAMBDAS = ("\\", "λ")
    BUILTINS = {
        ".": TokenType.DOT,
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
    }

    def __init__(self, source):
        self.source = source
        self.pos = 0

    @staticmethod
    def is_identifier_char(char):
        # "λ".isalpha() is True, so it has to be excluded explicitly
        return char.isalpha() and char not in Lexer.LAMBDAS

    def peek(self):
        """Returns the current character, or None at end of input."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def tokenize(self):
        """Returns the list of tokens in self.source. Raises UnexpectedCharacter on the first unknown character."""
        tokens = []
        char = self.peek()

        while char is not None:
            if char.isspace():
                self.pos += 1
            elif char in Lexer.LAMBDAS:
                tokens.append(Token(TokenType.LAMBDA, pos=self.pos))
                self.pos += 1
            elif char in Lexer.BUILTINS:
                tokens.append(Token(Lexer.BUILTINS[char], pos=self.pos))
                self.pos += 1
            elif Lexer.is_identifier_char(char):
                tokens.append(self.identifier())
            else:
                raise UnexpectedCharacter(char, self.pos, self.source)

            char = self.peek()

        return tokens

    def identifier(self):
        start = self.pos
        while self.peek() is not None and Lexer.is_identifier_char(self.peek()):
            self.pos += 1
        return Token(TokenType.IDENTIFIER, self.source[start:self.pos], start)


def tokenize(source):
    return Lexer(source).tokenize()
