from dataclasses import dataclass
from enum import Enum
from typing import List

KEYWORDS = {
    "CREATE", "DATABASE", "USE", "SHOW", "DATABASES", "DROP", "INSERT", "INTO",
    "VALUES", "SELECT", "FROM", "WHERE", "UPDATE", "SET", "DELETE",
}

PUNCTUATION = {"(", ")", ",", "="}

QUOTE = "'"


class TokenType(Enum):
    KEYWORD = "KEYWORD"
    INTEGER = "INTEGER"
    STRING = "STRING"
    PUNCTUATION = "PUNCTUATION"
    IDENTIFIER = "IDENTIFIER"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str

    def __str__(self):
        if self.type == TokenType.STRING:
            return f"'{self.value}'"
        return self.value


def classify_word(word: str) -> Token:
    if word in KEYWORDS:
        return Token(TokenType.KEYWORD, word)
    # str.isdigit() also accepts non-ASCII digits
    if word.isascii() and word.isdigit():
        return Token(TokenType.INTEGER, word)
    return Token(TokenType.IDENTIFIER, word)


def tokenize(line: str) -> List[Token]:
    """Split one command line into tokens.

    Text between two quotes is a STRING token taken verbatim. An unterminated
    quote is not an error: its characters end up in a plain word.
    """
    tokens: List[Token] = []
    buf: List[str] = []
    in_string = False

    def flush():
        if buf:
            tokens.append(classify_word("".join(buf)))
            buf.clear()

    for ch in line:
        if ch == QUOTE:
            if in_string:
                tokens.append(Token(TokenType.STRING, "".join(buf)))
                buf.clear()
                in_string = False
            else:
                flush()
                in_string = True
        elif in_string:
            buf.append(ch)
        elif ch.isspace():
            flush()
        elif ch in PUNCTUATION:
            flush()
            tokens.append(Token(TokenType.PUNCTUATION, ch))
        else:
            buf.append(ch)
    flush()
    return tokens
