from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .exceptions import SchemaMismatch, SyntaxErrorRDB, UnknownCommand
from .lexer import Token, TokenType, tokenize
from .types import ColumnType, Schema, DEFAULT_SCHEMA, INT32_MAX, Value

# the grammar has no table names; this literal stands where one would go
TABLE_WORD = "table"


@dataclass
class CreateDatabase:
    name: str


@dataclass
class UseDatabase:
    name: str


@dataclass
class ShowDatabases:
    pass


@dataclass
class DropDatabase:
    name: str


@dataclass
class Insert:
    values: Tuple[Value, ...]


@dataclass
class Select:
    id: int


@dataclass
class SelectAll:
    pass


@dataclass
class Update:
    id: int
    column: int
    value: str


@dataclass
class Delete:
    id: int


Command = Union[CreateDatabase, UseDatabase, ShowDatabases, DropDatabase, Insert, Select, SelectAll, Update, Delete]

# commands that act on the current store
ROW_COMMANDS = (Insert, Select, SelectAll, Update, Delete)


@dataclass(frozen=True)
class Expect:
    """One grammar position: a token kind, optionally an exact value, and
    optionally a name under which the matched token is captured."""

    type: TokenType
    value: Optional[str] = None
    capture: Optional[str] = None

    def describe(self) -> str:
        if self.value is not None:
            return f"{self.type.value} '{self.value}'"
        return self.type.value

    def matches(self, token: Token) -> bool:
        return token.type == self.type and (self.value is None or token.value == self.value)


def kw(value: str) -> Expect:
    return Expect(TokenType.KEYWORD, value)


def punct(value: str) -> Expect:
    return Expect(TokenType.PUNCTUATION, value)


def word(value: str) -> Expect:
    return Expect(TokenType.IDENTIFIER, value)


def name(capture: str) -> Expect:
    return Expect(TokenType.IDENTIFIER, capture=capture)


def integer(capture: str) -> Expect:
    return Expect(TokenType.INTEGER, capture=capture)


def string(capture: str) -> Expect:
    return Expect(TokenType.STRING, capture=capture)


Captures = Dict[str, Token]


@dataclass(frozen=True)
class Production:
    pattern: Tuple[Expect, ...]
    build: Callable[[Captures], Command]


def match(pattern: Sequence[Expect], tokens: Sequence[Token]) -> Captures:
    """Consume `tokens` left to right against `pattern`; every token must be used."""
    captures: Captures = {}
    for pos, expect in enumerate(pattern):
        if pos >= len(tokens):
            raise SyntaxErrorRDB(f"expected {expect.describe()}, got end of input", pos)
        token = tokens[pos]
        if not expect.matches(token):
            raise SyntaxErrorRDB(f"expected {expect.describe()}, got {token.type.value} {token}", pos)
        if expect.capture:
            captures[expect.capture] = token
    if len(tokens) > len(pattern):
        pos = len(pattern)
        raise SyntaxErrorRDB(f"unexpected trailing token {tokens[pos]}", pos)
    return captures


def _slot(column_type: ColumnType, capture: str) -> Expect:
    if column_type == ColumnType.INTEGER:
        return integer(capture)
    return string(capture)


MAX_DIGITS = len(str(INT32_MAX))


def _int(token: Token) -> int:
    # longer than any i32 once leading zeros are dropped
    if len(token.value.lstrip("0")) > MAX_DIGITS:
        raise SchemaMismatch(f"Value {token.value[:MAX_DIGITS]}... is out of INTEGER range")
    return int(token.value)


def _value(token: Token) -> Value:
    if token.type == TokenType.INTEGER:
        return _int(token)
    return token.value


class Parser:
    """Turns a command line into a typed command.

    Each leading keyword maps to one or more productions. The INSERT and
    UPDATE/WHERE productions are derived from `schema`: column 0 is the key
    named in WHERE clauses, column 1 is the column UPDATE may change.
    """

    def __init__(self, schema: Schema = DEFAULT_SCHEMA):
        self.schema = schema
        self.grammar: Dict[str, List[Production]] = self._build_grammar()

    def _build_grammar(self) -> Dict[str, List[Production]]:
        key = self.schema[0].name
        where_id = (kw("WHERE"), word(key), punct("="), integer("id"))

        insert_slots: List[Expect] = []
        for i, col in enumerate(self.schema):
            if i:
                insert_slots.append(punct(","))
            insert_slots.append(_slot(col.type, f"v{i}"))
        columns = len(self.schema)

        grammar = {
            "CREATE": [Production(
                (kw("CREATE"), kw("DATABASE"), name("name")),
                lambda c: CreateDatabase(c["name"].value))],
            "USE": [Production(
                (kw("USE"), name("name")),
                lambda c: UseDatabase(c["name"].value))],
            "SHOW": [Production(
                (kw("SHOW"), kw("DATABASES")),
                lambda c: ShowDatabases())],
            "DROP": [Production(
                (kw("DROP"), kw("DATABASE"), name("name")),
                lambda c: DropDatabase(c["name"].value))],
            "INSERT": [Production(
                (kw("INSERT"), kw("INTO"), word(TABLE_WORD), kw("VALUES"), punct("("),
                 *insert_slots, punct(")")),
                lambda c: Insert(tuple(_value(c[f"v{i}"]) for i in range(columns))))],
            "SELECT": [
                Production(
                    (kw("SELECT"), word("*"), kw("FROM"), word(TABLE_WORD)),
                    lambda c: SelectAll()),
                Production(
                    (kw("SELECT"), word("*"), kw("FROM"), word(TABLE_WORD), *where_id),
                    lambda c: Select(_int(c["id"]))),
            ],
            "DELETE": [Production(
                (kw("DELETE"), kw("FROM"), word(TABLE_WORD), *where_id),
                lambda c: Delete(_int(c["id"])))],
        }
        if len(self.schema) > 1 and self.schema[1].type == ColumnType.TEXT:
            grammar["UPDATE"] = [Production(
                (kw("UPDATE"), word(TABLE_WORD), kw("SET"), word(self.schema[1].name), punct("="),
                 string("value"), *where_id),
                lambda c: Update(_int(c["id"]), 1, c["value"].value))]
        return grammar

    def parse(self, line: str) -> Optional[Command]:
        tokens = tokenize(line)
        if not tokens:
            return None
        return self.parse_tokens(tokens)

    def parse_tokens(self, tokens: Sequence[Token]) -> Command:
        head = tokens[0]
        productions = self.grammar.get(head.value) if head.type == TokenType.KEYWORD else None
        if not productions:
            raise UnknownCommand(f"Unknown command: {head.value}")
        errors = []
        for production in productions:
            try:
                captures = match(production.pattern, tokens)
            except SyntaxErrorRDB as e:
                errors.append(e)
                continue
            return production.build(captures)
        # report the production that got furthest
        raise max(errors, key=lambda e: e.position)
