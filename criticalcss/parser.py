import logging
from typing import List, NotRequired, Optional, TypedDict
from criticalcss.document import CssDocument
from criticalcss.errors import ParseException
from criticalcss.lexer import CssLexer, LexerConfig, Token, TokenType
from criticalcss.logger import Logger
from criticalcss.nodes import (
    Comment,
    ContainerAtRule,
    Declaration,
    DeclarationAtRule,
    Item,
    RuleSet,
    TerminalAtRule,
)
from criticalcss.utils import resolve_config

# at-rules whose block is a declaration list rather than a rule list
DECLARATION_AT_RULES = {
    "font-face",
    "page",
    "counter-style",
    "property",
    "viewport",
    "font-palette-values",
}

OPENERS = {TokenType.OPEN_PAREN: TokenType.CLOSE_PAREN, TokenType.OPEN_BRACKET: TokenType.CLOSE_BRACKET}
CLOSERS = {TokenType.CLOSE_PAREN, TokenType.CLOSE_BRACKET}


class ParserConfig(TypedDict):
    parse: NotRequired[bool]
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]


class ParserConfigRequired(TypedDict):
    parse: bool
    enable_logger: bool
    log_level: int


DEFAULT_CONFIG: ParserConfigRequired = {"parse": True, "enable_logger": True, "log_level": logging.INFO}


class CssParser:
    def __init__(self, tokens: List[Token], config: Optional[ParserConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(
            config={"name": "Parser Logger", "is_enabled": self.config["enable_logger"], "level": self.config["log_level"]}
        ).logger
        self.logger.info("Parser initialized")
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ParseException("Token stream must end with EOF")
        self.tokens = tokens
        self.position = 0
        self.document: CssDocument | None = None
        if self.config["parse"]:
            self.document = self.parse_tokens()

    @property
    def current_token(self) -> Token:
        return self.tokens[self.position]

    def lookahead(self, distance: int = 1) -> Token:
        if 0 <= self.position + distance < len(self.tokens):
            return self.tokens[self.position + distance]
        return self.tokens[-1]

    def advance(self, steps: int = 1) -> None:
        self.position = min(self.position + steps, len(self.tokens) - 1)

    def expect(self, expected_type: TokenType | List[TokenType]) -> None:
        if not isinstance(expected_type, list):
            expected_type = [expected_type]
        if self.current_token.type not in expected_type:
            raise ParseException(
                f"Expected {' or '.join(t.name for t in expected_type)}, but got {self.current_token.type.name}",
                self.current_token,
            )

    def consume(self, expected_type: TokenType | List[TokenType]) -> Token:
        current_token = self.current_token
        self.expect(expected_type)
        self.advance()
        return current_token

    def parse_tokens(self) -> CssDocument:
        try:
            document = CssDocument(items=self._parse_items(top_level=True))
            self.expect(TokenType.EOF)
        except ParseException as e:
            self.logger.error(e)
            raise
        self.logger.info(f"Parsed {len(document)} top-level items")
        return document

    # Items -------------------------------------------------------------------
    def _parse_items(self, top_level: bool) -> list[Item]:
        items: list[Item] = []
        comments: list[Comment] = []
        while True:
            token = self.current_token
            match token.type:
                case TokenType.WHITESPACE:
                    self.advance()
                case TokenType.COMMENT:
                    comments.append(Comment(text=token.value))
                    self.advance()
                case TokenType.EOF:
                    if not top_level:
                        raise ParseException("Unterminated block", token)
                    return items
                case TokenType.CLOSE_BRACE:
                    if top_level:
                        raise ParseException("Unexpected '}'", token)
                    return items
                case TokenType.SEMICOLON:
                    raise ParseException("Unexpected ';'", token)
                case TokenType.AT_KEYWORD:
                    items.append(self._parse_at_rule(comments))
                    comments = []
                case _:
                    items.append(self._parse_rule_set(comments))
                    comments = []

    def _parse_at_rule(self, comments: list[Comment]) -> Item:
        keyword = self.consume(TokenType.AT_KEYWORD)
        prelude = self._collect_prelude({TokenType.SEMICOLON, TokenType.OPEN_BRACE})
        comments = comments + self._extract_comments(prelude)
        prelude_text = self._join_tokens(prelude)
        if self.consume([TokenType.SEMICOLON, TokenType.OPEN_BRACE]).type == TokenType.SEMICOLON:
            self.logger.debug(f"Parsed terminal at-rule @{keyword.value}")
            return TerminalAtRule(name=keyword.value, prelude=prelude_text, comments=comments)

        if keyword.value.lower() in DECLARATION_AT_RULES:
            declarations, orphans = self._parse_declaration_block()
            self.logger.debug(f"Parsed declaration at-rule @{keyword.value}")
            return DeclarationAtRule(
                name=keyword.value,
                prelude=prelude_text,
                declarations=declarations,
                comments=comments + orphans,
            )

        items = self._parse_items(top_level=False)
        self.consume(TokenType.CLOSE_BRACE)
        self.logger.debug(f"Parsed container at-rule @{keyword.value} with {len(items)} items")
        return ContainerAtRule(name=keyword.value, prelude=prelude_text, items=items, comments=comments)

    def _parse_rule_set(self, comments: list[Comment]) -> RuleSet:
        start = self.current_token
        prelude = self._collect_prelude({TokenType.OPEN_BRACE})
        comments = comments + self._extract_comments(prelude)
        selectors = self._split_selectors(prelude, start)
        self.consume(TokenType.OPEN_BRACE)
        declarations, orphans = self._parse_declaration_block()
        self.logger.debug(f"Parsed rule set {selectors}")
        return RuleSet(selectors=selectors, declarations=declarations, comments=comments + orphans)

    # Declarations ------------------------------------------------------------
    def _parse_declaration_block(self) -> tuple[list[Declaration], list[Comment]]:
        """Parse declarations up to and including the closing brace.

        Returns the declarations and any comments that could not be attached to
        one because the block has no declarations.
        """
        declarations: list[Declaration] = []
        pending: list[Comment] = []
        while True:
            token = self.current_token
            match token.type:
                case TokenType.WHITESPACE | TokenType.SEMICOLON:
                    self.advance()
                case TokenType.COMMENT:
                    pending.append(Comment(text=token.value))
                    self.advance()
                case TokenType.CLOSE_BRACE:
                    self.advance()
                    break
                case TokenType.EOF:
                    raise ParseException("Unterminated declaration block", token)
                case TokenType.OPEN_BRACE:
                    raise ParseException("Nested rules are not supported", token)
                case _:
                    declarations.append(self._parse_declaration(pending))
                    pending = []

        if pending and declarations:
            last = declarations[-1]
            declarations[-1] = last.model_copy(update={"comments": last.comments + pending})
            pending = []
        return declarations, pending

    def _parse_declaration(self, comments: list[Comment]) -> Declaration:
        start = self.current_token
        name_parts: list[str] = []
        while self.current_token.type != TokenType.COLON:
            token = self.current_token
            if token.type == TokenType.COMMENT:
                comments = comments + [Comment(text=token.value)]
            elif token.type == TokenType.TEXT:
                if name_parts:
                    raise ParseException("Invalid property name", token)
                name_parts.append(token.value)
            elif token.type != TokenType.WHITESPACE:
                raise ParseException("Expected ':' after property name", token)
            self.advance()
        name = "".join(name_parts)
        if not name:
            raise ParseException("Missing property name", start)
        colon = self.consume(TokenType.COLON)

        value_tokens = self._collect_prelude({TokenType.SEMICOLON, TokenType.CLOSE_BRACE}, nested_error=True)
        value = self._join_tokens(value_tokens)
        if not value and not name.startswith("--"):
            raise ParseException(f"Empty value for property '{name}'", colon)
        return Declaration(property=name, value=value, comments=comments + self._extract_comments(value_tokens))

    # Helpers -----------------------------------------------------------------
    def _collect_prelude(self, stops: set[TokenType], nested_error: bool = False) -> list[Token]:
        """Collect tokens up to the first stop token outside brackets, without consuming it."""
        collected: list[Token] = []
        depth: list[TokenType] = []
        while True:
            token = self.current_token
            if token.type == TokenType.EOF:
                raise ParseException("Unexpected end of input", token)
            if not depth and token.type in stops:
                return collected
            if token.type in OPENERS:
                depth.append(OPENERS[token.type])
            elif token.type in CLOSERS:
                if not depth or depth.pop() != token.type:
                    raise ParseException(f"Unbalanced '{token.value}'", token)
            elif token.type == TokenType.OPEN_BRACE and nested_error:
                raise ParseException("Nested rules are not supported", token)
            elif token.type in (TokenType.OPEN_BRACE, TokenType.CLOSE_BRACE, TokenType.SEMICOLON):
                raise ParseException(f"Unexpected '{token.value}'", token)
            collected.append(token)
            self.advance()

    def _split_selectors(self, tokens: list[Token], start: Token) -> list[str]:
        groups: list[list[Token]] = [[]]
        depth = 0
        for token in tokens:
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
            if token.type == TokenType.COMMA and depth == 0:
                groups.append([])
            else:
                groups[-1].append(token)
        selectors = [self._join_tokens(group) for group in groups]
        if not all(selectors):
            raise ParseException("Empty selector", start)
        return selectors

    @staticmethod
    def _extract_comments(tokens: list[Token]) -> list[Comment]:
        return [Comment(text=token.value) for token in tokens if token.type == TokenType.COMMENT]

    @staticmethod
    def _join_tokens(tokens: list[Token]) -> str:
        parts: list[str] = []
        for token in tokens:
            if token.type in (TokenType.WHITESPACE, TokenType.COMMENT):
                if parts and parts[-1] != " ":
                    parts.append(" ")
                continue
            parts.append(token.text)
        return "".join(parts).strip()


def parse(
    text: str,
    lexer_config: Optional[LexerConfig] = None,
    parser_config: Optional[ParserConfig] = None,
) -> CssDocument:
    """Parse stylesheet text into a ``CssDocument``.

    Raises ``CSSSyntaxError`` (``LexerError`` or ``ParseException``) on malformed
    input; no partial document is returned.
    """
    lexer = CssLexer(text, config={**(lexer_config or {}), "tokenize": True})
    parser = CssParser(lexer.tokens, config={**(parser_config or {}), "parse": False})
    return parser.parse_tokens()


__all__ = ["CssParser", "ParserConfig", "DECLARATION_AT_RULES", "parse"]
