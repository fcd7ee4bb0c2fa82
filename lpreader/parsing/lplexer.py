from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional

import lpreader.constants as const
from lpreader.parsing.tokens import RawToken, ProcessedToken


class LPScanner:

    def __init__(self, lines: Iterable[str]):

        self.__lines: Iterator[str] = iter(lines)
        self.__line: str = ""
        self.__index: int = 0
        self.__is_eof: bool = False

    def read_next_token(self) -> Optional[RawToken]:
        """
        Read the next raw token of the current line.
        :return: the token that was read, or None if only whitespace or comments were skipped
        """

        if self.__index == len(self.__line):
            if not self.__read_next_line():
                return RawToken(const.RAW_FLEND)
            if self.__line == "":
                return None  # empty line

        c = self.__line[self.__index]

        if c == const.COMMENT_CHAR:
            self.__index = len(self.__line)  # skip rest of line
            return None

        elif c in const.SINGLE_CHAR_TOKEN_TYPES:
            self.__index += 1
            return RawToken(const.SINGLE_CHAR_TOKEN_TYPES[c])

        elif c in const.WHITESPACE_CHARS:
            self.__index += 1
            return None

        elif c in const.LINE_END_CHARS:
            self.__index = len(self.__line)
            return None

        # numeric literal
        match = const.FLOAT_PATTERN.match(self.__line, self.__index)
        if match is not None:
            self.__index = match.end()
            return RawToken(const.RAW_CONS, float(match.group()))

        # section, variable, or constraint identifier
        end_index = self.__index
        while end_index < len(self.__line) and self.__line[end_index] not in const.IDENTIFIER_DELIMITERS:
            end_index += 1
        if end_index > self.__index:
            token = RawToken(const.RAW_STR, self.__line[self.__index:end_index])
            self.__index = end_index
            return token

        raise ValueError("LP lexer encountered an unexpected character '{0}'".format(c))

    def __read_next_line(self) -> bool:

        if self.__is_eof:
            return False

        line = next(self.__lines, None)
        if line is None:
            self.__is_eof = True
            self.__line = ""
            self.__index = 0
            return False

        if line.endswith('\n'):
            line = line[:-1]
        if line.endswith('\r'):
            line = line[:-1]

        self.__line = line
        self.__index = 0
        return True


class TokenWindow:
    """
    Sliding window over the next raw tokens of a scanner. Once the scanner is exhausted, every further slot holds an
    end-of-file token.
    """

    def __init__(self, scanner: LPScanner, capacity: int = const.LOOKAHEAD_CAPACITY):
        self.__scanner: LPScanner = scanner
        self.capacity: int = capacity
        self.__tokens: Deque[RawToken] = deque()
        while len(self.__tokens) < self.capacity:
            self.__tokens.append(self.__read_token())

    def peek(self, offset: int = 0) -> RawToken:
        if offset < 0 or offset >= self.capacity:
            raise IndexError("Token window offset {0} is outside of the window [0, {1})".format(offset,
                                                                                              self.capacity))
        return self.__tokens[offset]

    def matches(self, *token_types: str) -> bool:
        return all(self.__tokens[i].is_type(t) for i, t in enumerate(token_types))

    def advance(self, count: int = 1):
        for _ in range(count):
            self.__tokens.popleft()
            self.__tokens.append(self.__read_token())

    def __read_token(self) -> RawToken:
        while True:
            token = self.__scanner.read_next_token()
            if token is not None:
                return token


class LPLexer:

    def __init__(self):
        self.__window: Optional[TokenWindow] = None
        self.tokens: Optional[List[ProcessedToken]] = None

    def tokenize(self, lines: Iterable[str]) -> List[ProcessedToken]:
        """
        Convert a line-oriented stream of LP text into a flat list of processed tokens.
        :param lines: iterable of lines, e.g. an open text file
        :return: list of processed tokens
        """

        self.__window = TokenWindow(LPScanner(lines))
        self.tokens = []

        while not self.__window.peek().is_type(const.RAW_FLEND):
            self.__process_next_tokens()

        tokens = self.tokens
        self.__window = None
        self.tokens = None
        return tokens

    # Reclassification
    # ------------------------------------------------------------------------------------------------------------------

    def __process_next_tokens(self):

        window = self.__window
        t0 = window.peek(0)
        t1 = window.peek(1)
        t2 = window.peek(2)

        # block comment
        if window.matches(const.RAW_SLASH, const.RAW_ASTERISK):
            self.__skip_block_comment()
            return

        # hyphenated section keyword, e.g. semi-continuous
        if window.matches(const.RAW_STR, const.RAW_MINUS, const.RAW_STR):
            keyword = self.__parse_section_keyword(t0.value + '-' + t2.value, is_multi_word=True)
            if keyword is not None:
                self.__add_keyword(keyword, 3)
                return

        # two-word section keyword, e.g. subject to
        if window.matches(const.RAW_STR, const.RAW_STR):
            keyword = self.__parse_section_keyword(t0.value + ' ' + t1.value, is_multi_word=True)
            if keyword is not None:
                self.__add_keyword(keyword, 2)
                return

        if window.matches(const.RAW_STR):

            keyword = self.__parse_section_keyword(t0.value, is_multi_word=False)
            if keyword is not None:
                self.__add_keyword(keyword, 1)
                return

            # SOS type marker: S1:: or S2::
            if window.matches(const.RAW_STR, const.RAW_COLON, const.RAW_COLON):
                self.__add_token(ProcessedToken(const.PT_SOSTYPE, self.__parse_sos_type(t0.value)), 3)
                return

            if window.matches(const.RAW_STR, const.RAW_COLON):
                self.__add_token(ProcessedToken(const.PT_CONID, t0.value), 2)
                return

            if t0.value.lower() in const.FREE_SPELLINGS:
                self.__add_token(ProcessedToken(const.PT_FREE), 1)
                return

            if t0.value.lower() in const.INF_SPELLINGS:
                self.__add_token(ProcessedToken(const.PT_CONST, const.INFINITY), 1)
                return

            self.__add_token(ProcessedToken(const.PT_VARID, t0.value), 1)
            return

        if t0.is_type(const.RAW_PLUS) or t0.is_type(const.RAW_MINUS):
            sign = 1.0 if t0.is_type(const.RAW_PLUS) else -1.0

            value = self.__get_constant_value(t1)
            if value is not None:
                self.__add_token(ProcessedToken(const.PT_CONST, sign * value), 2)
                return

            if t1.is_type(const.RAW_BRKOP):
                if sign < 0:
                    raise ValueError("LP lexer encountered a negated quadratic group, which is not supported")
                self.__add_token(ProcessedToken(const.PT_BRKOP), 2)
                return

            # implicit unit coefficient
            self.__add_token(ProcessedToken(const.PT_CONST, sign), 1)
            return

        if t0.is_type(const.RAW_CONS):
            if t1.is_type(const.RAW_BRKOP):
                raise ValueError("LP lexer encountered a coefficient preceding a quadratic group,"
                                 + " which is not supported")
            self.__add_token(ProcessedToken(const.PT_CONST, t0.value), 1)
            return

        structural_types = {const.RAW_BRKOP: const.PT_BRKOP,
                            const.RAW_BRKCL: const.PT_BRKCL,
                            const.RAW_SLASH: const.PT_SLASH,
                            const.RAW_ASTERISK: const.PT_ASTERISK,
                            const.RAW_HAT: const.PT_HAT}
        if t0.type in structural_types:
            self.__add_token(ProcessedToken(structural_types[t0.type]), 1)
            return

        if t0.is_type(const.RAW_LESS):
            if t1.is_type(const.RAW_EQUAL):
                self.__add_token(ProcessedToken(const.PT_COMP, const.CMP_LEQ), 2)
            else:
                self.__add_token(ProcessedToken(const.PT_COMP, const.CMP_L), 1)
            return

        if t0.is_type(const.RAW_GREATER):
            if t1.is_type(const.RAW_EQUAL):
                self.__add_token(ProcessedToken(const.PT_COMP, const.CMP_GEQ), 2)
            else:
                self.__add_token(ProcessedToken(const.PT_COMP, const.CMP_G), 1)
            return

        if t0.is_type(const.RAW_EQUAL):
            if t1.is_type(const.RAW_LESS):  # =<
                self.__add_token(ProcessedToken(const.PT_COMP, const.CMP_LEQ), 2)
            elif t1.is_type(const.RAW_GREATER):  # =>
                self.__add_token(ProcessedToken(const.PT_COMP, const.CMP_GEQ), 2)
            else:
                self.__add_token(ProcessedToken(const.PT_COMP, const.CMP_EQ), 1)
            return

        raise ValueError("LP lexer encountered an unexpected token '{0}'".format(t0))

    def __skip_block_comment(self):
        window = self.__window
        window.advance(2)  # skip '/*'
        while not window.matches(const.RAW_ASTERISK, const.RAW_SLASH) and not window.peek().is_type(const.RAW_FLEND):
            window.advance()
        window.advance(2)  # skip '*/'

    # Utility
    # ------------------------------------------------------------------------------------------------------------------

    def __add_token(self, token: ProcessedToken, raw_token_count: int):
        self.tokens.append(token)
        self.__window.advance(raw_token_count)

    def __add_keyword(self, keyword: str, raw_token_count: int):
        self.__add_token(ProcessedToken(const.PT_SECID, keyword), raw_token_count)
        # a colon directly after a section keyword, as in 'min:', belongs to the keyword
        if self.__window.matches(const.RAW_COLON) and not self.__window.matches(const.RAW_COLON, const.RAW_COLON):
            self.__window.advance()

    @staticmethod
    def __parse_section_keyword(literal: str, is_multi_word: bool) -> Optional[str]:
        if is_multi_word:
            return const.MULTI_WORD_SECTION_KEYWORDS.get(literal.lower(), None)
        return const.SINGLE_WORD_SECTION_KEYWORDS.get(literal.lower(), None)

    @staticmethod
    def __parse_sos_type(literal: str) -> int:
        if len(literal) != 2 or literal[0] not in ['S', 's'] or literal[1] not in ['1', '2']:
            raise ValueError("LP lexer encountered a malformed SOS type marker '{0}'".format(literal))
        return const.SOS_TYPE_1 if literal[1] == '1' else const.SOS_TYPE_2

    @staticmethod
    def __get_constant_value(token: RawToken) -> Optional[float]:
        if token.is_type(const.RAW_CONS):
            return token.value
        elif token.is_type(const.RAW_STR) and token.value.lower() in const.INF_SPELLINGS:
            return const.INFINITY
        return None
