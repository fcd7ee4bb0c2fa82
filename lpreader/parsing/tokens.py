from typing import Optional, Union

import lpreader.constants as const


class RawToken:

    def __init__(self, type: str, value: Union[str, float, None] = None):
        self.type: str = type
        self.value: Union[str, float, None] = value  # text of STR tokens, number of CONS tokens

    def __str__(self):
        if self.value is None:
            return self.type
        return "{0}({1})".format(self.type, self.value)

    def __repr__(self):
        return str(self)

    def is_type(self, token_type: str) -> bool:
        return self.type == token_type


class ProcessedToken:
    """
    Semantically typed token. The value depends on the type: the keyword constant of a SECID, the SOS type number of a
    SOSTYPE, the name of a CONID or VARID, the number of a CONST and the comparison symbol of a COMP. Structural tokens
    and FREE carry no value.
    """

    def __init__(self, type: str, value: Union[str, int, float, None] = None):
        self.type: str = type
        self.value: Union[str, int, float, None] = value

    def __str__(self):
        if self.value is None:
            return self.type
        return "{0}({1})".format(self.type, self.value)

    def __repr__(self):
        return str(self)

    def __eq__(self, other):
        if isinstance(other, ProcessedToken):
            return self.type == other.type and self.value == other.value
        return False

    def __hash__(self):
        return hash((self.type, self.value))

    def is_type(self, token_type: str) -> bool:
        return self.type == token_type

    def is_keyword(self, keyword: Optional[str] = None) -> bool:
        if self.type != const.PT_SECID:
            return False
        return keyword is None or self.value == keyword
