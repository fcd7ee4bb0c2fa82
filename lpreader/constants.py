import re
from typing import Dict, List

import numpy as np


# Numeric Constants
# ----------------------------------------------------------------------------------------------------------------------
INFINITY = np.inf

SQUARE_EXPONENT = 2.0  # only x ^ 2 is a valid power inside a quadratic group
QUADRATIC_OBJECTIVE_DIVISOR = 2.0  # objective quadratic groups are written as [ ... ] / 2

LOOKAHEAD_CAPACITY = 5

# Raw Token Types
# ----------------------------------------------------------------------------------------------------------------------
RAW_STR = "STR"
RAW_CONS = "CONS"
RAW_LESS = "LESS"
RAW_GREATER = "GREATER"
RAW_EQUAL = "EQUAL"
RAW_COLON = "COLON"
RAW_FLEND = "FLEND"
RAW_BRKOP = "BRKOP"
RAW_BRKCL = "BRKCL"
RAW_PLUS = "PLUS"
RAW_MINUS = "MINUS"
RAW_HAT = "HAT"
RAW_SLASH = "SLASH"
RAW_ASTERISK = "ASTERISK"

# Processed Token Types
# ----------------------------------------------------------------------------------------------------------------------
PT_SECID = "SECID"
PT_SOSTYPE = "SOSTYPE"
PT_CONID = "CONID"
PT_VARID = "VARID"
PT_CONST = "CONST"
PT_FREE = "FREE"
PT_COMP = "COMP"
PT_BRKOP = "BRKOP"
PT_BRKCL = "BRKCL"
PT_SLASH = "SLASH"
PT_ASTERISK = "ASTERISK"
PT_HAT = "HAT"

# Section Keywords
# ----------------------------------------------------------------------------------------------------------------------
SEC_NONE = "NONE"
SEC_OBJMIN = "OBJMIN"
SEC_OBJMAX = "OBJMAX"
SEC_CON = "CON"
SEC_BOUNDS = "BOUNDS"
SEC_GEN = "GEN"
SEC_BIN = "BIN"
SEC_SEMI = "SEMI"
SEC_SOS = "SOS"
SEC_END = "END"

# Comparison Directions
# ----------------------------------------------------------------------------------------------------------------------
CMP_L = '<'
CMP_LEQ = "<="
CMP_EQ = '='
CMP_GEQ = ">="
CMP_G = '>'

# SOS Types
# ----------------------------------------------------------------------------------------------------------------------
SOS_TYPE_1 = 1
SOS_TYPE_2 = 2

# Variable Types
# ----------------------------------------------------------------------------------------------------------------------
VAR_TYPE_CONTINUOUS = "continuous"
VAR_TYPE_BINARY = "binary"
VAR_TYPE_GENERAL = "general"
VAR_TYPE_SEMICONTINUOUS = "semicontinuous"
VAR_TYPE_SEMIINTEGER = "semiinteger"

# Objective Senses
# ----------------------------------------------------------------------------------------------------------------------
OBJ_SENSE_MIN = "minimize"
OBJ_SENSE_MAX = "maximize"

# Keyword Spellings
# ----------------------------------------------------------------------------------------------------------------------
LP_KEYWORD_MIN = ["minimize", "min", "minimise", "minimum"]
LP_KEYWORD_MAX = ["maximize", "max", "maximise", "maximum"]
LP_KEYWORD_ST = ["subject to", "such that", "st", "s.t.", "st."]
LP_KEYWORD_BOUNDS = ["bounds", "bound"]
LP_KEYWORD_GEN = ["gen", "general", "generals", "integer", "integers"]
LP_KEYWORD_BIN = ["bin", "binary", "binaries"]
LP_KEYWORD_SEMI = ["semi-continuous", "semicontinuous", "semi", "semis"]
LP_KEYWORD_SOS = ["sos"]
LP_KEYWORD_END = ["end"]

LP_KEYWORD_FREE = ["free"]
LP_KEYWORD_INF = ["infinity", "inf"]

SECTION_KEYWORD_SPELLINGS: Dict[str, List[str]] = {
    SEC_OBJMIN: LP_KEYWORD_MIN,
    SEC_OBJMAX: LP_KEYWORD_MAX,
    SEC_CON: LP_KEYWORD_ST,
    SEC_BOUNDS: LP_KEYWORD_BOUNDS,
    SEC_GEN: LP_KEYWORD_GEN,
    SEC_BIN: LP_KEYWORD_BIN,
    SEC_SEMI: LP_KEYWORD_SEMI,
    SEC_SOS: LP_KEYWORD_SOS,
    SEC_END: LP_KEYWORD_END,
}


def __build_keyword_table(is_multi_word: bool) -> Dict[str, str]:
    table = {}
    for keyword, spellings in SECTION_KEYWORD_SPELLINGS.items():
        for spelling in spellings:
            if (' ' in spelling or '-' in spelling) == is_multi_word:
                table[spelling.lower()] = keyword
    return table


# Key: lower-case spelling; Value: section keyword.
SINGLE_WORD_SECTION_KEYWORDS: Dict[str, str] = __build_keyword_table(is_multi_word=False)
MULTI_WORD_SECTION_KEYWORDS: Dict[str, str] = __build_keyword_table(is_multi_word=True)

FREE_SPELLINGS = frozenset(LP_KEYWORD_FREE)
INF_SPELLINGS = frozenset(LP_KEYWORD_INF)

# Scanner Symbols
# ----------------------------------------------------------------------------------------------------------------------
SINGLE_CHAR_TOKEN_TYPES: Dict[str, str] = {
    '[': RAW_BRKOP,
    ']': RAW_BRKCL,
    '<': RAW_LESS,
    '>': RAW_GREATER,
    '=': RAW_EQUAL,
    ':': RAW_COLON,
    '+': RAW_PLUS,
    '^': RAW_HAT,
    '/': RAW_SLASH,
    '*': RAW_ASTERISK,
    '-': RAW_MINUS,
}

COMMENT_CHAR = '\\'
WHITESPACE_CHARS = [' ', '\t']
LINE_END_CHARS = [';', '\n']

IDENTIFIER_DELIMITERS = frozenset("\t\n\\:+<>^= /-*;")

FLOAT_PATTERN = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
