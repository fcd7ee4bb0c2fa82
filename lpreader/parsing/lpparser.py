from ordered_set import OrderedSet
from typing import Dict, Iterable, List, Optional, Tuple
import warnings

import lpreader.constants as const
from lpreader.mat import Variable, Expression, Constraint, SOS
from lpreader.prob.model import Model
from lpreader.handlers.modelbuilder import ModelBuilder
from lpreader.parsing.lplexer import LPLexer
from lpreader.parsing.tokens import ProcessedToken


SectionRange = Tuple[int, int]


def split_tokens(tokens: List[ProcessedToken]) -> Dict[str, SectionRange]:
    """
    Cut a flat list of processed tokens into one half-open range per section keyword. Empty sections are not recorded.
    Tokens preceding the first section keyword are recorded under the NONE pseudo-keyword.
    :param tokens: list of processed tokens
    :return: dictionary of (begin, end) index pairs keyed by section keyword, in file order
    """

    section_ranges: Dict[str, SectionRange] = {}
    opened_sections = OrderedSet()

    current_section: Optional[str] = const.SEC_NONE if len(tokens) > 0 and not tokens[0].is_keyword() else None
    begin = 0

    for i, token in enumerate(tokens):

        if not token.is_keyword():
            continue

        if current_section is not None:
            section_ranges[current_section] = (begin, i)  # mark end of previous section

        current_section = token.value

        if current_section in opened_sections:
            raise ValueError("LP parser encountered a duplicate '{0}' section".format(current_section))
        opened_sections.append(current_section)

        # skip empty section
        if i + 1 == len(tokens) or tokens[i + 1].is_keyword():
            current_section = None
            continue

        begin = i + 1

    if current_section is not None:
        section_ranges[current_section] = (begin, len(tokens))  # mark end of last section

    return section_ranges


class LPParser:

    def __init__(self, builder: ModelBuilder = None):

        self.builder: ModelBuilder = builder if builder is not None else ModelBuilder()

        self._lexer: LPLexer = LPLexer()

        self.tokens: List[ProcessedToken] = []
        self.section_ranges: Dict[str, SectionRange] = {}

    def parse(self, lines: Iterable[str]) -> Model:
        """
        Parse LP text into the model of the builder.
        :param lines: iterable of lines, e.g. an open text file
        :return: the populated model
        """

        self.tokens = self._lexer.tokenize(lines)
        self.section_ranges = split_tokens(self.tokens)

        self.__process_none_section()
        self.__process_objective_section()
        self.__process_constraint_section()
        self.__process_bounds_section()
        self.__process_general_section()
        self.__process_binary_section()
        self.__process_semi_section()
        self.__process_sos_section()
        self.__process_end_section()

        self.tokens = []
        self.section_ranges = {}

        return self.builder.model

    # Expression Parsing
    # ------------------------------------------------------------------------------------------------------------------

    def parse_expression(self, pos: int, end: int, expr: Expression, is_objective: bool) -> int:
        """
        Parse the longest linear/quadratic sum starting at the given position into the expression.
        :param pos: index of the first token of the expression
        :param end: index after the last token of the section
        :param expr: target expression
        :param is_objective: if true, quadratic groups must be followed by '/ 2'
        :return: index of the first token that is not part of the expression
        """

        if pos < end and self.tokens[pos].is_type(const.PT_CONID):
            expr.name = self.tokens[pos].value
            pos += 1

        while pos < end:

            token = self.tokens[pos]

            # const var
            if self.__match(pos, end, const.PT_CONST, const.PT_VARID):
                expr.add_lin_term(token.value, self.__get_variable(pos + 1))
                pos += 2

            # const
            elif token.is_type(const.PT_CONST):
                expr.offset += token.value
                pos += 1

            # var
            elif token.is_type(const.PT_VARID):
                expr.add_lin_term(1.0, self.__get_variable(pos))
                pos += 1

            # quadratic group
            elif token.is_type(const.PT_BRKOP) and pos + 1 < end:
                pos = self.__parse_quadratic_group(pos + 1, end, expr, is_objective)

            else:
                break

        return pos

    def __parse_quadratic_group(self, pos: int, end: int, expr: Expression, is_objective: bool) -> int:

        while pos < end and not self.tokens[pos].is_type(const.PT_BRKCL):

            # const var ^ const
            if self.__match(pos, end, const.PT_CONST, const.PT_VARID, const.PT_HAT, const.PT_CONST):
                self.__check_square_exponent(self.tokens[pos + 3].value)
                var = self.__get_variable(pos + 1)
                expr.add_quad_term(self.tokens[pos].value, var, var)
                pos += 4

            # var ^ const
            elif self.__match(pos, end, const.PT_VARID, const.PT_HAT, const.PT_CONST):
                self.__check_square_exponent(self.tokens[pos + 2].value)
                var = self.__get_variable(pos)
                expr.add_quad_term(1.0, var, var)
                pos += 3

            # const var * var
            elif self.__match(pos, end, const.PT_CONST, const.PT_VARID, const.PT_ASTERISK, const.PT_VARID):
                expr.add_quad_term(self.tokens[pos].value, self.__get_variable(pos + 1), self.__get_variable(pos + 3))
                pos += 4

            # var * var
            elif self.__match(pos, end, const.PT_VARID, const.PT_ASTERISK, const.PT_VARID):
                expr.add_quad_term(1.0, self.__get_variable(pos), self.__get_variable(pos + 2))
                pos += 3

            else:
                break

        if is_objective:
            # in the objective function, a quadratic group is followed by '/ 2'
            if (not self.__match(pos, end, const.PT_BRKCL, const.PT_SLASH, const.PT_CONST)
                    or self.tokens[pos + 2].value != const.QUADRATIC_OBJECTIVE_DIVISOR):
                raise ValueError("LP parser expected a quadratic objective group to end with '] / 2'")
            return pos + 3

        if not self.__match(pos, end, const.PT_BRKCL):
            raise ValueError("LP parser expected a quadratic group to end with ']'")
        return pos + 1

    @staticmethod
    def __check_square_exponent(value: float):
        if value != const.SQUARE_EXPONENT:
            raise ValueError("LP parser encountered the exponent {0} in a quadratic group,".format(value)
                             + " while expecting the exponent 2")

    # Section Processing
    # ------------------------------------------------------------------------------------------------------------------

    def __process_none_section(self):
        if const.SEC_NONE in self.section_ranges:
            raise ValueError("LP parser encountered tokens preceding the first section keyword")

    def __process_objective_section(self):

        model = self.builder.model
        model.objective = Expression()

        has_min = const.SEC_OBJMIN in self.section_ranges
        has_max = const.SEC_OBJMAX in self.section_ranges

        if has_min and has_max:
            raise ValueError("LP parser encountered both a minimize and a maximize section")
        elif has_min:
            model.sense = const.OBJ_SENSE_MIN
            begin, end = self.section_ranges[const.SEC_OBJMIN]
        elif has_max:
            model.sense = const.OBJ_SENSE_MAX
            begin, end = self.section_ranges[const.SEC_OBJMAX]
        else:
            return

        pos = self.parse_expression(begin, end, model.objective, is_objective=True)

        if pos != end:
            # without a constraint section header, the statements following the objective are constraints and bounds
            if const.SEC_CON in self.section_ranges:
                raise ValueError("LP parser encountered an unexpected token '{0}'".format(self.tokens[pos])
                                 + " in the objective section")
            self.__parse_statements(pos, end, can_set_bounds=True)

    def __process_constraint_section(self):
        if const.SEC_CON not in self.section_ranges:
            return
        begin, end = self.section_ranges[const.SEC_CON]
        self.__parse_statements(begin, end, can_set_bounds=False)

    def __parse_statements(self, pos: int, end: int, can_set_bounds: bool):

        model = self.builder.model

        while pos < end:

            con = Constraint()
            pos = self.parse_expression(pos, end, con.expr, is_objective=False)

            # the objective expression absorbs the left-hand side of an unnamed statement that follows it
            if can_set_bounds and len(con.expr.lin_terms) == 0 and len(con.expr.quad_terms) == 0:
                raise ValueError("LP parser encountered a statement without variables following the objective,"
                                 + " which requires a constraint section header")

            # a comparison operator should be next
            if not self.__match(pos, end, const.PT_COMP):
                raise ValueError("LP parser expected a comparison operator in constraint '{0}'".format(con))
            direction = self.tokens[pos].value
            pos += 1

            # a right-hand-side value should be next
            if not self.__match(pos, end, const.PT_CONST):
                raise ValueError("LP parser expected a right-hand-side value in constraint '{0}'".format(con))
            rhs = self.tokens[pos].value
            pos += 1

            if can_set_bounds and con.name is None and con.expr.is_single_variable():
                self.__set_bound(con.expr.lin_terms[0].var, direction, rhs)
            else:
                self.__set_bound(con, direction, rhs)
                model.constraints.append(con)

    def __process_bounds_section(self):

        if const.SEC_BOUNDS not in self.section_ranges:
            return

        begin, end = self.section_ranges[const.SEC_BOUNDS]
        pos = begin

        while pos < end:

            # var free
            if self.__match(pos, end, const.PT_VARID, const.PT_FREE):
                self.__get_variable(pos).set_free()
                pos += 2

            # const comp var comp const
            elif self.__match(pos, end,
                              const.PT_CONST, const.PT_COMP, const.PT_VARID, const.PT_COMP, const.PT_CONST):
                var = self.__get_variable(pos + 2)
                dir_1 = self.tokens[pos + 1].value
                dir_2 = self.tokens[pos + 3].value
                if dir_1 == const.CMP_LEQ and dir_2 == const.CMP_LEQ:
                    var.lb = self.tokens[pos].value
                    var.ub = self.tokens[pos + 4].value
                elif dir_1 == const.CMP_GEQ and dir_2 == const.CMP_GEQ:
                    var.ub = self.tokens[pos].value
                    var.lb = self.tokens[pos + 4].value
                else:
                    raise ValueError("LP parser encountered the comparison operators '{0}' and '{1}'".format(dir_1,
                                                                                                           dir_2)
                                     + " in a range bound of variable '{0}'".format(var))
                pos += 5

            # const comp var
            elif self.__match(pos, end, const.PT_CONST, const.PT_COMP, const.PT_VARID):
                self.__set_bound(self.__get_variable(pos + 2),
                                 self.__reverse_direction(self.tokens[pos + 1].value),
                                 self.tokens[pos].value)
                pos += 3

            # var comp const
            elif self.__match(pos, end, const.PT_VARID, const.PT_COMP, const.PT_CONST):
                self.__set_bound(self.__get_variable(pos),
                                 self.tokens[pos + 1].value,
                                 self.tokens[pos + 2].value)
                pos += 3

            else:
                raise ValueError("LP parser encountered an unexpected token '{0}'".format(self.tokens[pos])
                                 + " in the bounds section")

    def __process_binary_section(self):
        for var in self.__get_section_variables(const.SEC_BIN):
            var.type = const.VAR_TYPE_BINARY
            var.lb = 0.0
            var.ub = 1.0

    def __process_general_section(self):
        for var in self.__get_section_variables(const.SEC_GEN):
            if var.type == const.VAR_TYPE_SEMICONTINUOUS:
                var.type = const.VAR_TYPE_SEMIINTEGER
            else:
                var.type = const.VAR_TYPE_GENERAL

    def __process_semi_section(self):

        # the semi-continuous section is only processed when a general section is present
        if const.SEC_GEN not in self.section_ranges:
            if const.SEC_SEMI in self.section_ranges:
                warnings.warn("LP parser skipped the semi-continuous section because the model has no general section")
            return

        for var in self.__get_section_variables(const.SEC_SEMI):
            if var.type == const.VAR_TYPE_GENERAL:
                var.type = const.VAR_TYPE_SEMIINTEGER
            else:
                var.type = const.VAR_TYPE_SEMICONTINUOUS

    def __process_sos_section(self):

        if const.SEC_SOS not in self.section_ranges:
            return

        model = self.builder.model
        begin, end = self.section_ranges[const.SEC_SOS]
        pos = begin

        while pos < end:

            # sos1: S1:: x1:1 x2:2 x3:3

            # name of SOS is mandatory
            if not self.__match(pos, end, const.PT_CONID):
                raise ValueError("LP parser expected an SOS name but encountered '{0}'".format(self.tokens[pos]))
            name = self.tokens[pos].value
            pos += 1

            if not self.__match(pos, end, const.PT_SOSTYPE):
                raise ValueError("LP parser expected an SOS type marker after SOS '{0}'".format(name))
            sos = SOS(name, self.tokens[pos].value)
            pos += 1

            # each 'var:weight' entry is lexed as a constraint identifier followed by a constant
            while self.__match(pos, end, const.PT_CONID, const.PT_CONST):
                sos.add_entry(self.builder.get_variable(self.tokens[pos].value), self.tokens[pos + 1].value)
                pos += 2

            model.soss.append(sos)

    def __process_end_section(self):
        if const.SEC_END in self.section_ranges:
            raise ValueError("LP parser encountered tokens following the end keyword")

    # Utility
    # ------------------------------------------------------------------------------------------------------------------

    def __match(self, pos: int, end: int, *token_types: str) -> bool:
        if pos + len(token_types) > end:
            return False
        return all(self.tokens[pos + i].is_type(t) for i, t in enumerate(token_types))

    def __get_variable(self, pos: int) -> Variable:
        return self.builder.get_variable(self.tokens[pos].value)

    def __get_section_variables(self, keyword: str) -> List[Variable]:
        if keyword not in self.section_ranges:
            return []
        begin, end = self.section_ranges[keyword]
        variables = []
        for pos in range(begin, end):
            if not self.tokens[pos].is_type(const.PT_VARID):
                raise ValueError("LP parser expected a variable identifier but encountered '{0}'".format(
                    self.tokens[pos]))
            variables.append(self.__get_variable(pos))
        return variables

    @staticmethod
    def __set_bound(entity, direction: str, value: float):
        """
        Apply 'entity direction value' to the bounds of a variable or a constraint.
        """
        if direction == const.CMP_LEQ:
            entity.ub = value
        elif direction == const.CMP_GEQ:
            entity.lb = value
        elif direction == const.CMP_EQ:
            entity.lb = value
            entity.ub = value
        else:
            raise ValueError("LP parser encountered the strict comparison operator '{0}'".format(direction)
                             + " where only '<=', '=', and '>=' are allowed")

    @staticmethod
    def __reverse_direction(direction: str) -> str:
        reversed_directions = {const.CMP_LEQ: const.CMP_GEQ,
                               const.CMP_GEQ: const.CMP_LEQ,
                               const.CMP_L: const.CMP_G,
                               const.CMP_G: const.CMP_L}
        return reversed_directions.get(direction, direction)
