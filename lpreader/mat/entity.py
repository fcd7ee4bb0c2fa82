from typing import Optional

import lpreader.constants as const


def format_number(value: float) -> str:
    if value == const.INFINITY:
        return "inf"
    elif value == -const.INFINITY:
        return "-inf"
    return "{0:g}".format(value)


class Variable:

    def __init__(self,
                 name: str,
                 lb: float = 0,
                 ub: float = const.INFINITY,
                 type: str = const.VAR_TYPE_CONTINUOUS):
        """
        Constructor of the Variable class.

        :param name: unique name that identifies the variable
        :param lb: lower bound, 0 by default
        :param ub: upper bound, +inf by default
        :param type: one of the variable type constants, continuous by default
        """

        self.name: str = name
        self.lb: float = float(lb)
        self.ub: float = float(ub)
        self.type: str = type

    def __str__(self):
        return self.name

    def __repr__(self):
        return "Variable({0}, lb={1}, ub={2}, type={3})".format(self.name,
                                                                 format_number(self.lb),
                                                                 format_number(self.ub),
                                                                 self.type)

    def is_integer(self) -> bool:
        return self.type in [const.VAR_TYPE_BINARY, const.VAR_TYPE_GENERAL, const.VAR_TYPE_SEMIINTEGER]

    def is_semi(self) -> bool:
        return self.type in [const.VAR_TYPE_SEMICONTINUOUS, const.VAR_TYPE_SEMIINTEGER]

    def set_free(self):
        self.lb = -const.INFINITY
        self.ub = const.INFINITY


class LinTerm:

    def __init__(self, coef: float, var: Variable):
        self.coef: float = coef
        self.var: Variable = var

    def __str__(self):
        return self.get_literal()

    def get_literal(self) -> str:
        if self.coef == 1:
            return self.var.name
        return "{0} {1}".format(format_number(self.coef), self.var.name)


class QuadTerm:

    def __init__(self, coef: float, var1: Variable, var2: Optional[Variable] = None):
        self.coef: float = coef
        self.var1: Variable = var1
        self.var2: Variable = var2 if var2 is not None else var1

    def __str__(self):
        return self.get_literal()

    def is_square(self) -> bool:
        return self.var1 is self.var2

    def get_literal(self) -> str:
        if self.is_square():
            literal = "{0} ^ 2".format(self.var1.name)
        else:
            literal = "{0} * {1}".format(self.var1.name, self.var2.name)
        if self.coef != 1:
            literal = "{0} {1}".format(format_number(self.coef), literal)
        return literal
