from typing import List, Optional, Tuple

import lpreader.constants as const
from lpreader.mat.entity import Variable, LinTerm, QuadTerm, format_number


class Expression:

    def __init__(self, name: str = None):
        self.name: Optional[str] = name
        self.offset: float = 0
        self.lin_terms: List[LinTerm] = []
        self.quad_terms: List[QuadTerm] = []

    def __str__(self):
        return self.get_literal()

    def add_lin_term(self, coef: float, var: Variable):
        self.lin_terms.append(LinTerm(coef, var))

    def add_quad_term(self, coef: float, var1: Variable, var2: Variable = None):
        self.quad_terms.append(QuadTerm(coef, var1, var2))

    def is_single_variable(self) -> bool:
        """
        Returns True if the expression is exactly one variable with a unit coefficient, no offset and no quadratic
        terms, i.e. the left-hand side of a statement that reads as a variable bound.
        """
        return (len(self.lin_terms) == 1
                and self.lin_terms[0].coef == 1
                and len(self.quad_terms) == 0
                and self.offset == 0)

    def get_literal(self, can_include_name: bool = True, is_objective: bool = False) -> str:

        term_literals = [str(t) for t in self.lin_terms]
        if len(self.quad_terms) > 0:
            group_literal = "[ {0} ]".format(" + ".join([str(t) for t in self.quad_terms]))
            if is_objective:
                group_literal += " / {0}".format(format_number(const.QUADRATIC_OBJECTIVE_DIVISOR))
            term_literals.append(group_literal)
        if self.offset != 0 or len(term_literals) == 0:
            term_literals.append(format_number(self.offset))

        literal = " + ".join(term_literals).replace("+ -", "- ")
        if can_include_name and self.name is not None:
            literal = "{0}: {1}".format(self.name, literal)
        return literal


class Constraint:

    def __init__(self,
                 expr: Expression = None,
                 lb: float = -const.INFINITY,
                 ub: float = const.INFINITY):
        self.expr: Expression = expr if expr is not None else Expression()
        self.lb: float = lb
        self.ub: float = ub

    def __str__(self):
        return self.get_literal()

    @property
    def name(self) -> Optional[str]:
        return self.expr.name

    def get_literal(self) -> str:

        body = self.expr.get_literal(can_include_name=False)

        if self.lb == self.ub:
            literal = "{0} = {1}".format(body, format_number(self.ub))
        elif self.lb == -const.INFINITY:
            literal = "{0} <= {1}".format(body, format_number(self.ub))
        elif self.ub == const.INFINITY:
            literal = "{0} >= {1}".format(body, format_number(self.lb))
        else:
            literal = "{0} <= {1} <= {2}".format(format_number(self.lb), body, format_number(self.ub))

        if self.name is not None:
            literal = "{0}: {1}".format(self.name, literal)
        return literal


class SOS:

    def __init__(self, name: str, type: int = const.SOS_TYPE_1):
        self.name: str = name
        self.type: int = type
        self.entries: List[Tuple[Variable, float]] = []

    def __str__(self):
        return self.get_literal()

    def __len__(self):
        return len(self.entries)

    def add_entry(self, var: Variable, weight: float):
        self.entries.append((var, weight))

    def get_literal(self) -> str:
        entry_literals = ["{0}:{1}".format(var.name, format_number(w)) for var, w in self.entries]
        return "{0}: S{1}:: {2}".format(self.name, self.type, ' '.join(entry_literals)).rstrip()
