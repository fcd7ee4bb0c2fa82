from typing import Any, Dict, List, Optional
import warnings

import numpy as np

import lpreader.constants as const
from lpreader.mat import Variable, Expression, Constraint, SOS, format_number


class Model:

    def __init__(self, name: str = None):

        self.name: str = name if name is not None else "model"

        self.sense: str = const.OBJ_SENSE_MIN
        self.objective: Expression = Expression()
        self.constraints: List[Constraint] = []
        self.soss: List[SOS] = []

        # Key: variable name; Value: variable. Insertion order is the order of first reference.
        self.variables: Dict[str, Variable] = {}

    def __str__(self):
        return self.get_literal()

    # Accessors
    # ------------------------------------------------------------------------------------------------------------------

    def get_variable(self, name: str) -> Optional[Variable]:
        var = self.variables.get(name, None)
        if var is None:
            warnings.warn("Variable '{0}' does not exist".format(name))
        return var

    def get_variables(self) -> List[Variable]:
        return list(self.variables.values())

    def get_num_variables(self) -> int:
        return len(self.variables)

    def get_num_constraints(self) -> int:
        return len(self.constraints)

    def get_constraint(self, name: str) -> Optional[Constraint]:
        for con in self.constraints:
            if con.name == name:
                return con
        return None

    # Array Export
    # ------------------------------------------------------------------------------------------------------------------

    def to_arrays(self) -> Dict[str, Any]:
        """
        Export the model as dense arrays with columns ordered by first reference of each variable.
        The objective reads c'x + 1/2 x'Qx + offset and each row reads row_lb <= Ax <= row_ub, with the constant offset
        of a constraint expression moved into its row bounds.
        :return: dictionary of arrays keyed by 'c', 'Q', 'offset', 'A', 'row_lb', 'row_ub', 'col_lb', 'col_ub',
        'integrality', plus the objective 'sense' and the column 'names'
        """

        col_indices = {name: j for j, name in enumerate(self.variables)}
        n = len(col_indices)
        m = len(self.constraints)

        c = np.zeros(shape=(n,))
        q = np.zeros(shape=(n, n))
        for term in self.objective.lin_terms:
            c[col_indices[term.var.name]] += term.coef
        for term in self.objective.quad_terms:
            i = col_indices[term.var1.name]
            j = col_indices[term.var2.name]
            if i == j:
                q[i, i] += term.coef
            else:
                q[i, j] += term.coef / 2
                q[j, i] += term.coef / 2

        a = np.zeros(shape=(m, n))
        row_lb = np.full(shape=(m,), fill_value=-const.INFINITY)
        row_ub = np.full(shape=(m,), fill_value=const.INFINITY)
        for i, con in enumerate(self.constraints):
            if len(con.expr.quad_terms) > 0:
                raise ValueError("Array export does not support quadratic constraint '{0}'".format(con.name))
            for term in con.expr.lin_terms:
                a[i, col_indices[term.var.name]] += term.coef
            row_lb[i] = con.lb - con.expr.offset
            row_ub[i] = con.ub - con.expr.offset

        variables = self.get_variables()

        return {
            "sense": self.sense,
            "names": [var.name for var in variables],
            "c": c,
            "Q": q,
            "offset": self.objective.offset,
            "A": a,
            "row_lb": row_lb,
            "row_ub": row_ub,
            "col_lb": np.array([var.lb for var in variables], dtype=float),
            "col_ub": np.array([var.ub for var in variables], dtype=float),
            "integrality": np.array([var.is_integer() for var in variables], dtype=bool),
        }

    # Literal
    # ------------------------------------------------------------------------------------------------------------------

    def get_literal(self) -> str:
        """
        Render the model in the LP format. A semi-continuous section is only read back when a general section with at
        least one variable is present, so semi-continuous types of a model without general-integer variables are lost
        on re-reading.
        """

        lines = [self.sense, " {0}".format(self.objective.get_literal(is_objective=True))]

        if len(self.constraints) > 0:
            lines.append("subject to")
            lines.extend([" {0}".format(con) for con in self.constraints])

        bounded_vars = [v for v in self.variables.values() if v.lb != 0 or v.ub != const.INFINITY]
        if len(bounded_vars) > 0:
            lines.append("bounds")
            for var in bounded_vars:
                if var.lb == -const.INFINITY and var.ub == const.INFINITY:
                    lines.append(" {0} free".format(var.name))
                else:
                    lines.append(" {0} <= {1} <= {2}".format(format_number(var.lb),
                                                             var.name,
                                                             format_number(var.ub)))

        var_type_sections = [("general", [const.VAR_TYPE_GENERAL, const.VAR_TYPE_SEMIINTEGER]),
                             ("binary", [const.VAR_TYPE_BINARY]),
                             ("semi-continuous", [const.VAR_TYPE_SEMICONTINUOUS, const.VAR_TYPE_SEMIINTEGER])]
        has_general_vars = any(v.type in [const.VAR_TYPE_GENERAL, const.VAR_TYPE_SEMIINTEGER]
                               for v in self.variables.values())
        if not has_general_vars and any(v.type == const.VAR_TYPE_SEMICONTINUOUS for v in self.variables.values()):
            warnings.warn("Literal of model '{0}' has a semi-continuous section without a general section,".format(
                self.name) + " which is skipped on re-reading")

        for header, var_types in var_type_sections:
            names = [v.name for v in self.variables.values() if v.type in var_types]
            if len(names) > 0:
                lines.append(header)
                lines.append(" {0}".format(' '.join(names)))

        if len(self.soss) > 0:
            lines.append("sos")
            lines.extend([" {0}".format(sos) for sos in self.soss])

        lines.append("end")
        return '\n'.join(lines)
