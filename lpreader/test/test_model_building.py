import numpy as np
import pytest

import lpreader
import lpreader.constants as const
from lpreader.test.test_util import *


SCRIPT = """min: 2 x + 3 y;
c1: x + y <= 10;
x <= 5;
"""

MIXED_INTEGER_SCRIPT = """
\\ mixed-integer model
Maximize
 profit: 3 x1 + 2 x2 - x3 + 4
Subject To
 cap: x1 + x2 + x3 <= 40
 mix: x1 - x2 >= -5
 fix: x3 + 2 = 7
Bounds
 x1 <= 20
 -10 <= x2 <= 30
 x3 free
General
 x2
Binary
 b
End
"""


def test_build_model_from_string():

    model = lpreader.read_lp_string(SCRIPT)

    assert model.name == "model"
    assert model.sense == const.OBJ_SENSE_MIN
    assert check_lin_terms(model.objective.lin_terms, [(2, 'x'), (3, 'y')])

    assert model.get_num_constraints() == 1
    con = model.get_constraint("c1")
    assert con is not None
    assert check_bounds(con, -const.INFINITY, 10)
    assert check_lin_terms(con.expr.lin_terms, [(1, 'x'), (1, 'y')])

    # an unnamed single-variable statement is a bound
    assert check_bounds(model.variables['x'], 0, 5)
    assert check_bounds(model.variables['y'], 0, const.INFINITY)


def test_build_model_from_file(tmp_path):

    write_lp_file(str(tmp_path), "example.lp", SCRIPT)

    model = lpreader.read_lp("example.lp", working_dir_path=str(tmp_path))
    assert model.name == "example"
    assert model.get_num_variables() == 2
    assert model.get_num_constraints() == 1

    model = lpreader.read_lp(str(tmp_path / "example.lp"), name="custom")
    assert model.name == "custom"
    assert check_bounds(model.variables['x'], 0, 5)


def test_build_model_from_compressed_file(tmp_path):
    file_path = write_lp_file(str(tmp_path), "example.lp.gz", MIXED_INTEGER_SCRIPT)
    model = lpreader.read_lp(file_path)
    assert model.name == "example"
    assert model.sense == const.OBJ_SENSE_MAX
    assert model.get_num_constraints() == 3


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        lpreader.read_lp("missing.lp", working_dir_path=str(tmp_path))


def test_parsing_is_repeatable():

    model_1 = lpreader.read_lp_string(MIXED_INTEGER_SCRIPT)
    model_2 = lpreader.read_lp_string(MIXED_INTEGER_SCRIPT)

    assert model_1 is not model_2
    assert str(model_1) == str(model_2)


def test_mixed_integer_model():

    model = lpreader.read_lp_string(MIXED_INTEGER_SCRIPT)

    assert model.sense == const.OBJ_SENSE_MAX
    assert model.objective.name == "profit"
    assert model.objective.offset == 4
    assert check_lin_terms(model.objective.lin_terms, [(3, "x1"), (2, "x2"), (-1, "x3")])

    cap, mix, fix = model.constraints
    assert check_bounds(cap, -const.INFINITY, 40)
    assert check_bounds(mix, -5, const.INFINITY)
    assert check_bounds(fix, 7, 7)
    assert fix.expr.offset == 2

    x1, x2, x3, b = [model.get_variable(n) for n in ["x1", "x2", "x3", 'b']]
    assert check_bounds(x1, 0, 20)
    assert check_bounds(x2, -10, 30)
    assert check_bounds(x3, -const.INFINITY, const.INFINITY)
    assert check_bounds(b, 0, 1)

    assert x1.type == const.VAR_TYPE_CONTINUOUS
    assert x2.type == const.VAR_TYPE_GENERAL
    assert b.type == const.VAR_TYPE_BINARY
    assert x2.is_integer() and b.is_integer() and not x1.is_integer()

    # one shared variable instance per name
    assert cap.expr.lin_terms[0].var is x1
    assert mix.expr.lin_terms[1].var is x2
    assert model.get_variables() == [x1, x2, x3, b]


def test_get_missing_variable():
    model = lpreader.read_lp_string(SCRIPT)
    with pytest.warns(UserWarning):
        assert model.get_variable('z') is None


def test_variable_defaults():

    model = lpreader.read_lp_string("min: x")
    x = model.variables['x']

    assert x.lb == 0
    assert x.ub == const.INFINITY
    assert x.type == const.VAR_TYPE_CONTINUOUS
    assert not x.is_integer()
    assert not x.is_semi()


def test_model_literal():

    model = lpreader.read_lp_string(MIXED_INTEGER_SCRIPT)
    literal = str(model)

    assert literal.startswith(const.OBJ_SENSE_MAX)
    assert "profit: 3 x1 + 2 x2 - 1 x3 + 4" in literal
    assert "cap: x1 + x2 + x3 <= 40" in literal
    assert "x3 free" in literal
    assert literal.endswith("end")

    # the literal of a linear model reads back as the same model
    reparsed_model = lpreader.read_lp_string(literal)
    assert str(reparsed_model) == literal


def test_to_arrays():

    arrays = lpreader.read_lp_string(SCRIPT).to_arrays()

    assert arrays["sense"] == const.OBJ_SENSE_MIN
    assert arrays["names"] == ['x', 'y']
    assert np.array_equal(arrays['c'], [2, 3])
    assert np.array_equal(arrays['Q'], np.zeros(shape=(2, 2)))
    assert arrays["offset"] == 0
    assert np.array_equal(arrays['A'], [[1, 1]])
    assert np.array_equal(arrays["row_lb"], [-np.inf])
    assert np.array_equal(arrays["row_ub"], [10])
    assert np.array_equal(arrays["col_lb"], [0, 0])
    assert np.array_equal(arrays["col_ub"], [5, np.inf])
    assert not arrays["integrality"].any()


def test_to_arrays_quadratic_objective():

    arrays = lpreader.read_lp_string("min: x + [ 2 x ^ 2 + 2 x * y ] / 2\nst\n c: x + y + 3 >= 4").to_arrays()

    assert np.array_equal(arrays['c'], [1, 0])
    assert np.array_equal(arrays['Q'], [[2, 1], [1, 0]])

    # the constant of a constraint expression is moved into the row bounds
    assert np.array_equal(arrays["row_lb"], [1])
    assert np.array_equal(arrays["row_ub"], [np.inf])


def test_to_arrays_quadratic_constraint():
    model = lpreader.read_lp_string("min: x\nst\n q: [ x ^ 2 ] <= 4")
    with pytest.raises(ValueError):
        model.to_arrays()


def test_quadratic_model_literal():

    model = lpreader.read_lp_string("min: obj: 3 x + [ 2 x ^ 2 - 4 x * y ] / 2\nst\n q: x + [ y ^ 2 ] <= 4\nend")
    literal = str(model)

    assert "obj: 3 x + [ 2 x ^ 2 - 4 x * y ] / 2" in literal
    assert "q: x + [ y ^ 2 ] <= 4" in literal

    reparsed_model = lpreader.read_lp_string(literal)
    assert [(t.coef, t.var1.name, t.var2.name) for t in reparsed_model.objective.quad_terms] == [(2, 'x', 'x'),
                                                                                                  (-4, 'x', 'y')]
    assert str(reparsed_model) == literal


def test_semi_continuous_model_literal():

    model = lpreader.read_lp_string("min: x + y\ngeneral\n y\nsemi-continuous\n x y\nend")
    assert str(lpreader.read_lp_string(str(model))) == str(model)

    # without a general section, the semi-continuous section is not read back
    model = lpreader.read_lp_string("min: x + y")
    model.variables['x'].type = const.VAR_TYPE_SEMICONTINUOUS
    with pytest.warns(UserWarning):
        literal = str(model)
    assert "semi-continuous\n x" in literal
