from lpreader.mat import Variable, LinTerm, QuadTerm, Expression, Constraint, SOS
from lpreader.prob.model import Model
from lpreader.handlers.modelbuilder import ModelBuilder
from lpreader.handlers.lpfilereader import read_lp, read_lp_string
from lpreader.parsing.lpparser import LPParser

__version__ = "0.1.0"
