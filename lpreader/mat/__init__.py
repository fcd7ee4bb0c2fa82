from .entity import Variable, LinTerm, QuadTerm, format_number
from .expression import Expression, Constraint, SOS
