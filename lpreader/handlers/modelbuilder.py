from lpreader.mat import Variable
from lpreader.prob.model import Model


class ModelBuilder:

    def __init__(self, model: Model = None):
        self.model: Model = model if model is not None else Model()

    def get_variable(self, name: str) -> Variable:
        """
        Retrieve the variable with the given name, creating it with default bounds [0, inf) and continuous type on its
        first reference.
        """
        var = self.model.variables.get(name, None)
        if var is None:
            var = Variable(name)
            self.model.variables[name] = var
        return var
