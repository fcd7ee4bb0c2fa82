from lpreader.prob.model import Model
from lpreader.handlers.modelbuilder import ModelBuilder
from lpreader.parsing.lpparser import LPParser
import lpreader.util.util as util


def read_lp(file_name: str,
            working_dir_path: str = None,
            name: str = None) -> Model:
    """
    Build a model from an LP file. Files with the extension '.gz' are decompressed on the fly.
    :param file_name: name of or path to the LP file
    :param working_dir_path: directory containing the file, if the file name is relative to it
    :param name: name of the model, the base name of the file by default
    :return: the parsed model
    """

    if name is None:
        name = util.get_base_name(file_name)

    builder = ModelBuilder(Model(name=name))

    with util.open_text_file(working_dir_path, file_name) as f:
        return LPParser(builder).parse(f)


def read_lp_string(literal: str, name: str = None) -> Model:
    builder = ModelBuilder(Model(name=name))
    return LPParser(builder).parse(literal.splitlines())
