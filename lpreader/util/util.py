import gzip
import os
from typing import TextIO


# File I/O
# ----------------------------------------------------------------------------------------------------------------------

def get_file_path(path: str, file_name: str = None) -> str:
    if path is None:
        return file_name
    elif file_name is None:
        return path
    else:
        return os.path.join(path, file_name)


def get_base_name(file_name: str) -> str:
    base_name = os.path.basename(file_name)
    if base_name.endswith(".gz"):
        base_name = base_name[:-3]
    return os.path.splitext(base_name)[0]


def open_text_file(path: str, file_name: str = None) -> TextIO:
    file_path = get_file_path(path, file_name)
    if file_path.endswith(".gz"):
        return gzip.open(file_path, "rt")
    return open(file_path, 'r')
