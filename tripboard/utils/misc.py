import importlib.util
import itertools
import sys
from pathlib import Path
from typing import Iterator, Union


def load_module(script_path: Union[str, Path], module_name: str):
    spec = importlib.util.spec_from_file_location(module_name, str(script_path))
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def incrf(start: int = 1) -> Iterator[int]:
    """Infinite counter used to hand out entity ids."""
    return itertools.count(start)
