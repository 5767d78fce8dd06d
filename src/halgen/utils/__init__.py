import importlib
import typing


def import_string(path: str) -> typing.Any:
    """
    Imports an object designated by a dotted path, either ``package.module:Name``
    or ``package.module.Name``.

    :raises ImportError: if the module cannot be imported.
    :raises AttributeError: if the module has no such attribute.
    """
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        raise ImportError(f"{path!r} is not a valid import path")
    retval: typing.Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        retval = getattr(retval, attr)
    return retval
