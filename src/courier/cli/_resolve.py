"""Import resolution — resolves ``"module:attribute"`` strings to route tables.

Shared utility used by ``courier routes`` and ``courier match`` to locate
a ``Dispatcher`` or ``RouteTable`` from a user-supplied import string.
"""

import importlib

from courier.dispatch.dispatcher import Dispatcher
from courier.routing.table import RouteTable


def resolve_table(import_string: str) -> RouteTable:
    """Resolve an import string to a route table.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"dispatcher"`` (e.g. ``"myapp"`` resolves
    to ``myapp.dispatcher``).

    The attribute may be a ``Dispatcher``, a ``RouteTable``, or a factory
    function returning either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is neither a Dispatcher nor a
            RouteTable, or the factory raised.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "dispatcher"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    # Support factory functions - call them if they're not already a table
    if callable(obj) and not isinstance(obj, Dispatcher | RouteTable):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Dispatcher):
        return obj.table
    if isinstance(obj, RouteTable):
        return obj

    msg = (
        f"{import_string!r} resolved to {type(obj).__name__}, "
        "not a courier Dispatcher or RouteTable"
    )
    raise TypeError(msg)
