"""Discovery of concrete endpoint classes by scanning modules.

Scanning is a convenience on top of explicit registration: a module is
searched for classes *defined in it* that subclass ReprEndpointBase and are
not abstract. Packages are walked recursively. When no modules are given,
every module already loaded into the interpreter is scanned.
"""

import importlib
import inspect
import logging
import pkgutil
import sys
from types import ModuleType
from typing import Iterable, Iterator, List, Union

from reprendpoint.endpoint.base import ReprEndpointBase

ModuleRef = Union[ModuleType, str]

logger = logging.getLogger(__name__)


def is_endpoint_type(candidate: object) -> bool:
    """Return True for concrete strict subclasses of ReprEndpointBase."""
    return (
        inspect.isclass(candidate)
        and candidate is not ReprEndpointBase
        and issubclass(candidate, ReprEndpointBase)
        and not inspect.isabstract(candidate)
    )


def load_module(module: ModuleRef) -> ModuleType:
    """Return ``module``, importing it first when given a dotted name."""
    if isinstance(module, str):
        return importlib.import_module(module)
    return module


def iter_package_modules(module: ModuleType) -> Iterator[ModuleType]:
    """Yield ``module`` and, for packages, every submodule below it.

    Import errors in submodules propagate.
    """
    yield module
    path = getattr(module, "__path__", None)
    if path is None:
        return
    for info in pkgutil.walk_packages(path, prefix=module.__name__ + "."):
        yield importlib.import_module(info.name)


def iter_module_types(module: ModuleType) -> Iterator[type]:
    """Yield the classes defined in ``module`` itself."""
    for value in list(vars(module).values()):
        if inspect.isclass(value) and value.__module__ == module.__name__:
            yield value


def discover_endpoint_types(modules: Iterable[ModuleRef] = ()) -> List[type]:
    """Find concrete endpoint classes in ``modules``.

    Args:
        modules: Modules or dotted module names. Empty scans every loaded module.

    Returns:
        Endpoint classes in discovery order, without duplicates
    """
    requested = list(modules)
    if requested:
        to_scan: List[ModuleType] = []
        for ref in requested:
            to_scan.extend(iter_package_modules(load_module(ref)))
    else:
        to_scan = [m for m in list(sys.modules.values()) if isinstance(m, ModuleType)]

    found: List[type] = []
    seen = set()
    for module in to_scan:
        for cls in iter_module_types(module):
            if cls not in seen and is_endpoint_type(cls):
                seen.add(cls)
                found.append(cls)

    logger.debug(f"Discovered {len(found)} endpoint type(s) in {len(to_scan)} module(s)")
    return found


__all__ = [
    "discover_endpoint_types",
    "is_endpoint_type",
    "iter_module_types",
    "iter_package_modules",
    "load_module",
]
