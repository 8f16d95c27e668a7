"""
Lazy loading of third party libraries. The decompression engines import their backing library
only when they are first used, and a missing library only disables the engines that need it.
"""
from __future__ import annotations

from typing import Callable, Collection, Generic, TypeVar, cast

from compdetect.lib.exceptions import ImportMissing

Mod = TypeVar('Mod')


class MissingModule:
    """
    This class can wrap a module import that is currently missing. If any attribute of the missing
    module is accessed, it raises `compdetect.lib.exceptions.ImportMissing`.
    """
    def __init__(self, name, install=None, info=None, error=None):
        self.name = name
        self.install = install or [name]
        self.info = info
        self.error = error

    def __getattr__(self, key: str):
        if key.startswith('__') and key.endswith('__'):
            raise AttributeError(key)
        raise ImportMissing(self.name, self.install, info=self.info) from self.error

    def __bool__(self):
        return False


class LazyDependency(Generic[Mod]):
    """
    A lazily evaluated dependency. Functions decorated with `compdetect.lib.dependencies.dependency`
    are converted into this type. Calling the object returns either the return value of that
    function, which should be an imported module, or a `compdetect.lib.dependencies.MissingModule`
    wrapper which will raise a `compdetect.lib.exceptions.ImportMissing` exception as soon as any
    of its members is accessed.
    """
    _mod: Mod | None
    _imp: Callable[[], Mod]
    name: str
    dist: Collection[str]
    info: str | None

    __slots__ = (
        '_mod',
        '_imp',
        'name',
        'dist',
        'info',
    )

    def __init__(self, imp: Callable[[], Mod], name: str, dist: Collection[str], info: str | None):
        self.name = name
        self.dist = dist
        self.info = info
        self._imp = imp
        self._mod = None

    def __call__(self) -> Mod:
        if (mod := self._mod) is None:
            try:
                mod = self._imp()
            except ImportError as error:
                mod = cast(Mod, MissingModule(
                    self.name, install=self.dist or None, info=self.info, error=error))
            self._mod = mod
        return mod


def dependency(name: str, dist: Collection[str] = (), info: str | None = None):
    """
    A decorator to mark up a third party dependency. The decorated function imports the module
    and returns the module object. The `name` argument of the decorator specifies the name of the
    dependency, while `dist` lists the distribution names that provide it if they differ from
    the name. Functions that are decorated with this method turn into a
    `compdetect.lib.dependencies.LazyDependency`.
    """
    def decorator(imp: Callable[[], Mod]) -> LazyDependency[Mod]:
        return LazyDependency(imp, name, dist, info)
    return decorator
