"""
Shared third party dependencies. Each shared dependency is stored in a submodule; importing the
submodule yields a `compdetect.lib.dependencies.LazyDependency` that resolves to the library.
"""
