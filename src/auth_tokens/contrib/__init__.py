# ruff: noqa: E402, F401
"""
Contrib modules for library integrations.

Available integrations (installed conditionally based on dependencies):
- dependency_injector: TokenContainer for DI
"""

__all__ = []

# Dependency Injector integration
try:
    from auth_tokens.contrib.dependency_injector import TokenContainer

    HAS_DEPENDENCY_INJECTOR = True
    __all__.append("TokenContainer")
except ImportError:
    HAS_DEPENDENCY_INJECTOR = False
    TokenContainer = None
