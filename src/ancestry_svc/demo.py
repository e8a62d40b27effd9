"""
Demonstration hierarchy: two roots, a diamond, and a shuffled registry.

                                    F
                                   / \\
     A                            H   \\
    / \\                          / \\   \\
   B   C                        I   J   G
  /   / \\                        \\ /   / \\
 T   D   E                        K   L   Z

Run with:
    python -m ancestry_svc.demo
"""

from __future__ import annotations

from typing import Callable

from .hierarchy.registry import EntityRegistry
from .resolver import native_derives_from, resolve_ancestors
from .walker import narrowing, walk


class A: pass
class B(A): pass
class C(A): pass
class T(B): pass
class D(C): pass
class E(C): pass

class F: pass
class G(F): pass
class L(G): pass
class Z(G): pass
class H(F): pass
class I(H): pass
class J(H): pass
class K(I, J): pass


REGISTRY: tuple[type, ...] = (I, C, Z, G, D, F, L, C, I, A, T, B, J, K, H, E, E)


def build_demo_registry() -> EntityRegistry:
    """The demonstration classes as an entity registry, in registry order."""
    return EntityRegistry.from_classes(REGISTRY)


def print_walk(query: type, emit: Callable[[str], None] = print) -> tuple[type, ...]:
    """Walk a fresh instance of ``query`` over its ancestors, emitting each base."""
    ancestors = resolve_ancestors(REGISTRY, query, native_derives_from)
    walk(ancestors, query(), narrowing(lambda base, _: emit(f"base = {base.__name__}")))
    return ancestors


def main() -> None:
    print_walk(D)
    print("\n")
    print_walk(K)


if __name__ == "__main__":
    main()
