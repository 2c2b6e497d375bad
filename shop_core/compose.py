from functools import reduce
from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")


def compose(*funcs):
    """compose(f, g, h)(x) == f(g(h(x)))"""
    return reduce(lambda f, g: lambda x: f(g(x)), funcs)


def pipe(*funcs):
    """pipe(f, g, h)(x) == h(g(f(x)))"""
    return reduce(lambda f, g: lambda x: g(f(x)), funcs)


def tap(action: Callable[[T], None]) -> Callable[[Iterable[T]], Iterator[T]]:
    """Шаг конвейера: вызывает action для каждого элемента и пропускает его дальше"""

    def stage(items: Iterable[T]) -> Iterator[T]:
        for item in items:
            action(item)
            yield item

    return stage
