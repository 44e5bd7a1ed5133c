"""
Ordered handler registries.

A registry is a plain dict mapping a key to a handler, kept in registration
order. :py:mod:`dots_wallpaper.formats` relies on that order: sniffers are
tried one after another and the first match wins.

Example::

    from dots_wallpaper.registry import new_registry

    SNIFFERS, register = new_registry(attribute="format_name")

    @register("GIF")
    def _sniff_gif(header):
        return header[:6] in (b"GIF87a", b"GIF89a")

    assert _sniff_gif.format_name == "GIF"
"""

from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

T = TypeVar("T")


def new_registry(
    attribute: Optional[str] = None,
) -> Tuple[Dict[Any, Callable], Callable]:
    """
    Return an empty registry and its ``@register(key)`` decorator.

    :param attribute: when given, the key is also stored on each registered
        handler under this attribute name.
    :raises KeyError: from the decorator, when ``key`` is already taken.
    """
    registry: Dict[Any, Callable] = {}

    def register(key: Any) -> Callable[[T], T]:
        def decorator(handler: T) -> T:
            if key in registry:
                raise KeyError("Handler already registered for %r" % (key,))
            registry[key] = handler
            if attribute:
                setattr(handler, attribute, key)
            return handler

        return decorator

    return registry, register
