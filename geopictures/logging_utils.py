from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxset = 8
_repr.maxdict = 8


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 300) -> str:
    if isinstance(value, np.ndarray):
        if value.size <= max_items:
            return f"ndarray({value.tolist()!r})"
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"

    if isinstance(value, (set, frozenset)):
        # handle sets are unordered; sort them so traces are stable
        try:
            items = sorted(value)
        except TypeError:
            items = list(value)
        shown = ", ".join(_safe_repr(item) for item in items[:max_items])
        more = ", ..." if len(items) > max_items else ""
        return "{" + shown + more + "}"

    if isinstance(value, (list, tuple)):
        shown = ", ".join(_safe_repr(item) for item in value[:max_items])
        more = ", ..." if len(value) > max_items else ""
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        return f"{open_br}{shown}{more}{close_br}"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - repr of foreign objects
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = []
    if args:
        parts.append("args=[" + ", ".join(_safe_repr(arg) for arg in args) + "]")
    if kwargs:
        parts.append("kwargs={" + ", ".join(f"{key}={_safe_repr(val)}" for key, val in kwargs.items()) + "}")
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that emits DEBUG logs on entry, exit and exception."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            enabled = logger.isEnabledFor(logging.DEBUG)
            if enabled:
                logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                if enabled:
                    logger.debug("Exception in %s: %s", qualname, exc)
                raise
            if enabled:
                if log_result:
                    logger.debug("Exiting %s -> %s", qualname, _safe_repr(result))
                else:
                    logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def _apply_debug_logging_to_class(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr_name, attr_value in list(cls.__dict__.items()):
        if attr_name.startswith("__") and attr_name.endswith("__"):
            continue
        qualified = f"{cls.__name__}.{attr_name}"
        if attr_name in skip or qualified in skip:
            continue
        if isinstance(attr_value, staticmethod):
            func = attr_value.__func__
            if getattr(func, "__module__", None) == cls.__module__:
                setattr(cls, attr_name, staticmethod(debug_log_call(logger, name=qualified)(func)))
        elif isinstance(attr_value, classmethod):
            func = attr_value.__func__
            if getattr(func, "__module__", None) == cls.__module__:
                setattr(cls, attr_name, classmethod(debug_log_call(logger, name=qualified)(func)))
        elif inspect.isfunction(attr_value) and getattr(attr_value, "__module__", None) == cls.__module__:
            setattr(cls, attr_name, debug_log_call(logger, name=qualified)(attr_value))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
    wrap_methods: bool = True,
) -> None:
    """Wrap the functions and methods defined in a module with DEBUG call tracing.

    Only callables whose ``__module__`` is the namespace's own module are
    wrapped, so re-exported helpers keep their original logger.  Names in
    ``skip`` (plain or ``Class.method``) are left alone; use it for tight
    inner loops.
    """

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):  # pragma: no cover - exec'd namespaces
        module_name = None
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name in skip_set:
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif wrap_methods and inspect.isclass(value) and getattr(value, "__module__", None) == module_name:
            _apply_debug_logging_to_class(value, logger, skip_set)
