"""Member-name extraction from selectors.

Accepted selector shapes:
    "login"                  -> "login"
    lambda s: s.login        -> "login"
    LoginService.login       -> "login"   (method reference)
    LoginService.name        -> "name"    (property object)

Lambda selectors are read from their bytecode and are never called, so the
instance they describe does not have to exist. Only the narrow shape
`lambda p: p.member` is accepted; anything else (calls, chained access,
arithmetic, default arguments, extra parameters) is rejected.
"""

from __future__ import annotations

import dis
import inspect
from typing import Any

from automock.core.errors import SelectorParseError

# Bookkeeping opcodes that carry no meaning for the selector shape
_IGNORED_OPS = frozenset({"RESUME", "NOP", "CACHE", "EXTENDED_ARG", "COPY_FREE_VARS", "MAKE_CELL"})


def member_name(selector: Any) -> str:
    """Resolve a selector to the member name it refers to.

    Args:
        selector: Member name, lambda selector, method reference or property.

    Returns:
        The member name.

    Raises:
        SelectorParseError: If the selector shape is not recognized.
    """
    if isinstance(selector, str):
        if not selector.isidentifier():
            raise SelectorParseError(f"Not a valid member name: {selector!r}")
        return selector
    if isinstance(selector, property):
        if selector.fget is None:
            raise SelectorParseError("Property selector has no getter to name it")
        return selector.fget.__name__
    if isinstance(selector, (staticmethod, classmethod)):
        return selector.__func__.__name__
    if inspect.isfunction(selector) or inspect.ismethod(selector):
        if selector.__name__ == "<lambda>":
            return parse_lambda(selector)
        return selector.__name__
    raise SelectorParseError(
        f"Unsupported member selector of type {type(selector).__name__}"
    )


def parse_lambda(fn: Any) -> str:
    """Extract `member` from `lambda p: p.member` by inspecting its bytecode.

    Raises:
        SelectorParseError: If fn is not exactly one attribute access on its parameter.
    """
    code = fn.__code__
    flags = inspect.CO_VARARGS | inspect.CO_VARKEYWORDS
    if code.co_argcount != 1 or code.co_kwonlyargcount or code.co_flags & flags:
        raise SelectorParseError("Selector must take exactly one parameter")
    param = code.co_varnames[0]

    ops = [ins for ins in dis.get_instructions(fn) if ins.opname not in _IGNORED_OPS]
    if (
        len(ops) == 3
        and ops[0].opname.startswith("LOAD_FAST")
        and ops[0].argval == param
        and ops[1].opname == "LOAD_ATTR"
        and ops[2].opname == "RETURN_VALUE"
    ):
        return str(ops[1].argval)

    shape = " ".join(ins.opname for ins in ops)
    raise SelectorParseError(
        f"Selector must be a single member access like 'lambda {param}: {param}.name' "
        f"(got: {shape})"
    )
