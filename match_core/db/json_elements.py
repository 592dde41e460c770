"""Element-wise containment over JSON list columns.

``cast(col, Text).ilike(...)`` would search the serialized list, so JSON
punctuation and text spanning two elements would match.  ``any_element_ilike``
renders an ``EXISTS`` over the array's text elements instead, using each
dialect's own table function.
"""

from __future__ import annotations

from sqlalchemy.exc import CompileError
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import Boolean

from match_core.services.search_normalization import LIKE_ESCAPE


class any_element_ilike(FunctionElement):
    """True when some element of the JSON array ``column`` ILIKEs ``pattern``.

    ``pattern`` comes from ``contains_pattern`` (escaped with ``LIKE_ESCAPE``).
    NULL columns and non-array values never match.
    """

    type = Boolean()
    name = "any_element_ilike"
    inherit_cache = True


def _operands(element: any_element_ilike, compiler, **kw) -> tuple[str, str, str]:
    column, pattern = element.clauses.clauses
    return compiler.process(column, **kw), compiler.process(pattern, **kw), LIKE_ESCAPE


@compiles(any_element_ilike)
def _compile_default(element, compiler, **kw):
    raise CompileError(f"any_element_ilike is not supported on dialect {compiler.dialect.name!r}")


@compiles(any_element_ilike, "postgresql")
def _compile_postgresql(element, compiler, **kw):
    column, pattern, escape = _operands(element, compiler, **kw)
    return (
        "EXISTS (SELECT 1 FROM json_array_elements_text("
        f"CASE WHEN json_typeof({column}) = 'array' THEN {column} END) AS elem(value) "
        f"WHERE elem.value ILIKE {pattern} ESCAPE '{escape}')"
    )


@compiles(any_element_ilike, "sqlite")
def _compile_sqlite(element, compiler, **kw):
    column, pattern, escape = _operands(element, compiler, **kw)
    return (
        "EXISTS (SELECT 1 FROM json_each("
        f"CASE WHEN json_type({column}) = 'array' THEN {column} END) AS elem "
        f"WHERE lower(elem.value) LIKE lower({pattern}) ESCAPE '{escape}')"
    )
