import logging

from clang.cindex import CursorKind, TypeKind


logger = logging.getLogger(__name__)

ERROR_METHOD = "Error"

_INDIRECT_TYPES = {TypeKind.POINTER, TypeKind.LVALUEREFERENCE, TypeKind.RVALUEREFERENCE}


def _declares_error_method(decl):
    for child in decl.get_children():
        if child.kind != CursorKind.CXX_METHOD or child.spelling != ERROR_METHOD:
            continue
        if child.is_static_method():
            continue
        if not list(child.get_arguments()):
            return True
    return False


def _record_implements_error(decl, seen):
    decl = decl.get_definition() or decl
    key = decl.get_usr() or decl.spelling
    if key in seen:
        return False
    seen.add(key)

    if _declares_error_method(decl):
        return True

    for child in decl.get_children():
        if child.kind != CursorKind.CXX_BASE_SPECIFIER:
            continue
        base = child.type.get_canonical().get_declaration()
        if base.kind != CursorKind.NO_DECL_FOUND and _record_implements_error(base, seen):
            return True
    return False


def _record_declaration(clang_type):
    t = clang_type.get_canonical()
    if t.kind in _INDIRECT_TYPES:
        t = t.get_pointee().get_canonical()
    if t.kind != TypeKind.RECORD:
        return None

    decl = t.get_declaration()
    if decl.kind == CursorKind.NO_DECL_FOUND:
        return None
    return decl


def implements_error(clang_type):
    """
    Reports whether values of clang_type can report errors: the type (or what
    it points or refers to) is a class that has, directly or through a base
    class, a non-static `Error()` method without parameters.
    """
    decl = _record_declaration(clang_type)
    if decl is None:
        return False
    return _record_implements_error(decl, set())


class ErrorTypeInfo:
    """
    Answers "is this expression an error value?" for walked AST nodes.
    """

    def __init__(self):
        self._cache = {}

    def __call__(self, node):
        cursor = node.get("cursor")
        if cursor is None:
            return False

        decl = _record_declaration(cursor.type)
        if decl is None:
            return False

        # Local classes in different functions may share a spelling, never a USR.
        key = decl.get_usr()
        if not key:
            return _record_implements_error(decl, set())

        cached = self._cache.get(key)
        if cached is None:
            cached = _record_implements_error(decl, set())
            self._cache[key] = cached
            logger.debug("record '%s' implements error: %s", key, cached)
        return cached
