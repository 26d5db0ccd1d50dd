import logging
import os

from clang.cindex import CursorKind


logger = logging.getLogger(__name__)

_REF_KINDS = {CursorKind.DECL_REF_EXPR, CursorKind.MEMBER_REF_EXPR}


def _skip_implicit(cursor):
    # Implicit casts and materialized temporaries surface as single-child
    # UNEXPOSED_EXPR cursors around the expression that was actually written.
    while cursor.kind == CursorKind.UNEXPOSED_EXPR:
        children = list(cursor.get_children())
        if len(children) != 1:
            break
        cursor = children[0]
    return cursor


def _name_span(cursor):
    start = cursor.location.offset
    return start, start + len(cursor.spelling.encode("utf-8"))


def walk_ast(cursor, nodes, *, target_file=None, _realpath_cache=None):
    """
    Recursively walks a Clang AST cursor and collects all nodes
    into a flat, pre-order list for the rule engine.

    Each node also keeps its children for rules that need structure; call
    nodes additionally split them into "callee" and "args", and references
    carry the byte span of their identifier in "name_span".
    """

    if _realpath_cache is None:
        _realpath_cache = {}

    cursor_file = cursor.location.file.name if cursor.location.file else None
    if target_file and cursor_file:
        cached = _realpath_cache.get(cursor_file)
        if cached is None:
            cached = os.path.realpath(cursor_file)
            _realpath_cache[cursor_file] = cached
        if cached != target_file:
            return None

    is_call = cursor.kind == CursorKind.CALL_EXPR
    node = {
        "kind": cursor.kind,
        "name": cursor.spelling,
        "line": cursor.location.line,
        "column": cursor.location.column,
        "extent": (cursor.extent.start.offset, cursor.extent.end.offset),
        "callee": None,
        "args": [],
        "children": [],
        "cursor": cursor,
    }
    if cursor.kind in _REF_KINDS:
        node["name_span"] = _name_span(cursor)

    nodes.append(node)
    logger.debug("visiting %s '%s' on line %s", cursor.kind, cursor.spelling, node["line"])

    arg_cursors = list(cursor.get_arguments()) if is_call else []
    for child in cursor.get_children():
        is_arg = child in arg_cursors
        child_node = walk_ast(
            _skip_implicit(child),
            nodes,
            target_file=target_file,
            _realpath_cache=_realpath_cache,
        )
        if child_node is None:
            continue

        node["children"].append(child_node)
        if is_arg:
            node["args"].append(child_node)
        elif is_call and node["callee"] is None:
            node["callee"] = child_node

    return node
