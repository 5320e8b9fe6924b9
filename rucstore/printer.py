"""Indented text rendering of syntax trees."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, Optional, TextIO

from rucstore.ast import (
    BinaryExpr,
    Col,
    ColDef,
    CreateIndex,
    CreateTable,
    DeleteStmt,
    DescTable,
    DropIndex,
    DropTable,
    FloatLit,
    Help,
    InsertStmt,
    IntLit,
    SelectStmt,
    SetClause,
    ShowTables,
    StringLit,
    SvCompOp,
    SvType,
    TreeNode,
    TxnAbort,
    TxnBegin,
    TxnCommit,
    TxnRollback,
    TypeLen,
    UpdateStmt,
)

_TYPE_NAMES = {
    SvType.INT: "INT",
    SvType.FLOAT: "FLOAT",
    SvType.STRING: "STRING",
}

_OP_NAMES = {
    SvCompOp.EQ: "==",
    SvCompOp.NE: "!=",
    SvCompOp.LT: "<",
    SvCompOp.GT: ">",
    SvCompOp.LE: "<=",
    SvCompOp.GE: ">=",
}

_STEP = 2


def _val(value: object, offset: int) -> str:
    text = format(value, "g") if isinstance(value, float) else str(value)
    return " " * offset + text


def _val_list(values: Iterable[object], offset: int) -> Iterator[str]:
    yield " " * offset + "LIST"
    for value in values:
        yield _val(value, offset + _STEP)


def _node_list(nodes: Iterable[TreeNode], offset: int) -> Iterator[str]:
    yield " " * offset + "LIST"
    for node in nodes:
        yield from _node(node, offset + _STEP)


def _node(node: TreeNode, offset: int) -> Iterator[str]:
    pad = " " * offset
    inner = offset + _STEP
    if isinstance(node, Help):
        yield pad + "HELP"
    elif isinstance(node, ShowTables):
        yield pad + "SHOW_TABLES"
    elif isinstance(node, CreateTable):
        yield pad + "CREATE_TABLE"
        yield _val(node.tab_name, inner)
        yield from _node_list(node.fields, inner)
    elif isinstance(node, DropTable):
        yield pad + "DROP_TABLE"
        yield _val(node.tab_name, inner)
    elif isinstance(node, DescTable):
        yield pad + "DESC_TABLE"
        yield _val(node.tab_name, inner)
    elif isinstance(node, (CreateIndex, DropIndex)):
        yield pad + ("CREATE_INDEX" if isinstance(node, CreateIndex) else "DROP_INDEX")
        yield _val(node.tab_name, inner)
        for col_name in node.col_names:
            yield _val(col_name, inner)
    elif isinstance(node, ColDef):
        yield pad + "COL_DEF"
        yield _val(node.col_name, inner)
        yield from _node(node.type_len, inner)
    elif isinstance(node, Col):
        yield pad + "COL"
        yield _val(node.tab_name, inner)
        yield _val(node.col_name, inner)
    elif isinstance(node, TypeLen):
        yield pad + "TYPE_LEN"
        yield _val(_TYPE_NAMES[node.type], inner)
        yield _val(node.len, inner)
    elif isinstance(node, IntLit):
        yield pad + "INT_LIT"
        yield _val(node.val, inner)
    elif isinstance(node, FloatLit):
        yield pad + "FLOAT_LIT"
        yield _val(float(node.val), inner)
    elif isinstance(node, StringLit):
        yield pad + "STRING_LIT"
        yield _val(node.val, inner)
    elif isinstance(node, SetClause):
        yield pad + "SET_CLAUSE"
        yield _val(node.col_name, inner)
        yield from _node(node.val, inner)
    elif isinstance(node, BinaryExpr):
        yield pad + "BINARY_EXPR"
        yield from _node(node.lhs, inner)
        yield _val(_OP_NAMES[node.op], inner)
        yield from _node(node.rhs, inner)
    elif isinstance(node, InsertStmt):
        yield pad + "INSERT"
        yield _val(node.tab_name, inner)
        yield from _node_list(node.vals, inner)
    elif isinstance(node, DeleteStmt):
        yield pad + "DELETE"
        yield _val(node.tab_name, inner)
        yield from _node_list(node.conds, inner)
    elif isinstance(node, UpdateStmt):
        yield pad + "UPDATE"
        yield _val(node.tab_name, inner)
        yield from _node_list(node.set_clauses, inner)
        yield from _node_list(node.conds, inner)
    elif isinstance(node, SelectStmt):
        yield pad + "SELECT"
        yield from _node_list(node.cols, inner)
        yield from _val_list(node.tabs, inner)
        yield from _node_list(node.conds, inner)
    elif isinstance(node, TxnBegin):
        yield pad + "BEGIN"
    elif isinstance(node, TxnCommit):
        yield pad + "COMMIT"
    elif isinstance(node, TxnAbort):
        yield pad + "ABORT"
    elif isinstance(node, TxnRollback):
        yield pad + "ROLLBACK"
    else:
        raise TypeError(f"cannot print syntax tree node {node!r}")


def format_tree(node: TreeNode) -> str:
    """Render a syntax tree as indented text, one item per line."""
    return "".join(line + "\n" for line in _node(node, 0))


def print_tree(node: TreeNode, file: Optional[TextIO] = None) -> None:
    """Write the rendering of a syntax tree to ``file`` (standard output by default)."""
    (file if file is not None else sys.stdout).write(format_tree(node))