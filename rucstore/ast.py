"""Syntax tree nodes produced by the SQL parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class JoinType(Enum):
    """Kind of join between two tables."""

    INNER = 0
    LEFT = 1
    RIGHT = 2
    FULL = 3


class SvType(Enum):
    """Column data type named in a column definition."""

    INT = 0
    FLOAT = 1
    STRING = 2


class SvCompOp(Enum):
    """Comparison operator of a condition."""

    EQ = 0
    NE = 1
    LT = 2
    GT = 3
    LE = 4
    GE = 5


class OrderByDir(Enum):
    """Sort direction of an ORDER BY clause."""

    DEFAULT = 0
    ASC = 1
    DESC = 2


class TreeNode:
    """Base class of every syntax tree node."""


@dataclass
class Help(TreeNode):
    """HELP statement."""


@dataclass
class ShowTables(TreeNode):
    """SHOW TABLES statement."""


@dataclass
class TxnBegin(TreeNode):
    """BEGIN statement."""


@dataclass
class TxnCommit(TreeNode):
    """COMMIT statement."""


@dataclass
class TxnAbort(TreeNode):
    """ABORT statement."""


@dataclass
class TxnRollback(TreeNode):
    """ROLLBACK statement."""


@dataclass
class TypeLen(TreeNode):
    """A column type together with its byte length."""

    type: SvType
    len: int


class Field(TreeNode):
    """Base class of the items inside a CREATE TABLE field list."""


@dataclass
class ColDef(Field):
    """Definition of one column."""

    col_name: str
    type_len: TypeLen


@dataclass
class CreateTable(TreeNode):
    """CREATE TABLE statement."""

    tab_name: str
    fields: List[Field] = field(default_factory=list)


@dataclass
class DropTable(TreeNode):
    """DROP TABLE statement."""

    tab_name: str


@dataclass
class DescTable(TreeNode):
    """DESC statement."""

    tab_name: str


@dataclass
class CreateIndex(TreeNode):
    """CREATE INDEX statement over one or more columns."""

    tab_name: str
    col_names: List[str] = field(default_factory=list)


@dataclass
class DropIndex(TreeNode):
    """DROP INDEX statement over one or more columns."""

    tab_name: str
    col_names: List[str] = field(default_factory=list)


class Expr(TreeNode):
    """Base class of expressions."""


class Value(Expr):
    """Base class of literal values."""


@dataclass
class IntLit(Value):
    """Integer literal."""

    val: int


@dataclass
class FloatLit(Value):
    """Floating point literal."""

    val: float


@dataclass
class StringLit(Value):
    """String literal."""

    val: str


@dataclass
class Col(Expr):
    """Column reference, optionally qualified by a table name."""

    tab_name: str
    col_name: str


@dataclass
class SetClause(TreeNode):
    """One ``column = value`` assignment of an UPDATE."""

    col_name: str
    val: Value


@dataclass
class BinaryExpr(TreeNode):
    """Comparison between a column and an expression."""

    lhs: Col
    op: SvCompOp
    rhs: Expr


@dataclass
class OrderBy(TreeNode):
    """ORDER BY clause on a single column."""

    cols: Col
    orderby_dir: OrderByDir = OrderByDir.DEFAULT


@dataclass
class InsertStmt(TreeNode):
    """INSERT statement."""

    tab_name: str
    vals: List[Value] = field(default_factory=list)


@dataclass
class DeleteStmt(TreeNode):
    """DELETE statement."""

    tab_name: str
    conds: List[BinaryExpr] = field(default_factory=list)


@dataclass
class UpdateStmt(TreeNode):
    """UPDATE statement."""

    tab_name: str
    set_clauses: List[SetClause] = field(default_factory=list)
    conds: List[BinaryExpr] = field(default_factory=list)


@dataclass
class JoinExpr(TreeNode):
    """Join of two tables under a list of conditions."""

    left: str
    right: str
    conds: List[BinaryExpr] = field(default_factory=list)
    type: JoinType = JoinType.INNER


@dataclass
class SelectStmt(TreeNode):
    """SELECT statement."""

    cols: List[Col] = field(default_factory=list)
    tabs: List[str] = field(default_factory=list)
    conds: List[BinaryExpr] = field(default_factory=list)
    order: Optional[OrderBy] = None
    jointree: List[JoinExpr] = field(default_factory=list)

    @property
    def has_sort(self) -> bool:
        """Whether the statement carries an ORDER BY clause."""
        return self.order is not None