"""Abstract syntax tree for lox. Two disjoint node families, expressions and statements, produced only by the parser
and never mutated afterwards.

Expressions carry a `node_id`, an integer unique across the process. The resolver's hop-count table is keyed by it,
so two references to `x` in different places resolve independently even though they compare equal. Equality (`==`)
is structural and ignores `node_id`, which is what makes repeated parses of the same source comparable.

Each node class has a `kind` (its lowercased class name) used by the passes to dispatch to `visit_<kind>`.
"""

from dataclasses import dataclass
from itertools import count
from typing import List, Optional

from lox.syntax.tokens import Token

_node_ids = count()


class Node:
    """Superclass of every AST node."""
    kind = "node"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.kind = cls.__name__.lower()


class Expr(Node):

    def __post_init__(self):
        self.node_id = next(_node_ids)


class Stmt(Node):
    pass


##################
#  expressions   #
##################

@dataclass
class Literal(Expr):
    value: object


@dataclass
class Grouping(Expr):
    expression: Expr


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Logical(Expr):
    """Short-circuiting `and`/`or`."""
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Variable(Expr):
    name: Token


@dataclass
class Assign(Expr):
    name: Token
    value: Expr


@dataclass
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used to locate runtime errors
    arguments: List[Expr]


@dataclass
class Get(Expr):
    object: Expr
    name: Token


@dataclass
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass
class This(Expr):
    keyword: Token


@dataclass
class Super(Expr):
    keyword: Token
    method: Token


##################
#   statements   #
##################

@dataclass
class Expression(Stmt):
    expression: Expr


@dataclass
class Print(Stmt):
    expression: Expr


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None


@dataclass
class Block(Stmt):
    statements: List[Stmt]


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass
class Function(Stmt):
    name: Token
    params: List[Token]
    body: List[Stmt]


@dataclass
class Return(Stmt):
    keyword: Token
    value: Optional[Expr] = None


@dataclass
class Class(Stmt):
    name: Token
    superclass: Optional[Variable]
    methods: List[Function]
