"""Renders AST nodes as parenthesized prefix text, e.g. `1 + 2 * 3` becomes `(+ 1 (* 2 3))`. Used for debugging
(`lox --ast`) and in tests to check the shape of parsed trees.
"""

from lox.syntax import ast


class AstPrinter:

    def print(self, node):
        return getattr(self, f"visit_{node.kind}")(node)

    def parenthesize(self, name, *parts):
        """Formats (name part part ...), printing nodes and lists of nodes recursively."""
        pieces = [name]
        for part in parts:
            if isinstance(part, ast.Node):
                pieces.append(self.print(part))
            elif isinstance(part, list):
                pieces.extend(self.print(node) for node in part)
            else:
                pieces.append(str(part))
        return "(" + " ".join(pieces) + ")"

    # expressions

    def visit_literal(self, expr):
        if expr.value is None:
            return "nil"
        if isinstance(expr.value, bool):
            return "true" if expr.value else "false"
        if isinstance(expr.value, str):
            return f"\"{expr.value}\""
        return format_number(expr.value)

    def visit_grouping(self, expr):
        return self.parenthesize("group", expr.expression)

    def visit_unary(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_logical(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable(self, expr):
        return expr.name.lexeme

    def visit_assign(self, expr):
        return self.parenthesize("=", expr.name.lexeme, expr.value)

    def visit_call(self, expr):
        return self.parenthesize("call", expr.callee, expr.arguments)

    def visit_get(self, expr):
        return self.parenthesize(".", expr.object, expr.name.lexeme)

    def visit_set(self, expr):
        return self.parenthesize("=", expr.object, expr.name.lexeme, expr.value)

    def visit_this(self, expr):
        return "this"

    def visit_super(self, expr):
        return self.parenthesize("super", expr.method.lexeme)

    # statements

    def visit_expression(self, stmt):
        return self.parenthesize(";", stmt.expression)

    def visit_print(self, stmt):
        return self.parenthesize("print", stmt.expression)

    def visit_var(self, stmt):
        if stmt.initializer is None:
            return self.parenthesize("var", stmt.name.lexeme)
        return self.parenthesize("var", stmt.name.lexeme, "=", stmt.initializer)

    def visit_block(self, stmt):
        return self.parenthesize("block", stmt.statements)

    def visit_if(self, stmt):
        if stmt.else_branch is None:
            return self.parenthesize("if", stmt.condition, stmt.then_branch)
        return self.parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_while(self, stmt):
        return self.parenthesize("while", stmt.condition, stmt.body)

    def visit_function(self, stmt):
        params = "(" + " ".join(param.lexeme for param in stmt.params) + ")"
        return self.parenthesize("fun", stmt.name.lexeme, params, stmt.body)

    def visit_return(self, stmt):
        if stmt.value is None:
            return "(return)"
        return self.parenthesize("return", stmt.value)

    def visit_class(self, stmt):
        if stmt.superclass is None:
            return self.parenthesize("class", stmt.name.lexeme, stmt.methods)
        return self.parenthesize("class", stmt.name.lexeme, "<", stmt.superclass, stmt.methods)


def format_number(number):
    """Canonical text of a number: integral values drop their trailing '.0'."""
    text = str(number)
    if text.endswith(".0"):
        text = text[:-2]
    return text
