"""Static scope resolution. Walks the whole program once before it runs, and for every local variable reference
(including `this` and `super`) tells the interpreter how many scopes out the variable was declared. References that
aren't found in any scope are left alone and treated as globals at runtime.

Scopes are modelled as a stack of dicts of name: whether the name is fully defined yet. Declaring a name adds it as
False and defining it flips it to True, which is how a variable used in its own initializer is caught. The scopes
pushed here must match, one for one, the environments the interpreter creates:

- a block pushes a scope, like executing a block creates an environment
- a function body pushes one scope holding its parameters, like a call does
- a class pushes a scope binding `super` (only with a superclass) and then one binding `this`, like defining a
  subclass and binding a method do

Errors are reported and resolution carries on, so one pass surfaces as many as possible.
"""

from enum import Enum, auto


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    METHOD = auto()
    INITIALIZER = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:

    def __init__(self, interpreter, error_handler):
        self.interpreter = interpreter
        self.error_handler = error_handler

        self.scopes = []  # innermost scope last; empty at global scope
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve(self, statements):
        for statement in statements:
            self.resolve_node(statement)

    def resolve_node(self, node):
        getattr(self, f"visit_{node.kind}")(node)

    ##################
    #     scopes     #
    ##################

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name):
        if not self.scopes:
            return

        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.error_handler.token_error(name, "Variable with this name already declared in this scope.")
        scope[name.lexeme] = False

    def define(self, name):
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr, name):
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.interpreter.resolve(expr, depth)
                return
        # not found: assume it is global

    def resolve_function(self, function, function_type):
        enclosing_function = self.current_function
        self.current_function = function_type

        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve(function.body)
        self.end_scope()

        self.current_function = enclosing_function

    ##################
    #   statements   #
    ##################

    def visit_block(self, stmt):
        self.begin_scope()
        self.resolve(stmt.statements)
        self.end_scope()

    def visit_class(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)

        if stmt.superclass is not None:
            if stmt.superclass.name.lexeme == stmt.name.lexeme:
                self.error_handler.token_error(stmt.superclass.name, "A class cannot inherit from itself.")

            self.current_class = ClassType.SUBCLASS
            self.resolve_node(stmt.superclass)

            self.begin_scope()
            self.scopes[-1]["super"] = True

        self.begin_scope()
        self.scopes[-1]["this"] = True

        for method in stmt.methods:
            function_type = FunctionType.METHOD
            if method.name.lexeme == "init":
                function_type = FunctionType.INITIALIZER
            self.resolve_function(method, function_type)

        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def visit_expression(self, stmt):
        self.resolve_node(stmt.expression)

    def visit_function(self, stmt):
        self.declare(stmt.name)
        self.define(stmt.name)  # defined before the body, so the function can recurse
        self.resolve_function(stmt, FunctionType.FUNCTION)

    def visit_if(self, stmt):
        self.resolve_node(stmt.condition)
        self.resolve_node(stmt.then_branch)
        if stmt.else_branch is not None:
            self.resolve_node(stmt.else_branch)

    def visit_print(self, stmt):
        self.resolve_node(stmt.expression)

    def visit_return(self, stmt):
        if self.current_function is FunctionType.NONE:
            self.error_handler.token_error(stmt.keyword, "Cannot return from top-level code.")

        if stmt.value is not None:
            if self.current_function is FunctionType.INITIALIZER:
                self.error_handler.token_error(stmt.keyword, "Cannot return a value from an initializer.")
            self.resolve_node(stmt.value)

    def visit_var(self, stmt):
        self.declare(stmt.name)
        if stmt.initializer is not None:
            self.resolve_node(stmt.initializer)
        self.define(stmt.name)

    def visit_while(self, stmt):
        self.resolve_node(stmt.condition)
        self.resolve_node(stmt.body)

    ##################
    #  expressions   #
    ##################

    def visit_literal(self, expr):
        pass

    def visit_grouping(self, expr):
        self.resolve_node(expr.expression)

    def visit_unary(self, expr):
        self.resolve_node(expr.right)

    def visit_binary(self, expr):
        self.resolve_node(expr.left)
        self.resolve_node(expr.right)

    def visit_logical(self, expr):
        self.resolve_node(expr.left)
        self.resolve_node(expr.right)

    def visit_variable(self, expr):
        if self.scopes and self.scopes[-1].get(expr.name.lexeme) is False:
            self.error_handler.token_error(expr.name, "Cannot read local variable in its own initializer.")

        self.resolve_local(expr, expr.name)

    def visit_assign(self, expr):
        self.resolve_node(expr.value)
        self.resolve_local(expr, expr.name)

    def visit_call(self, expr):
        self.resolve_node(expr.callee)
        for argument in expr.arguments:
            self.resolve_node(argument)

    def visit_get(self, expr):
        self.resolve_node(expr.object)  # property names are looked up dynamically

    def visit_set(self, expr):
        self.resolve_node(expr.value)
        self.resolve_node(expr.object)

    def visit_this(self, expr):
        if self.current_class is ClassType.NONE:
            self.error_handler.token_error(expr.keyword, "Cannot use 'this' outside of a class.")
            return

        self.resolve_local(expr, expr.keyword)

    def visit_super(self, expr):
        if self.current_class is ClassType.NONE:
            self.error_handler.token_error(expr.keyword, "Cannot use 'super' outside of a class.")
        elif self.current_class is not ClassType.SUBCLASS:
            self.error_handler.token_error(expr.keyword, "Cannot use 'super' in a class with no superclass.")

        self.resolve_local(expr, expr.keyword)
