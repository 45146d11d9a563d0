"""Tree-walking evaluator for lox. Statements are executed for their effects, expressions evaluated to values:

```
nil -> None    booleans -> bool    numbers -> float    strings -> str
functions, classes -> LoxCallable    instances -> LoxInstance
```

Local variables are looked up at the depth the resolver recorded for them (see resolver.py); anything the resolver
didn't record is global. The two must agree, so the interpreter never walks the chain for a resolved local.
"""

import math
import time

from lox.lang.callables import LoxCallable, LoxClass, LoxFunction, LoxInstance, NativeFunction, Returning
from lox.lang.environment import Environment
from lox.lang.error import LoxRuntimeError
from lox.syntax.printer import format_number
from lox.syntax.tokens import TokenType


class Interpreter:
    """Executes resolved statements. One Interpreter is one session: globals persist across calls to interpret."""

    def __init__(self, error_handler, out=None):
        self.error_handler = error_handler
        self.out = out  # stream print statements write to, None meaning stdout

        self.globals = Environment()
        self.environment = self.globals  # current environment
        # dict of node_id: scope distance, filled in by the Resolver. Never pruned: closures from earlier REPL entries
        # can still run the nodes they were resolved for
        self.locals = {}

        self.define_native("clock", 0, time.time)

    def define_native(self, name, arity, function):
        """Registers a Python function as a global builtin."""
        self.globals.define(name, NativeFunction(name, arity, function))

    def resolve(self, expr, depth):
        """Called by the Resolver: expr refers to a variable depth scopes out from where it's used."""
        self.locals[expr.node_id] = depth

    def interpret(self, statements):
        """Executes statements. The first runtime error is reported and stops the run."""
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            self.error_handler.runtime_error(error)

    ##################
    #   statements   #
    ##################

    def execute(self, stmt):
        """Executes stmt. Returns None, or a Returning if a `return` statement was executed."""
        return getattr(self, f"visit_{stmt.kind}")(stmt)

    def execute_block(self, statements, environment):
        """Executes statements with environment as the current environment, stopping early (and returning the signal)
        on a `return`. The previous environment is restored however the block is left.
        """
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                result = self.execute(statement)
                if result is not None:
                    return result
            return None
        finally:
            self.environment = previous

    def visit_block(self, stmt):
        return self.execute_block(stmt.statements, Environment(self.environment))

    def visit_class(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        environment = self.environment
        if superclass is not None:
            environment = Environment(environment)
            environment.define("super", superclass)

        methods = {}
        for method in stmt.methods:
            is_initializer = method.name.lexeme == LoxClass.INITIALIZER
            methods[method.name.lexeme] = LoxFunction(method, environment, is_initializer)

        self.environment.assign(stmt.name, LoxClass(stmt.name.lexeme, superclass, methods))

    def visit_expression(self, stmt):
        self.evaluate(stmt.expression)

    def visit_function(self, stmt):
        self.environment.define(stmt.name.lexeme, LoxFunction(stmt, self.environment))

    def visit_if(self, stmt):
        if self.is_truthy(self.evaluate(stmt.condition)):
            return self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            return self.execute(stmt.else_branch)
        return None

    def visit_print(self, stmt):
        value = self.evaluate(stmt.expression)
        print(self.stringify(value), file=self.out)

    def visit_return(self, stmt):
        value = None if stmt.value is None else self.evaluate(stmt.value)
        return Returning(value)

    def visit_var(self, stmt):
        value = None if stmt.initializer is None else self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_while(self, stmt):
        while self.is_truthy(self.evaluate(stmt.condition)):
            result = self.execute(stmt.body)
            if result is not None:
                return result
        return None

    ##################
    #  expressions   #
    ##################

    def evaluate(self, expr):
        return getattr(self, f"visit_{expr.kind}")(expr)

    def visit_literal(self, expr):
        return expr.value

    def visit_grouping(self, expr):
        return self.evaluate(expr.expression)

    def visit_unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type is TokenType.BANG:
            return not self.is_truthy(right)

        self.check_number_operands(expr.operator, right)  # MINUS
        return -right

    def visit_binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator
        op = operator.type

        if op is TokenType.EQUAL_EQUAL:
            return self.is_equal(left, right)
        if op is TokenType.BANG_EQUAL:
            return not self.is_equal(left, right)

        if op is TokenType.PLUS:
            if self.is_number(left) and self.is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

        self.check_number_operands(operator, left, right)

        if op is TokenType.MINUS:
            return left - right
        if op is TokenType.STAR:
            return left * right
        if op is TokenType.SLASH:
            return self.divide(left, right)
        if op is TokenType.GREATER:
            return left > right
        if op is TokenType.GREATER_EQUAL:
            return left >= right
        if op is TokenType.LESS:
            return left < right
        if op is TokenType.LESS_EQUAL:
            return left <= right

        raise LoxRuntimeError(operator, f"Unknown operator '{operator.lexeme}'.")

    def visit_logical(self, expr):
        left = self.evaluate(expr.left)

        if expr.operator.type is TokenType.OR:
            if self.is_truthy(left):
                return left
        elif not self.is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def visit_variable(self, expr):
        return self.look_up_variable(expr.name, expr)

    def visit_assign(self, expr):
        value = self.evaluate(expr.value)

        distance = self.locals.get(expr.node_id)
        if distance is not None:
            self.environment.assign_at(distance, expr.name, value)
        else:
            self.globals.assign(expr.name, value)

        return value

    def visit_call(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")

        if len(arguments) != callee.arity:
            raise LoxRuntimeError(expr.paren, f"Expected {callee.arity} arguments but got {len(arguments)}.")

        return callee.call(self, arguments)

    def visit_get(self, expr):
        obj = self.evaluate(expr.object)
        if isinstance(obj, LoxInstance):
            return obj.get(expr.name)

        raise LoxRuntimeError(expr.name, "Only instances have properties.")

    def visit_set(self, expr):
        obj = self.evaluate(expr.object)
        if not isinstance(obj, LoxInstance):
            raise LoxRuntimeError(expr.name, "Only instances have fields.")

        value = self.evaluate(expr.value)
        obj.set(expr.name, value)
        return value

    def visit_this(self, expr):
        return self.look_up_variable(expr.keyword, expr)

    def visit_super(self, expr):
        distance = self.locals[expr.node_id]
        superclass = self.environment.get_at(distance, "super")
        instance = self.environment.get_at(distance - 1, "this")  # `this` is always bound one scope inside `super`

        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise LoxRuntimeError(expr.method, f"Undefined property '{expr.method.lexeme}'.")

        return method.bind(instance)

    ##################
    #    helpers     #
    ##################

    def look_up_variable(self, name, expr):
        distance = self.locals.get(expr.node_id)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    @staticmethod
    def is_truthy(value):
        """nil and false are falsy, everything else (including 0 and "") is truthy."""
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return True

    @staticmethod
    def is_equal(left, right):
        if left is None and right is None:
            return True
        if left is None or right is None:
            return False
        if isinstance(left, bool) != isinstance(right, bool):  # Python thinks 1.0 == True
            return False
        return left == right

    @staticmethod
    def is_number(value):
        return isinstance(value, float)

    @staticmethod
    def check_number_operands(operator, *operands):
        if all(Interpreter.is_number(operand) for operand in operands):
            return
        if len(operands) == 1:
            raise LoxRuntimeError(operator, "Operand must be a number.")
        raise LoxRuntimeError(operator, "Operands must be numbers.")

    @staticmethod
    def divide(left, right):
        """IEEE-754 division: dividing by zero gives an infinity or nan instead of an error."""
        try:
            return left / right
        except ZeroDivisionError:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)

    @staticmethod
    def stringify(value):
        """Canonical text of a value, as printed by `print`."""
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            return format_number(value)
        return str(value)
