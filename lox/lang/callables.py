"""Callable values and objects of the lox runtime: user functions (and bound methods), native functions, classes and
the instances they create.

Every callable exposes `arity` and `call(interpreter, arguments)`; the interpreter checks the argument count against
arity before calling, so `call` can assume it is right.
"""

from abc import ABC, abstractmethod

from lox.lang.environment import Environment
from lox.lang.error import LoxRuntimeError


class Returning:
    """Result of executing a `return` statement. Statements normally execute to None; a Returning is passed back up
    through enclosing blocks and loops until the function call that owns it takes its value.
    """
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"Returning({self.value!r})"


class LoxCallable(ABC):

    @property
    @abstractmethod
    def arity(self):
        """Number of arguments call expects."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Calls self with a list of already-evaluated arguments and returns the result."""


class LoxFunction(LoxCallable):
    """User-defined function or method, closing over the environment it was declared in."""

    def __init__(self, declaration, closure, is_initializer=False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        environment = Environment(self.closure)  # the closure, not the caller's environment
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        result = interpreter.execute_block(self.declaration.body, environment)

        if self.is_initializer:
            return self.closure.get_at(0, "this")
        if isinstance(result, Returning):
            return result.value
        return None

    def bind(self, instance):
        """Returns a copy of this method whose closure additionally binds `this` to instance."""
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"


class NativeFunction(LoxCallable):
    """Builtin implemented in Python. function is called with the evaluated arguments."""

    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    @property
    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(*arguments)

    def __str__(self):
        return "<native fn>"


class LoxClass(LoxCallable):
    """Class value. Calling it creates an instance and runs `init`, if there is one."""
    INITIALIZER = "init"

    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = methods  # dict of name: LoxFunction

    def find_method(self, name):
        """Looks up an unbound method on this class, then up the superclass chain. Returns None if there isn't one."""
        klass = self
        while klass is not None:
            if name in klass.methods:
                return klass.methods[name]
            klass = klass.superclass
        return None

    @property
    def arity(self):
        initializer = self.find_method(LoxClass.INITIALIZER)
        return 0 if initializer is None else initializer.arity

    def call(self, interpreter, arguments):
        instance = LoxInstance(self)

        initializer = self.find_method(LoxClass.INITIALIZER)
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)

        return instance

    def __str__(self):
        return self.name


class LoxInstance:
    """Instance of a LoxClass. Fields are created on first assignment and shadow methods of the same name."""

    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    def get(self, name):
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise LoxRuntimeError(name, f"Undefined property '{name.lexeme}'.")

    def set(self, name, value):
        self.fields[name.lexeme] = value

    def __str__(self):
        return f"{self.klass.name} instance"
