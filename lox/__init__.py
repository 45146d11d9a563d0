"""Tree-walking interpreter for the lox scripting language.

Basic program flow, run once per script or REPL entry (see lox/lang/session.py):
    1. Scanner: source text -> flat list of tokens (lox/syntax/scanner.py)
    2. Parser: tokens -> list of statements, using recursive descent (lox/syntax/parser.py)
    3. Resolver: static pass that records how many scopes out each local variable lives (lox/lang/resolver.py)
    4. Interpreter: walks the statements and evaluates them against a chain of environments (lox/lang/interpreter.py)

A stage only runs if the stages before it reported no errors.
"""

__version__ = "0.1.0"
