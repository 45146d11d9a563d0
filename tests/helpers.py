import io

from lox.lang.error import ErrorHandler
from lox.lang.interpreter import Interpreter
from lox.lang.resolver import Resolver
from lox.lang.session import Session
from lox.syntax.parser import Parser
from lox.syntax.scanner import Scanner


def quiet_handler():
    """ErrorHandler that records reports without printing them."""
    return ErrorHandler(file=io.StringIO())


def scan(source):
    handler = quiet_handler()
    return Scanner(source, handler).scan_tokens(), handler


def parse(source):
    handler = quiet_handler()
    return Parser(Scanner(source, handler).scan_tokens(), handler).parse(), handler


def resolve(source):
    """Parses and resolves source, returning (statements, interpreter, error handler)."""
    statements, handler = parse(source)
    interpreter = Interpreter(handler, out=io.StringIO())
    Resolver(interpreter, handler).resolve(statements)
    return statements, interpreter, handler


def session():
    """Returns a command-line session whose printed output is captured in sess.interpreter.out."""
    return Session(quiet_handler(), out=io.StringIO())


def output(sess):
    return sess.interpreter.out.getvalue().splitlines()


def run(source):
    """Runs source in a fresh session, returning (printed lines, error handler)."""
    sess = session()
    sess.run(source)
    return output(sess), sess.error_handler
