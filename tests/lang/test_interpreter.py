import unittest

from lox.lang.error import LoxRuntimeError
from tests.helpers import output, run, session


class ExpressionTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            "1 + 2 * 3": "7",
            "2 - 3 - 4": "-5",
            "10 / 4": "2.5",
            "1.5 * 2": "3",
            "-(3)": "-3",
            "0.1 + 0.2": "0.30000000000000004",
            "\"a\" + \"b\"": "ab",
            "nil == nil": "true",
            "0 == false": "false",
            "nil == false": "false",
            "\"a\" == \"a\"": "true",
            "\"1\" == 1": "false",
            "1 != 2": "true",
            "1 < 2": "true",
            "2 <= 2": "true",
            "3 > 2 == true": "true",
            "!nil": "true",
            "!0": "false",
            "!!\"\"": "true",
        }
        for case, expected in cases.items():
            lines, handler = run(f"print {case};")
            self.assertFalse(handler.had_error or handler.had_runtime_error, case)
            self.assertEqual([expected], lines, case)

    def test_division(self):
        cases = {
            "1 / 0": "inf",
            "-1 / 0": "-inf",
            "0 / 0": "nan",
        }
        for case, expected in cases.items():
            lines, handler = run(f"print {case};")
            self.assertFalse(handler.had_runtime_error, case)
            self.assertEqual([expected], lines, case)

    def test_logical(self):
        cases = {
            "nil or \"x\"": "x",
            "1 or nil": "1",
            "false and 1": "false",
            "1 and 2": "2",
            "nil or false": "false",
            "nil and undefined": "nil",  # right operand never evaluated
            "true or undefined": "true",
        }
        for case, expected in cases.items():
            lines, handler = run(f"print {case};")
            self.assertFalse(handler.had_runtime_error, case)
            self.assertEqual([expected], lines, case)

    def test_stringify(self):
        lines, __ = run("fun f() {} class A {} print f; print clock; print A; print A(); print nil; print 100;")
        self.assertEqual(["<fn f>", "<native fn>", "A", "A instance", "nil", "100"], lines)

    def test_clock(self):
        lines, handler = run("var t = clock(); print t > 0; print clock() >= t;")
        self.assertEqual(["true", "true"], lines)


class RuntimeErrorTestCase(unittest.TestCase):

    def test_errors(self):
        cases = {
            "print 1 + \"a\";": "Operands must be two numbers or two strings.",
            "print -\"a\";": "Operand must be a number.",
            "print 1 < nil;": "Operands must be numbers.",
            "print \"a\" * 2;": "Operands must be numbers.",
            "print x;": "Undefined variable 'x'.",
            "x = 1;": "Undefined variable 'x'.",
            "\"s\"();": "Can only call functions and classes.",
            "fun f(a) {} f();": "Expected 1 arguments but got 0.",
            "clock(1);": "Expected 0 arguments but got 1.",
            "print 1.x;": "Only instances have properties.",
            "var a = 1; a.x = 2;": "Only instances have fields.",
            "class A {} print A().x;": "Undefined property 'x'.",
            "var NotClass = 1; class B < NotClass {}": "Superclass must be a class.",
            "class A { init(a, b) {} } A(1);": "Expected 2 arguments but got 1.",
            "class A {} A(1);": "Expected 0 arguments but got 1.",
            "class A {} class B < A { m() { super.missing(); } } B().m();": "Undefined property 'missing'.",
        }
        for case, expected in cases.items():
            __, handler = run(case)
            self.assertTrue(handler.had_runtime_error, case)
            self.assertFalse(handler.had_error, case)
            self.assertEqual([f"{expected}\n[line 1]"], handler.reports, case)

    def test_error_line(self):
        __, handler = run("var a = 1;\n\nprint a +\n  nil;")
        self.assertEqual(["Operands must be two numbers or two strings.\n[line 3]"], handler.reports)

    def test_error_stops_run(self):
        lines, handler = run("print 1; print nil + 1; print 2;")
        self.assertTrue(handler.had_runtime_error)
        self.assertEqual(["1"], lines)

    def test_session_survives_errors(self):
        sess = session()
        sess.run("var a = \"global\"; { var b = 1; fun f() { print nil + b; } f(); }")
        self.assertTrue(sess.error_handler.had_runtime_error)
        self.assertIs(sess.interpreter.globals, sess.interpreter.environment)

        sess.error_handler.reset()
        sess.run("var c = 2; print a; print c;")
        self.assertFalse(sess.error_handler.had_runtime_error)
        self.assertEqual(["global", "2"], output(sess))

    def test_stack_overflow(self):
        sess = session()
        with sess.error_handler:
            sess.run("fun f() { f(); } f();")

        self.assertTrue(sess.error_handler.had_runtime_error)
        self.assertEqual(["Stack overflow."], sess.error_handler.reports)
        self.assertIs(sess.interpreter.globals, sess.interpreter.environment)

    def test_deep_recursion(self):
        sess = session()
        with sess.error_handler:
            sess.run("fun f(n) { if (n == 0) return \"bottom\"; return f(n - 1); } print f(1000);")

        self.assertFalse(sess.error_handler.had_runtime_error)
        self.assertEqual([], sess.error_handler.reports)
        self.assertEqual(["bottom"], output(sess))

    def test_runtime_error_token(self):
        error = LoxRuntimeError(None, "Stack overflow.")
        self.assertEqual("Stack overflow.", error.msg)
        self.assertEqual("Stack overflow.", str(error))


class StatementTestCase(unittest.TestCase):

    def test_programs(self):
        cases = {
            "var a; print a;": ["nil"],
            "var a = 1; a = a + 1; print a;": ["2"],
            "var a = 1; print a = 3; print a;": ["3", "3"],
            "if (nil) print 1; else print 2;": ["2"],
            "if (0) print 1;": ["1"],
            "if (false) print 1;": [],
            "var i = 0; while (i < 3) { print i; i = i + 1; }": ["0", "1", "2"],
            "for (var i = 0; i < 3; i = i + 1) print i;": ["0", "1", "2"],
            "var x = 1; { var y = x + 1; print y; }": ["2"],
            "var a = 1; { var a = 2; print a; } print a;": ["2", "1"],
            "fun f() {} print f();": ["nil"],
            "fun f() { return; } print f();": ["nil"],
            "fun add(a, b) { return a + b; } print add(1, 2);": ["3"],
            "fun fib(n) { if (n < 2) return n; return fib(n - 1) + fib(n - 2); } print fib(15);": ["610"],
        }
        for case, expected in cases.items():
            lines, handler = run(case)
            self.assertFalse(handler.had_error or handler.had_runtime_error, case)
            self.assertEqual(expected, lines, case)

    def test_return_unwinds(self):
        source = """
        fun find() {
            for (var i = 0; i < 10; i = i + 1) {
                while (true) {
                    if (i == 3) return i;
                    print i;
                    return nil;
                }
            }
            print "unreachable";
        }
        print find();
        """
        lines, __ = run(source)
        self.assertEqual(["0", "nil"], lines)

        source = """
        fun find() {
            for (var i = 0; i < 10; i = i + 1) {
                if (i == 3) return i;
                print i;
            }
            print "unreachable";
        }
        print find();
        """
        lines, __ = run(source)
        self.assertEqual(["0", "1", "2", "3"], lines)

    def test_globals_persist(self):
        sess = session()
        sess.run("var a = 1; fun f() { return a + 1; }")
        sess.run("print f();")
        self.assertEqual(["2"], output(sess))


class ClosureTestCase(unittest.TestCase):

    def test_counters(self):
        source = """
        fun makeCounter() {
            var count = 0;
            fun counter() {
                count = count + 1;
                return count;
            }
            return counter;
        }
        var a = makeCounter();
        var b = makeCounter();
        print a();
        print a();
        print b();
        print a();
        """
        lines, __ = run(source)
        self.assertEqual(["1", "2", "1", "3"], lines)

    def test_static_scope(self):
        source = """
        var a = "global";
        {
            fun show() {
                print a;
            }
            show();
            var a = "local";
            show();
        }
        """
        lines, handler = run(source)
        self.assertFalse(handler.had_error)
        self.assertEqual(["global", "global"], lines)

    def test_self_reference_is_static_error(self):
        lines, handler = run("var x = 1; { var x = x; print x; }")
        self.assertTrue(handler.had_error)
        self.assertEqual([], lines)

    def test_shared_environment(self):
        source = """
        var get;
        var set;
        fun make() {
            var value = "before";
            fun getter() { return value; }
            fun setter(v) { value = v; }
            get = getter;
            set = setter;
        }
        make();
        print get();
        set("after");
        print get();
        """
        lines, __ = run(source)
        self.assertEqual(["before", "after"], lines)


class ClassTestCase(unittest.TestCase):

    def test_fields_and_methods(self):
        source = """
        class A {
            m() { return "method"; }
        }
        var a = A();
        print a.m();
        a.m = "field";
        print a.m;
        print A().m();
        """
        lines, __ = run(source)
        self.assertEqual(["method", "field", "method"], lines)

    def test_bound_method(self):
        source = """
        class A {
            init() { this.v = 1; }
            get() { return this.v; }
        }
        var g = A().get;
        print g();
        """
        lines, __ = run(source)
        self.assertEqual(["1"], lines)

    def test_initializer(self):
        source = """
        class P {
            init(x) {
                this.x = 1;
                if (x) return;
                this.x = 2;
            }
        }
        var p = P(true);
        print p.x;
        print P(false).x;
        print p.init(false) == p;
        print p.x;
        """
        lines, handler = run(source)
        self.assertFalse(handler.had_error or handler.had_runtime_error)
        self.assertEqual(["1", "2", "true", "2"], lines)

    def test_initializer_return_value_is_static_error(self):
        lines, handler = run("class P { init() { return 1; } } print P();")
        self.assertTrue(handler.had_error)
        self.assertEqual([], lines)

    def test_inheritance(self):
        source = """
        class A {
            method() { print "A method"; }
            name() { return "A"; }
            describe() { print this.name(); }
        }
        class B < A {
            method() {
                print "B method";
                super.method();
            }
            name() { return "B"; }
        }
        var b = B();
        b.method();
        b.describe();
        """
        lines, __ = run(source)
        self.assertEqual(["B method", "A method", "B"], lines)

    def test_super_binds_this(self):
        source = """
        class A { greet() { return "hi " + this.name; } }
        class B < A { greet() { return super.greet() + "!"; } }
        class C < B {}
        var c = C();
        c.name = "bob";
        print c.greet();
        """
        lines, __ = run(source)
        self.assertEqual(["hi bob!"], lines)

    def test_inherited_initializer(self):
        lines, __ = run("class A { init(x) { this.x = x; } } class B < A {} print B(5).x;")
        self.assertEqual(["5"], lines)

        __, handler = run("class A { init(x) { this.x = x; } } class B < A {} B();")
        self.assertEqual(["Expected 1 arguments but got 0.\n[line 1]"], handler.reports)

    def test_class_refers_to_itself(self):
        lines, __ = run("class A { make() { return A(); } } print A().make();")
        self.assertEqual(["A instance"], lines)

    def test_instances_are_independent(self):
        lines, __ = run("class A {} var a = A(); var b = A(); a.x = 1; b.x = 2; print a.x; print a == b; print a == a;")
        self.assertEqual(["1", "false", "true"], lines)


if __name__ == '__main__':
    unittest.main()
