"""Front end of the lox interpreter: tokens, scanner, AST nodes, parser and AST printer."""
