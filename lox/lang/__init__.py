"""Back end of the lox interpreter: error handling, resolution, evaluation and session control."""
