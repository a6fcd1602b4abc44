"""Request dispatch: matching, middleware, handler invocation, and errors."""
