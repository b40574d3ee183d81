"""Business-logic handlers following the invocation contract."""
