"""Builtin translation vocabularies shipped as JSON resources."""
