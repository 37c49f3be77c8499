"""Chainable GraphQL sdk generator for Python."""
