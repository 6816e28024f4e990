"""GraphQL API for Inkwell."""

from .schema import build_graphql_router, schema

__all__ = ["build_graphql_router", "schema"]
