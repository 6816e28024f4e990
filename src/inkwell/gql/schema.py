"""Strawberry schema and the FastAPI router that serves it."""

import strawberry
from strawberry.fastapi import GraphQLRouter

from inkwell.core.settings import settings

from .context import get_context
from .mutations import Mutation
from .queries import Query
from .subscriptions import Subscription

schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)


def build_graphql_router() -> GraphQLRouter:
    """Return a router serving the schema over HTTP and WebSocket."""
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphql_ide_enabled else None,
    )
