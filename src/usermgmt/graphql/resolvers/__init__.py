"""Resolver functions behind the root GraphQL query and mutation types."""
