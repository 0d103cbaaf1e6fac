"""Core domain — models, services, resolvers and use cases."""
