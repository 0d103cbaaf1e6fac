"""Persistence — on-disk writes owned by the resolver."""
