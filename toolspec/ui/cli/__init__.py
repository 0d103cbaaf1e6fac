"""CLI command groups registered on the top-level ``toolspec`` group."""
