"""Domain models and errors.

Plain data structures (Pydantic v2). The domain knows nothing about HTTP,
the CLI or the MCP runtime.
"""
