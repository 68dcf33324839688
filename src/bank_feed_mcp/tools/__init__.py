"""
MCP tools for bank transaction queries.
"""
