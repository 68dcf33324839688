"""
Bank Feed MCP: paginated bank transaction queries over the Model Context Protocol.
"""

__version__ = "0.1.0"
