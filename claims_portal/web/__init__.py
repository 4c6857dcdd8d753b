"""
Web Layer - Server Rendered Portal

The customer-facing intake form, rendered with Jinja2.
"""
