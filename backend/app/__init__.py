"""
Greeter Backend - Application Package Initializer
===================================================

What: An HTTP service answering GET /hello and GET /goodbye with fixed text.

Layout:

    ┌─────────────────────────────────────┐
    │      server.py (process entry)      │  ← CLI flags, socket bind, exit codes
    ├─────────────────────────────────────┤
    │      main.py (application factory)  │  ← middleware, handlers, routes
    ├─────────────────────────────────────┤
    │      routes/ (API layer)            │  ← the route table
    ├─────────────────────────────────────┤
    │      config.py / exceptions.py      │  ← settings and error types
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
