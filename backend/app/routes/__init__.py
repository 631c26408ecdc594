# Routes package init
"""
Greeter Backend - API Routes Package
======================================

Route Inventory:
    - greetings.py:  GET /hello
                     GET /goodbye

Routes are thin: they return a constant string and leave status codes,
content type and unmatched paths to the framework.
"""
