"""
Service layer.

Each interceptor is a class with an async ``handle(EdgeRequest)``
method returning ``Intercepted`` or ``PassThrough``.  Services get
their settings (and, in tests, an httpx transport) through the
constructor and keep no state between requests.
"""
