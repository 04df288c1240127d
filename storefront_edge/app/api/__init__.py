"""
API package containing versioned routes.

Only ``v1`` exists.  The edge layer itself is middleware, not a route;
the API exposes operational endpoints for the deployment.
"""
