"""
Pydantic schema definitions.

``preview`` validates rows read from the data store; ``health``
describes the health endpoint payload.
"""
