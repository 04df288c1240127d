"""
Core building blocks shared by the services: settings, logging, the
request/result model and the dispatch middleware.
"""
