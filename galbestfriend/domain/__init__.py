"""
Domain layer
Models, services and ports with no I/O of their own
"""
