"""
Domain layer: entities, repository contracts and domain services.
"""
