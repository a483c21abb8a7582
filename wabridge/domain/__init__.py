"""
Domain layer: enums, collaborator interfaces and models.
"""
