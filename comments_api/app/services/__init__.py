"""
Service layer.

Services hold the business rules for a domain and talk to the storage
backend, so API handlers stay thin.
"""
