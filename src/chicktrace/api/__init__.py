"""
FastAPI REST API for the consumer trace page

Provides:
- Asset trace lookup (snapshot + provenance timeline)
- Health checks
"""
