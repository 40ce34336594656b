"""
Job Board Admin
Role-based administration front-end for a job board REST API.

Architecture:
- External REST API: owns users, vacancies and applications (source of truth)
- Session Store: cached token + user profile, persisted to a local JSON file
- Rule engine: advisory apply/capacity checks before any mutating call
"""

__version__ = "1.0.0"
