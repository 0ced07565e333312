"""Application layer: DTOs, interfaces, and pure workflow services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, email, notifications).
"""
