"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies following the Dependency Inversion Principle.

Modules:
    - payments: Payment ledger abstraction (Stripe products and prices)
    - media: Image hosting abstraction (S3 via django-storages, local filesystem)
    - email: Transactional email abstraction (Mailgun, mock)

This package enables:
    - Easy testing with mock implementations
    - Switching between providers without code changes
"""
