"""
Infrastructure Package
======================

Adapters the storefront talks to through small interfaces.

Modules:
    - payments: payment provider (simulated gateway)
    - storage: file storage for exports (local filesystem or S3/MinIO)
    - container: lazily built services and adapters
"""
