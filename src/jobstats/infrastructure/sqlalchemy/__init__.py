"""SQLAlchemy Core backed statistics storage."""
