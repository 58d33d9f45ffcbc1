"""DB Layer — declarative base shared by models and alembic."""
