"""Database initialization script."""

from src.garage.core.services import DbManageService


def init_db() -> list[str]:
    """Create all database tables."""
    return DbManageService().create_all()


if __name__ == "__main__":
    init_db()
