"""
Database initialization script
Creates all tables or drops and recreates them
"""
from loguru import logger

from webstore.config import setup_logging
from webstore.utils.database import create_tables, drop_tables


def init_database():
    """Initialize the database by creating all tables"""
    logger.info("Creating database tables...")
    create_tables()
    logger.info("Database tables created successfully!")


def reset_database():
    """Reset the database by dropping and recreating all tables"""
    logger.info("Dropping existing tables...")
    drop_tables()
    logger.info("Creating new tables...")
    create_tables()
    logger.info("Database reset successfully!")


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Database management script")
    parser.add_argument("--init", action="store_true", help="Initialize database")
    parser.add_argument("--reset", action="store_true", help="Reset database")

    args = parser.parse_args()
    setup_logging("init_db")

    if args.reset:
        reset_database()
    elif args.init:
        init_database()
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
