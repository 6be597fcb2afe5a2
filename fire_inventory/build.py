#!/usr/bin/env python3
"""
Build orchestrator for the fire inventory maintenance back end
Creates the tables and optionally seeds debug data
"""

from fire_inventory import create_app, db
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.build")


def build_models():
    """Create every table registered with SQLAlchemy"""
    logger.info("Creating database tables")
    db.create_all()
    logger.info("Database tables created")


def build_database(enable_debug_data=True, app=None):
    """
    Main build orchestrator

    Args:
        enable_debug_data (bool): Whether to insert debug data (default: True)
        app: Application to build against; a new one is created when omitted
    """
    app = app or create_app()

    with app.app_context():
        logger.info(f"Starting database build (debug data: {enable_debug_data})")
        build_models()

        if enable_debug_data:
            from fire_inventory.debug.add_debug_data import insert_debug_data
            insert_debug_data()

        logger.info("Database build completed successfully")
