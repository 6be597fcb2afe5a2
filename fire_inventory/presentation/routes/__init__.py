"""
Routes package for the fire inventory maintenance back end
Organized in a tiered structure mirroring the business layer
"""

from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .maintenance.auto_generation import auto_generation_bp
    from .scheduling.cron_jobs import cron_bp

    app.register_blueprint(auto_generation_bp, url_prefix='/maintenance')
    app.register_blueprint(cron_bp, url_prefix='/cron')

    logger.info("Route blueprints registered")
