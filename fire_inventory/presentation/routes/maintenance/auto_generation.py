"""
Maintenance Auto-Generation Routes

Interactive trigger for maintenance generation and the coverage overview.
"""
from flask import Blueprint, request, jsonify

from fire_inventory import db
from fire_inventory.buisness.maintenance.generation import GenerationMode, MaintenanceGenerator
from fire_inventory.utils.logging_sanitizer import sanitize_exception_message
from fire_inventory.logger import get_logger

logger = get_logger("fire_inventory.routes.maintenance.auto_generation")

auto_generation_bp = Blueprint('auto_generation', __name__)


@auto_generation_bp.route('/auto-generate', methods=['POST'])
def auto_generate():
    """API endpoint: Generate pending maintenance records"""
    data = request.get_json(silent=True) or {}

    try:
        mode = GenerationMode.parse(data.get('mode'))
    except ValueError as e:
        return jsonify({"success": False, "level": "error", "message": str(e)}), 400

    logger.info(f"Interactive maintenance generation requested ({mode.value})")

    try:
        result = MaintenanceGenerator().generate(mode)
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error during maintenance generation: {e}", exc_info=True)
        return jsonify({
            "success": False,
            "level": "error",
            "message": "Maintenance generation failed",
            "error": sanitize_exception_message(e),
        }), 500

    level, message = result.notification()
    return jsonify({
        "success": True,
        "level": level,
        "message": message,
        "mode": mode.value,
        **result.to_dict(),
        "equipment_without_template": result.equipment_without_template,
    })


@auto_generation_bp.route('/auto-generate/coverage')
def auto_generate_coverage():
    """API endpoint: Which equipment has an applicable template"""
    return jsonify(MaintenanceGenerator().coverage())
