import logging

from flask import Blueprint, current_app, jsonify, request

from contest_sniffer.services.pipeline import ContestPipeline, PipelineError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')


def get_pipeline() -> ContestPipeline:
    """Return the pipeline built by ``create_app`` for this application."""
    return current_app.extensions['contest_pipeline']


@api_bp.route('/contests')
def contests():
    try:
        result = get_pipeline().run(request.args)
    except PipelineError as e:
        logger.error(f"Contest query failed: {e}")
        return jsonify({'error': 'Contest query failed'}), 502

    return jsonify({
        'count': len(result),
        'contests': [c.to_dict() for c in result],
    })
