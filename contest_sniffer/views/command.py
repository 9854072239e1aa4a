import logging

from flask import Blueprint, current_app, request

from contest_sniffer.services.formatter import ERROR_MESSAGE, render_contests
from contest_sniffer.services.pipeline import PipelineError
from contest_sniffer.views.api import get_pipeline

logger = logging.getLogger(__name__)

command_bp = Blueprint('command', __name__)

_TEXT_HEADERS = {'Content-Type': 'text/plain; charset=utf-8'}


@command_bp.route('/oi')
def oi():
    """Chat-command endpoint, e.g. ``/oi?p=cf&d=today&s=upcoming&n=3``."""
    config = current_app.extensions['sniffer_config']
    try:
        result = get_pipeline().run(request.args)
    except PipelineError as e:
        logger.error(f"Error occurs when fetching contests: {e}")
        return ERROR_MESSAGE, 502, _TEXT_HEADERS

    return render_contests(result, config), 200, _TEXT_HEADERS
