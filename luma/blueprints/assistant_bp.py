"""
Assistant Blueprint - scripted learning assistant.

Endpoints:
    GET  /api/v1/assistant/suggestions  - greeting + suggested questions
    POST /api/v1/assistant/messages     - { message } → user/assistant pair
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from luma.auth import require_profile
from luma.services import assistant_service
from luma.utils.errors import E, api_error

logger = logging.getLogger(__name__)

assistant_bp = Blueprint("assistant", __name__, url_prefix="/api/v1/assistant")


@assistant_bp.route("/suggestions", methods=["GET"])
@require_profile
def suggestions():
    return jsonify({
        "greeting": assistant_service.greeting().to_dict(),
        "suggestions": assistant_service.suggestions(),
    })


@assistant_bp.route("/messages", methods=["POST"])
@require_profile
def send_message():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return api_error(E.VALIDATION_INVALID, "Request body must be a JSON object")
    message = data.get("message")
    if message is not None and not isinstance(message, str):
        return api_error(E.VALIDATION_INVALID, "message must be a string")

    delay = current_app.config.get("ASSISTANT_RESPONSE_DELAY_SECONDS", 0.0)
    user_msg, reply = assistant_service.reply(message, delay_seconds=delay)
    return jsonify({"messages": [user_msg.to_dict(), reply.to_dict()]})
